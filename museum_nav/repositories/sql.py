"""SQLAlchemy-backed repository (persistent mode)."""
import logging
from typing import Any, List, Optional, Type

from sqlalchemy import func, inspect, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from museum_nav.core.db import Base
from museum_nav.core.exceptions import DuplicateKeyError
from museum_nav.repositories.base import Record, Repository

logger = logging.getLogger(__name__)


class SqlAlchemyRepository(Repository):
    """
    Generic repository over one ORM model.

    Each call runs in its own session; uniqueness is enforced by the database
    and surfaced as DuplicateKeyError.
    """

    def __init__(self, model: Type[Base], session_factory: async_sessionmaker[AsyncSession]):
        self.model = model
        self.session_factory = session_factory
        self._columns = [attr.key for attr in inspect(model).mapper.column_attrs]

    def _to_record(self, obj) -> Record:
        return {key: getattr(obj, key) for key in self._columns}

    def _violated_field(self, message: str) -> Optional[str]:
        # sqlite: "UNIQUE constraint failed: users.email"; postgres names the index
        unique = [c.name for c in self.model.__table__.columns if c.unique]
        for name in unique:
            if f".{name}" in message or f"_{name}" in message or f"({name})" in message:
                return name
        if self.id_field in message or "pkey" in message or "PRIMARY" in message:
            return self.id_field
        return None

    async def find_by_id(self, record_id: int) -> Optional[Record]:
        async with self.session_factory() as session:
            obj = await session.get(self.model, record_id)
            return self._to_record(obj) if obj is not None else None

    async def find_one(self, **criteria: Any) -> Optional[Record]:
        async with self.session_factory() as session:
            stmt = select(self.model).filter_by(**criteria).limit(1)
            result = await session.execute(stmt)
            obj = result.scalar_one_or_none()
            return self._to_record(obj) if obj is not None else None

    async def list_all(self) -> List[Record]:
        async with self.session_factory() as session:
            stmt = select(self.model).order_by(getattr(self.model, self.id_field))
            result = await session.execute(stmt)
            return [self._to_record(obj) for obj in result.scalars().all()]

    async def create(self, record: Record) -> Record:
        values = {k: v for k, v in record.items() if k in self._columns}
        async with self.session_factory() as session:
            obj = self.model(**values)
            session.add(obj)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                logger.info(
                    f"Duplicate key inserting into {self.model.__tablename__}",
                    extra={"table": self.model.__tablename__, "error": str(e.orig)},
                )
                field = self._violated_field(str(e.orig))
                raise DuplicateKeyError(field, record.get(field) if field else None)
            await session.refresh(obj)
            return self._to_record(obj)

    async def update(self, record_id: int, changes: Record) -> Optional[Record]:
        async with self.session_factory() as session:
            obj = await session.get(self.model, record_id)
            if obj is None:
                return None
            for field, value in changes.items():
                if field in self._columns:
                    setattr(obj, field, value)
            await session.commit()
            await session.refresh(obj)
            return self._to_record(obj)

    async def delete(self, record_id: int) -> bool:
        async with self.session_factory() as session:
            obj = await session.get(self.model, record_id)
            if obj is None:
                return False
            await session.delete(obj)
            await session.commit()
            return True

    async def next_id(self) -> int:
        async with self.session_factory() as session:
            result = await session.execute(select(func.max(getattr(self.model, self.id_field))))
            return (result.scalar() or 0) + 1
