"""
Repository interface shared by the in-memory (mock) and SQLAlchemy stores.

Records are plain dicts keyed by column name. Services depend only on this
interface, never on which store is configured.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

Record = Dict[str, Any]


class Repository(ABC):
    id_field: str = "id"

    @abstractmethod
    async def find_by_id(self, record_id: int) -> Optional[Record]:
        ...

    @abstractmethod
    async def find_one(self, **criteria: Any) -> Optional[Record]:
        """First record whose fields equal every given criterion."""

    @abstractmethod
    async def list_all(self) -> List[Record]:
        ...

    @abstractmethod
    async def create(self, record: Record) -> Record:
        """
        Insert a record carrying its own id.

        Raises:
            DuplicateKeyError: If the id or a unique field is already taken
        """

    @abstractmethod
    async def update(self, record_id: int, changes: Record) -> Optional[Record]:
        """Apply changes; returns the updated record or None if absent."""

    @abstractmethod
    async def delete(self, record_id: int) -> bool:
        ...

    @abstractmethod
    async def next_id(self) -> int:
        """Highest id + 1. Not reserved: callers must handle DuplicateKeyError."""
