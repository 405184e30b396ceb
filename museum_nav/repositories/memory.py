"""In-memory repository used in mock mode and in tests."""
import copy
from typing import Any, Dict, Iterable, List, Optional

from museum_nav.core.exceptions import DuplicateKeyError
from museum_nav.repositories.base import Record, Repository


class InMemoryRepository(Repository):
    """
    Dict-backed store.

    Records are deep-copied on the way in and out so callers never mutate
    stored state by accident. Concurrent writers race last-write-wins.
    """

    def __init__(self, records: Optional[Iterable[Record]] = None, unique_fields: Iterable[str] = ()):
        self.unique_fields = tuple(unique_fields)
        self._records: Dict[int, Record] = {}
        for record in records or ():
            self._records[record[self.id_field]] = copy.deepcopy(record)

    async def find_by_id(self, record_id: int) -> Optional[Record]:
        record = self._records.get(record_id)
        return copy.deepcopy(record) if record is not None else None

    async def find_one(self, **criteria: Any) -> Optional[Record]:
        for record in self._records.values():
            if all(record.get(k) == v for k, v in criteria.items()):
                return copy.deepcopy(record)
        return None

    async def list_all(self) -> List[Record]:
        return [copy.deepcopy(r) for r in self._records.values()]

    async def create(self, record: Record) -> Record:
        record_id = record[self.id_field]
        if record_id in self._records:
            raise DuplicateKeyError(self.id_field, record_id)
        for field in self.unique_fields:
            value = record.get(field)
            if any(r.get(field) == value for r in self._records.values()):
                raise DuplicateKeyError(field, value)
        self._records[record_id] = copy.deepcopy(record)
        return copy.deepcopy(record)

    async def update(self, record_id: int, changes: Record) -> Optional[Record]:
        record = self._records.get(record_id)
        if record is None:
            return None
        record.update(copy.deepcopy(changes))
        return copy.deepcopy(record)

    async def delete(self, record_id: int) -> bool:
        return self._records.pop(record_id, None) is not None

    async def next_id(self) -> int:
        return max(self._records, default=0) + 1

    def __len__(self) -> int:
        return len(self._records)
