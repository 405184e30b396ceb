from .base import Record, Repository
from .memory import InMemoryRepository
from .sql import SqlAlchemyRepository

__all__ = ["Record", "Repository", "InMemoryRepository", "SqlAlchemyRepository"]
