from typing import Any, List

from pydantic import BaseModel


class SyncFailure(BaseModel):
    operation: Any
    reason: str


class SyncDetails(BaseModel):
    successful: List[Any] = []
    failed: List[SyncFailure] = []


class SyncResult(BaseModel):
    conflicts: List[Any] = []
    successful: int = 0
    failed: int = 0
    details: SyncDetails = SyncDetails()
