from pydantic import BaseModel
from typing import Any, Optional, Generic, TypeVar

T = TypeVar('T')


class Envelope(BaseModel, Generic[T]):
    success: bool
    data: Optional[T] = None
    message: Optional[str] = None
    error: Optional[Any] = None


def fail(message: str, error: Any = None) -> Envelope:
    return Envelope(success=False, data=None, message=message, error=error)
