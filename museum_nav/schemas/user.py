from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class UserRead(BaseModel):
    """Outward view of a user; credential fields are never part of it."""
    id: int
    username: str
    email: str
    role: str = "user"
    preferences: List[str] = []
    favourites: List[int] = []
    personalization_available: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LoginResult(BaseModel):
    user: UserRead
    token: str
