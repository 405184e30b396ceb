from dataclasses import dataclass
from typing import Any, Dict

import bcrypt


@dataclass(frozen=True)
class Principal:
    """Authenticated identity, produced once from a verified token."""
    user_id: int
    username: str
    role: str = "user"

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "Principal":
        return cls(
            user_id=int(claims["sub"]),
            username=claims.get("username") or "",
            role=claims.get("role") or "user",
        )

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def hash_password(password: str, rounds: int = 10) -> str:
    """Hash a password with a per-password bcrypt salt."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Verify password against stored bcrypt hash."""
    if not hashed or not (hashed.startswith("$2b$") or hashed.startswith("$2a$")):
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False
