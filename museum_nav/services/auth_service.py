"""
Auth Service - registration, login, logout and token authentication
"""
import asyncio
import logging
import random
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from museum_nav.core.credentials import validate_email, validate_password, validate_username
from museum_nav.core.exceptions import (
    AuthenticationError,
    ConflictError,
    DuplicateKeyError,
    ErrorCode,
    NotFoundError,
    ValidationError,
)
from museum_nav.core.jwt import TokenService
from museum_nav.core.security import Principal, hash_password, verify_password
from museum_nav.repositories.base import Record, Repository
from museum_nav.services.user_service import to_public

logger = logging.getLogger(__name__)

UNIQUE_USER_FIELDS = ("username", "email")


def _fallback_user_id() -> int:
    # millisecond clock plus three random digits
    return int(time.time() * 1000) * 1000 + random.randint(0, 999)


class AuthService:
    """Credential checks, user creation and session token lifecycle"""

    def __init__(
        self,
        users: Repository,
        tokens: TokenService,
        bcrypt_rounds: int = 10,
        id_allocation_attempts: int = 3,
    ):
        self.users = users
        self.tokens = tokens
        self.bcrypt_rounds = bcrypt_rounds
        self.id_allocation_attempts = id_allocation_attempts

    async def register(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a new user account

        Args:
            payload: Request body with username, email and password

        Returns:
            Created user without credential material

        Raises:
            ValidationError: Missing fields or policy violations
            ConflictError: Username or email already taken
        """
        username = payload.get("username")
        email = payload.get("email")
        password = payload.get("password")

        if not username or not email or not password:
            raise ValidationError("Username, email, and password are required")

        # policy order is username, email, password; the first failure wins
        for check, value in (
            (validate_username, username),
            (validate_email, email),
            (validate_password, password),
        ):
            result = check(value)
            if not result.valid:
                raise ValidationError(result.reason)

        if await self._find_existing(username, email) is not None:
            raise ConflictError("User already exists")

        hashed = await asyncio.to_thread(hash_password, password, self.bcrypt_rounds)
        now = datetime.now(timezone.utc)
        record = {
            "username": username,
            "email": email,
            "hashed_password": hashed,
            "role": "user",
            "preferences": [],
            "favourites": [],
            "personalization_available": False,
            "created_at": now,
            "updated_at": now,
        }
        created = await self._insert_with_allocated_id(record)

        logger.info(
            f"User registered: {username}",
            extra={"user_id": created["id"], "username": username},
        )
        return to_public(created)

    async def _find_existing(self, username: str, email: str) -> Optional[Record]:
        existing = await self.users.find_one(username=username)
        if existing is None:
            existing = await self.users.find_one(email=email)
        return existing

    async def _insert_with_allocated_id(self, record: Record) -> Record:
        """
        Insert with max(id)+1, retrying on id collisions from concurrent
        registrations before falling back to a time-based id.
        """
        for attempt in range(1, self.id_allocation_attempts + 1):
            record["id"] = await self.users.next_id()
            try:
                return await self.users.create(record)
            except DuplicateKeyError as e:
                if e.field in UNIQUE_USER_FIELDS:
                    raise ConflictError("User already exists")
                logger.warning(
                    f"User id {record['id']} already taken (attempt {attempt})",
                    extra={"attempt": attempt, "user_id": record["id"]},
                )

        record["id"] = _fallback_user_id()
        try:
            return await self.users.create(record)
        except DuplicateKeyError:
            raise ConflictError("User already exists")

    async def login(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Verify credentials and issue a session token

        Returns:
            {"user": public user record, "token": signed JWT}

        Raises:
            ValidationError: Missing fields or malformed username
            AuthenticationError: Unknown user or wrong password (same message)
        """
        username = payload.get("username")
        password = payload.get("password")

        if not username or not password:
            raise ValidationError("Username and password are required")
        if not isinstance(password, str):
            raise ValidationError("Password must be a string")

        result = validate_username(username)
        if not result.valid:
            raise ValidationError(result.reason)

        user = await self.users.find_one(username=username)
        if user is None:
            logger.info("Login failed: unknown user", extra={"username": username})
            raise AuthenticationError("Invalid credentials", ErrorCode.INVALID_CREDENTIALS)

        matches = await asyncio.to_thread(verify_password, password, user.get("hashed_password") or "")
        if not matches:
            logger.info("Login failed: wrong password", extra={"username": username})
            raise AuthenticationError("Invalid credentials", ErrorCode.INVALID_CREDENTIALS)

        principal = Principal(user_id=user["id"], username=user["username"], role=user.get("role") or "user")
        token = self.tokens.issue(principal)
        logger.info(f"User logged in: {username}", extra={"user_id": user["id"]})
        return {"user": to_public(user), "token": token}

    async def logout(self, token: Optional[str]) -> None:
        await self.tokens.revoke(token)

    async def authenticate(self, token: Optional[str]) -> Principal:
        """
        Resolve a request token to a Principal

        Raises:
            AuthenticationError: Missing (401 "Access token required") or revoked token
            TokenInvalidError: Bad signature or expired token
        """
        if not token:
            raise AuthenticationError("Access token required", ErrorCode.MISSING_TOKEN)
        if await self.tokens.is_revoked(token):
            raise AuthenticationError("Token revoked", ErrorCode.TOKEN_REVOKED)
        claims = self.tokens.decode(token)
        return Principal.from_claims(claims)

    async def get_user(self, user_id: int) -> Dict[str, Any]:
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return to_public(user)
