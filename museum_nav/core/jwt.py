"""JWT issue / verify / revoke for session tokens"""
import logging
import time
import uuid
from typing import Any, Dict, Optional

import jwt

from museum_nav.core.exceptions import TokenInvalidError
from museum_nav.core.revocation import RevocationStore
from museum_nav.core.security import Principal

logger = logging.getLogger(__name__)


class TokenService:
    def __init__(
        self,
        secret: str,
        revocations: RevocationStore,
        algorithm: str = "HS256",
        ttl_seconds: int = 7 * 24 * 3600,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.ttl_seconds = ttl_seconds
        self.revocations = revocations

    def _build_payload(self, principal: Principal, ttl_seconds: int) -> Dict[str, Any]:
        now = int(time.time())
        return {
            "sub": str(principal.user_id),
            "username": principal.username,
            "role": principal.role,
            "iat": now,
            "exp": now + ttl_seconds,
            "jti": uuid.uuid4().hex,
        }

    def issue(self, principal: Principal, ttl_seconds: Optional[int] = None) -> str:
        payload = self._build_payload(principal, ttl_seconds or self.ttl_seconds)
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> Dict[str, Any]:
        """Verify signature and expiry; raises TokenInvalidError."""
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.PyJWTError as e:
            logger.debug(f"Token rejected: {e}")
            raise TokenInvalidError()

    async def revoke(self, token: Optional[str]) -> None:
        """Revoke until natural expiry. Malformed tokens are ignored."""
        if not token:
            return
        try:
            claims = jwt.decode(token, options={"verify_signature": False})
        except jwt.PyJWTError:
            logger.debug("Ignoring revocation of undecodable token")
            return
        exp = claims.get("exp")
        if not isinstance(exp, (int, float)):
            return
        await self.revocations.add(token, int(exp))

    async def is_revoked(self, token: Optional[str]) -> bool:
        if not token:
            return False
        expires_at = await self.revocations.get_expiry(token)
        if expires_at is None:
            return False
        if expires_at <= int(time.time()):
            # already expired, so no longer needs to be tracked
            await self.revocations.discard(token)
            return False
        return True
