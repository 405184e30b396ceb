"""
User Service - profile, favourites and preference management
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from museum_nav.repositories.base import Record, Repository


def to_public(user: Optional[Record]) -> Optional[Dict[str, Any]]:
    """Strip credential material before a user record leaves the service layer."""
    if user is None:
        return None
    return {k: v for k, v in user.items() if k != "hashed_password"}


class UserService:
    """Manages user profile state other than credentials"""

    def __init__(self, users: Repository):
        self.users = users

    async def get_by_id(self, user_id: int) -> Optional[Record]:
        return await self.users.find_by_id(user_id)

    async def add_favorite(self, user_id: int, exhibit_id: int) -> Optional[Record]:
        """
        Add an exhibit to the user's favourites (no duplicates)

        Returns:
            Updated user, or None if the user does not exist
        """
        user = await self.users.find_by_id(user_id)
        if user is None:
            return None
        favourites = list(user.get("favourites") or [])
        if exhibit_id in favourites:
            return user
        favourites.append(exhibit_id)
        return await self._save(user_id, {"favourites": favourites})

    async def remove_favorite(self, user_id: int, exhibit_id: int) -> Optional[Record]:
        user = await self.users.find_by_id(user_id)
        if user is None:
            return None
        favourites = [f for f in user.get("favourites") or [] if f != exhibit_id]
        return await self._save(user_id, {"favourites": favourites})

    async def update_preferences(self, user_id: int, preferences: List[str]) -> Optional[Record]:
        """Replace the user's interests; a non-empty list enables personalization."""
        user = await self.users.find_by_id(user_id)
        if user is None:
            return None
        cleaned = [p.strip() for p in preferences if isinstance(p, str) and p.strip()]
        return await self._save(user_id, {
            "preferences": cleaned,
            "personalization_available": bool(cleaned),
        })

    async def _save(self, user_id: int, changes: Record) -> Optional[Record]:
        changes["updated_at"] = datetime.now(timezone.utc)
        return await self.users.update(user_id, changes)
