"""
Exhibit Service - exhibit lookup and visitor ratings
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from museum_nav.core.geo import round_half_up
from museum_nav.repositories.base import Record, Repository

logger = logging.getLogger(__name__)


class ExhibitService:
    """Exhibit catalogue and ratings"""

    def __init__(self, exhibits: Repository):
        self.exhibits = exhibits

    async def get_by_id(self, exhibit_id: int) -> Optional[Record]:
        return await self.exhibits.find_by_id(exhibit_id)

    async def list_all(self) -> List[Record]:
        return await self.exhibits.list_all()

    async def rate(self, exhibit_id: int, user_id: int, rating: float) -> Optional[Record]:
        """
        Record a user's rating, replacing any earlier one

        Args:
            exhibit_id: Exhibit ID
            user_id: Rating user's ID
            rating: Value between 0 and 5

        Returns:
            Updated exhibit, or None if it does not exist
        """
        exhibit = await self.exhibits.find_by_id(exhibit_id)
        if exhibit is None:
            return None

        ratings = dict(exhibit.get("ratings") or {})
        ratings[str(user_id)] = rating
        values = [float(v) for v in ratings.values()]
        average = round_half_up(sum(values) / len(values), 1) if values else 0

        updated = await self.exhibits.update(exhibit_id, {
            "ratings": ratings,
            "average_rating": average,
            "updated_at": datetime.now(timezone.utc),
        })
        logger.info(
            f"Exhibit {exhibit_id} rated by user {user_id}",
            extra={"exhibit_id": exhibit_id, "user_id": user_id, "average_rating": average},
        )
        return updated
