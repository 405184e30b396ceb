"""
Sync Service - replays operations queued by the offline client
"""
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from museum_nav.core.exceptions import MuseumNavException, NotFoundError
from museum_nav.core.validation import validate_positive_id, validate_rating
from museum_nav.services.exhibit_service import ExhibitService
from museum_nav.services.user_service import UserService

logger = logging.getLogger(__name__)


class SyncOperation:
    RATING = "rating"
    ADD_FAVORITE = "add_favorite"
    REMOVE_FAVORITE = "remove_favorite"


UNKNOWN_OPERATION = "Unknown operation type"

Handler = Callable[[Optional[int], Dict[str, Any]], Awaitable[None]]


def empty_sync_result() -> Dict[str, Any]:
    return {
        "conflicts": [],
        "successful": 0,
        "failed": 0,
        "details": {"successful": [], "failed": []},
    }


class SyncService:
    """
    Applies offline operations one at a time, in order.

    A failing operation is recorded and processing continues; nothing that
    already succeeded is rolled back. Conflict detection is not performed,
    so ``conflicts`` is always empty.
    """

    def __init__(self, exhibits: ExhibitService, users: UserService):
        self.exhibits = exhibits
        self.users = users
        self._handlers: Dict[str, Handler] = {
            SyncOperation.RATING: self._rate,
            SyncOperation.ADD_FAVORITE: self._add_favorite,
            SyncOperation.REMOVE_FAVORITE: self._remove_favorite,
        }

    async def synchronize(self, user_id: Optional[int], operations: List[Any]) -> Dict[str, Any]:
        if not operations:
            return empty_sync_result()

        successful: List[Any] = []
        failed: List[Dict[str, Any]] = []

        for operation in operations:
            op_type = operation.get("operation_type") if isinstance(operation, dict) else None
            handler = self._handlers.get(op_type) if isinstance(op_type, str) else None
            if handler is None:
                failed.append({"operation": operation, "reason": UNKNOWN_OPERATION})
                continue
            try:
                await handler(user_id, operation)
            except MuseumNavException as e:
                failed.append({"operation": operation, "reason": e.message})
                continue
            except Exception as e:
                logger.error(f"Sync operation {op_type} failed: {e}", exc_info=True)
                failed.append({"operation": operation, "reason": str(e)})
                continue
            successful.append(operation)

        logger.info(
            f"Synchronized {len(successful)}/{len(operations)} operations",
            extra={"user_id": user_id, "successful": len(successful), "failed": len(failed)},
        )
        return {
            "conflicts": [],
            "successful": len(successful),
            "failed": len(failed),
            "details": {"successful": successful, "failed": failed},
        }

    @staticmethod
    def _require_user(user_id: Optional[int]) -> int:
        if user_id is None:
            raise NotFoundError("User not found")
        return user_id

    async def _rate(self, user_id: Optional[int], operation: Dict[str, Any]) -> None:
        user_id = self._require_user(user_id)
        exhibit_id = validate_positive_id(operation.get("exhibit_id"), "exhibit_id")
        rating = validate_rating(operation.get("rating"))
        if await self.exhibits.rate(exhibit_id, user_id, rating) is None:
            raise NotFoundError("Exhibit not found")

    async def _add_favorite(self, user_id: Optional[int], operation: Dict[str, Any]) -> None:
        user_id = self._require_user(user_id)
        exhibit_id = validate_positive_id(operation.get("exhibit_id"), "exhibit_id")
        if await self.exhibits.get_by_id(exhibit_id) is None:
            raise NotFoundError("Exhibit not found")
        if await self.users.add_favorite(user_id, exhibit_id) is None:
            raise NotFoundError("User not found")

    async def _remove_favorite(self, user_id: Optional[int], operation: Dict[str, Any]) -> None:
        user_id = self._require_user(user_id)
        exhibit_id = validate_positive_id(operation.get("exhibit_id"), "exhibit_id")
        if await self.users.remove_favorite(user_id, exhibit_id) is None:
            raise NotFoundError("User not found")
