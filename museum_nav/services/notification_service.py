"""
Notification Service - route deviation checks
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from museum_nav.core import geo
from museum_nav.core.exceptions import DuplicateKeyError, InternalError, NotFoundError
from museum_nav.repositories.base import Repository
from museum_nav.services.route_service import RouteService

logger = logging.getLogger(__name__)


class NotificationType:
    ROUTE_DEVIATION = "route_deviation"
    ARRIVAL = "arrival"
    DESTINATION_CLOSED = "destination_closed"
    CROWD_ALERT = "crowd_alert"
    INFO = "info"


ON_TRACK_MESSAGE = "You are on track"


def deviation_message(threshold: float) -> str:
    # integral thresholds render without a trailing ".0"
    shown = int(threshold) if float(threshold).is_integer() else threshold
    return f"You have deviated from the route by more than {shown} meters. Recalculating route..."


class NotificationService:
    """Compares a visitor's position against their route and records the outcome"""

    def __init__(
        self,
        notifications: Repository,
        routes: RouteService,
        deviation_threshold_m: float = 50.0,
    ):
        self.notifications = notifications
        self.routes = routes
        self.deviation_threshold_m = deviation_threshold_m

    async def send_notification(
        self,
        user_id: int,
        route_id: int,
        current_lat: float,
        current_lng: float,
        threshold_m: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Check the current position against a route and store a notification

        Args:
            user_id: Recipient
            route_id: Route being followed
            current_lat: Current latitude
            current_lng: Current longitude
            threshold_m: Override for the deviation threshold in meters

        Returns:
            {"notificationId", "type", "message"}

        Raises:
            NotFoundError: If the route does not exist
        """
        route = await self.routes.get_route_details(route_id)
        if route is None:
            raise NotFoundError("Route not found")

        threshold = threshold_m if threshold_m is not None else self.deviation_threshold_m
        path = [geo.parse_path_point(point) for point in route["path"]]
        current = {"lat": current_lat, "lng": current_lng}

        if geo.is_route_deviated(current, path, threshold):
            notification_type = NotificationType.ROUTE_DEVIATION
            message = deviation_message(threshold)
        else:
            notification_type = NotificationType.INFO
            message = ON_TRACK_MESSAGE

        record = {
            "user_id": user_id,
            "route_id": route_id,
            "type": notification_type,
            "message": message,
            "is_read": False,
            "created_at": datetime.now(timezone.utc),
        }
        notification = None
        for _ in range(3):
            record["id"] = await self.notifications.next_id()
            try:
                notification = await self.notifications.create(record)
                break
            except DuplicateKeyError:
                continue
        if notification is None:
            raise InternalError("Could not allocate a notification id")

        logger.info(
            f"Notification {notification['id']} ({notification_type}) for route {route_id}",
            extra={"user_id": user_id, "route_id": route_id, "type": notification_type},
        )
        return {
            "notificationId": notification["id"],
            "type": notification_type,
            "message": message,
        }
