"""
Route Service - route calculation, details, stops and personalized tours
"""
import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from museum_nav.config.settings import NavigationSettings
from museum_nav.core import geo
from museum_nav.core.exceptions import DuplicateKeyError, InternalError, NotFoundError, ValidationError
from museum_nav.repositories.base import Record, Repository
from museum_nav.services.destination_service import DestinationService
from museum_nav.services.exhibit_service import ExhibitService
from museum_nav.services.user_service import UserService

logger = logging.getLogger(__name__)

ROUTE_ID_ATTEMPTS = 3


class RouteService:
    """Calculates and manages straight-line walking routes"""

    def __init__(
        self,
        routes: Repository,
        destinations: DestinationService,
        exhibits: ExhibitService,
        users: UserService,
        config: Optional[NavigationSettings] = None,
    ):
        self.routes = routes
        self.destinations = destinations
        self.exhibits = exhibits
        self.users = users
        self.config = config or NavigationSettings()

    async def _insert(self, record: Record) -> Record:
        for _ in range(ROUTE_ID_ATTEMPTS):
            record["id"] = await self.routes.next_id()
            try:
                return await self.routes.create(record)
            except DuplicateKeyError:
                logger.warning(f"Route id {record['id']} already taken, retrying")
        raise InternalError("Could not allocate a route id")

    async def calculate_route(
        self,
        user_id: int,
        destination_id: int,
        start_lat: float,
        start_lng: float,
    ) -> Dict[str, Any]:
        """
        Compute and persist a route from a start point to a destination

        Args:
            user_id: Owning user
            destination_id: Target destination
            start_lat: Start latitude
            start_lng: Start longitude

        Returns:
            Slim summary with route_id and calculationTime

        Raises:
            NotFoundError: If the destination does not exist
        """
        destination = await self.destinations.get_by_id(destination_id)
        if destination is None:
            raise NotFoundError("Destination not found")

        started = time.monotonic()
        start = {"lat": start_lat, "lng": start_lng}
        end = {"lat": destination["coordinates"]["lat"], "lng": destination["coordinates"]["lng"]}

        distance = geo.calculate_distance(start["lat"], start["lng"], end["lat"], end["lng"])
        estimated_time = geo.calculate_estimated_time(distance, self.config.default_walking_speed)
        calculation_time = geo.round_half_up(time.monotonic() - started)

        now = datetime.now(timezone.utc)
        route = await self._insert({
            "user_id": user_id,
            "destination_id": destination_id,
            "start_coordinates": start,
            "end_coordinates": end,
            "path": geo.generate_path(start, end),
            "instructions": geo.generate_instructions(distance),
            "stops": [],
            "distance": geo.round_half_up(distance, 1),
            "estimated_time": estimated_time,
            "arrival_time": geo.calculate_arrival_time(estimated_time),
            "calculation_time": calculation_time,
            "is_personalized": False,
            "map_url": self.config.default_map_url,
            "created_at": now,
            "updated_at": now,
        })

        logger.info(
            f"Route {route['id']} calculated for user {user_id}",
            extra={"route_id": route["id"], "user_id": user_id, "destination_id": destination_id},
        )
        return {
            "route_id": route["id"],
            "user_id": user_id,
            "destination_id": destination_id,
            "calculationTime": calculation_time,
        }

    async def get_route_details(
        self,
        route_id: int,
        walking_speed: Optional[float] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Detail view of a stored route

        Args:
            route_id: Route ID
            walking_speed: Optional speed override in km/h; duration and
                arrival time are then recomputed from the stored distance

        Returns:
            Detail view, or None if the route does not exist
        """
        route = await self.routes.find_by_id(route_id)
        if route is None:
            return None

        estimated_time = route["estimated_time"]
        if walking_speed is not None:
            if walking_speed <= 0:
                raise ValidationError("walkingSpeed must be a positive number")
            estimated_time = geo.calculate_estimated_time(route["distance"], walking_speed)

        return {
            "route_id": route["id"],
            "user_id": route["user_id"],
            "destination_id": route.get("destination_id"),
            "distance": route["distance"],
            "estimatedTime": estimated_time,
            "arrivalTime": geo.calculate_arrival_time(estimated_time),
            "path": [geo.format_path_point(p) for p in route["path"]],
            "instructions": route["instructions"],
            "stops": route.get("stops") or [],
            "isPersonalized": bool(route.get("is_personalized")),
        }

    async def update_route_stops(self, route_id: int, update: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Append stops; each one adds a fixed penalty to the stored estimate."""
        route = await self.routes.find_by_id(route_id)
        if route is None:
            return None

        add_stops = update.get("addStops") or []
        if not isinstance(add_stops, list):
            raise ValidationError("addStops must be an array")

        stops = list(route.get("stops") or []) + add_stops
        new_estimate = route["estimated_time"] + len(add_stops) * self.config.stop_penalty_seconds
        await self.routes.update(route_id, {
            "stops": stops,
            "estimated_time": new_estimate,
            "arrival_time": geo.calculate_arrival_time(new_estimate),
            "updated_at": datetime.now(timezone.utc),
        })

        return {
            "route_id": route["id"],
            "stopsUpdated": True,
            "newEstimatedTime": new_estimate,
            "stops": stops,
        }

    async def recalculate_route(self, route_id: int) -> Optional[Dict[str, Any]]:
        """
        Summary of a stored route.

        Geometry is not re-queried; the stored distance and path are reused.
        """
        route = await self.routes.find_by_id(route_id)
        if route is None:
            return None
        return {
            "route_id": route["id"],
            "user_id": route["user_id"],
            "destination_id": route.get("destination_id"),
            "calculationTime": route.get("calculation_time") or 0,
        }

    async def get_route_owner(self, route_id: int) -> Optional[int]:
        route = await self.routes.find_by_id(route_id)
        return int(route["user_id"]) if route is not None else None

    async def delete_route(self, route_id: int) -> bool:
        deleted = await self.routes.delete(route_id)
        if deleted:
            logger.info(f"Route {route_id} deleted", extra={"route_id": route_id})
        return deleted

    async def generate_personalized_route(self, user_id: int) -> Dict[str, Any]:
        """
        Build a tour through exhibits matching the user's interests

        Raises:
            NotFoundError: Unknown user, or no exhibit matches the preferences
            ValidationError: Personalization disabled or no preferences set
        """
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        preferences = [p.lower() for p in user.get("preferences") or []]
        if not user.get("personalization_available") or not preferences:
            raise ValidationError("Cannot generate personalized route - missing user preferences")

        matches = [
            exhibit for exhibit in await self.exhibits.list_all()
            if self._matches_preferences(exhibit, preferences)
        ][: self.config.personalized_max_exhibits]
        if not matches:
            raise NotFoundError("No matching exhibits found for user preferences")

        points = [exhibit["coordinates"] for exhibit in matches]
        start, end = points[0], points[-1]
        distance = sum(
            geo.calculate_distance(a["lat"], a["lng"], b["lat"], b["lng"])
            for a, b in zip(points, points[1:])
        )
        duration_minutes = len(matches) * self.config.minutes_per_exhibit

        now = datetime.now(timezone.utc)
        route = await self._insert({
            "user_id": user_id,
            "destination_id": None,
            "start_coordinates": start,
            "end_coordinates": end,
            "path": points if len(points) > 1 else [start, end],
            "instructions": geo.generate_instructions(distance),
            "stops": [exhibit["id"] for exhibit in matches],
            "distance": geo.round_half_up(distance, 1),
            "estimated_time": duration_minutes * 60,
            "arrival_time": geo.calculate_arrival_time(duration_minutes * 60),
            "calculation_time": 0,
            "is_personalized": True,
            "map_url": self.config.personalized_map_url,
            "created_at": now,
            "updated_at": now,
        })

        logger.info(
            f"Personalized route {route['id']} generated for user {user_id}",
            extra={"route_id": route["id"], "user_id": user_id, "exhibit_count": len(matches)},
        )
        return {
            "route_id": route["id"],
            "exhibits": [exhibit["id"] for exhibit in matches],
            "estimated_duration": f"{duration_minutes} minutes",
            "map_url": self.config.personalized_map_url,
            "starting_point": start,
            "ending_point": end,
        }

    @staticmethod
    def _matches_preferences(exhibit: Record, preferences: List[str]) -> bool:
        return any(
            preference in category.lower()
            for category in exhibit.get("category") or []
            for preference in preferences
        )
