from typing import Any, List, Optional

from pydantic import BaseModel


class Coordinates(BaseModel):
    lat: float
    lng: float


class RouteSummary(BaseModel):
    route_id: int
    user_id: int
    destination_id: Optional[int] = None
    calculationTime: int


class RouteDetails(BaseModel):
    route_id: int
    user_id: int
    destination_id: Optional[int] = None
    distance: float
    estimatedTime: int
    arrivalTime: str
    path: List[str]
    instructions: List[str]
    stops: List[Any] = []
    isPersonalized: bool = False


class StopsUpdateResult(BaseModel):
    route_id: int
    stopsUpdated: bool
    newEstimatedTime: int
    stops: List[Any]


class PersonalizedRoute(BaseModel):
    route_id: int
    exhibits: List[int]
    estimated_duration: str
    map_url: str
    starting_point: Coordinates
    ending_point: Coordinates
