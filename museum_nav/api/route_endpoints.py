"""
Route API endpoints - calculation, details, stops, recalculation and deletion
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, Response, status

from museum_nav.core.dependencies import ServiceContainer, get_current_principal, get_service_container
from museum_nav.core.exceptions import ForbiddenError, NotFoundError
from museum_nav.core.security import Principal
from museum_nav.core.validation import (
    validate_coordinates,
    validate_positive_id,
    validate_required_fields,
    validate_walking_speed,
)
from museum_nav.schemas.base import Envelope
from museum_nav.schemas.route import RouteDetails, RouteSummary, StopsUpdateResult
from museum_nav.services.route_service import RouteService

router = APIRouter(prefix="/routes", tags=["routes"])


async def ensure_route_owner(routes: RouteService, route_id: int, principal: Principal) -> None:
    """404 when the route is absent, 403 when it belongs to someone else."""
    owner = await routes.get_route_owner(route_id)
    if owner is None:
        raise NotFoundError("Route not found")
    if owner != principal.user_id:
        raise ForbiddenError("Forbidden: cannot access other user routes")


@router.post("", response_model=Envelope[RouteSummary])
async def calculate_route(
    payload: Optional[Dict[str, Any]] = Body(None),
    principal: Principal = Depends(get_current_principal),
    container: ServiceContainer = Depends(get_service_container),
):
    """
    Calculate a route for the authenticated user

    - **destination_id**: Target destination
    - **startLat** / **startLng**: Current position
    """
    payload = payload or {}
    validate_required_fields(payload, ["destination_id", "startLat", "startLng"])
    validate_coordinates(payload["startLat"], payload["startLng"], "Invalid start coordinates")
    destination_id = validate_positive_id(payload["destination_id"], "destination_id")

    result = await container.route_service.calculate_route(
        principal.user_id,
        destination_id,
        float(payload["startLat"]),
        float(payload["startLng"]),
    )
    return Envelope(success=True, data=RouteSummary(**result), message="Route calculated successfully")


@router.get("/{route_id}", response_model=Envelope[RouteDetails])
async def get_route_details(
    route_id: int,
    walking_speed: Optional[str] = Query(None, alias="walkingSpeed"),
    principal: Principal = Depends(get_current_principal),
    container: ServiceContainer = Depends(get_service_container),
):
    """
    Route details, optionally re-timed for a different walking speed (km/h)
    """
    routes = container.route_service
    await ensure_route_owner(routes, route_id, principal)

    details = await routes.get_route_details(route_id, validate_walking_speed(walking_speed))
    if details is None:
        raise NotFoundError("Route not found")
    return Envelope(success=True, data=RouteDetails(**details), message="Route details retrieved successfully")


@router.put("/{route_id}", response_model=Envelope[StopsUpdateResult])
async def update_route_stops(
    route_id: int,
    payload: Optional[Dict[str, Any]] = Body(None),
    principal: Principal = Depends(get_current_principal),
    container: ServiceContainer = Depends(get_service_container),
):
    routes = container.route_service
    await ensure_route_owner(routes, route_id, principal)

    result = await routes.update_route_stops(route_id, payload or {})
    if result is None:
        raise NotFoundError("Route not found")
    return Envelope(success=True, data=StopsUpdateResult(**result), message="Route updated successfully")


@router.post("/{route_id}", response_model=Envelope[RouteSummary])
async def recalculate_route(
    route_id: int,
    principal: Principal = Depends(get_current_principal),
    container: ServiceContainer = Depends(get_service_container),
):
    routes = container.route_service
    await ensure_route_owner(routes, route_id, principal)

    result = await routes.recalculate_route(route_id)
    if result is None:
        raise NotFoundError("Route not found")
    return Envelope(success=True, data=RouteSummary(**result), message="Route recalculated successfully")


@router.delete("/{route_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_route(
    route_id: int,
    principal: Principal = Depends(get_current_principal),
    container: ServiceContainer = Depends(get_service_container),
):
    routes = container.route_service
    await ensure_route_owner(routes, route_id, principal)

    if not await routes.delete_route(route_id):
        raise NotFoundError("Route not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
