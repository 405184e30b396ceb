"""Notification endpoints: on-route / deviation checks."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends

from museum_nav.api.route_endpoints import ensure_route_owner
from museum_nav.core.dependencies import ServiceContainer, get_current_principal, get_service_container
from museum_nav.core.security import Principal
from museum_nav.core.validation import validate_coordinates, validate_positive_id, validate_required_fields
from museum_nav.schemas.base import Envelope
from museum_nav.schemas.notification import NotificationResult

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.post("", response_model=Envelope[NotificationResult])
async def send_notification(
    payload: Optional[Dict[str, Any]] = Body(None),
    principal: Principal = Depends(get_current_principal),
    container: ServiceContainer = Depends(get_service_container),
):
    """
    Compare the caller's position with one of their routes

    - **route_id**: Route being followed
    - **currentLat** / **currentLng**: Current position
    """
    payload = payload or {}
    validate_required_fields(payload, ["route_id", "currentLat", "currentLng"])
    validate_coordinates(payload["currentLat"], payload["currentLng"], "Invalid current coordinates")
    route_id = validate_positive_id(payload["route_id"], "route_id")

    await ensure_route_owner(container.route_service, route_id, principal)

    notification = await container.notification_service.send_notification(
        principal.user_id,
        route_id,
        float(payload["currentLat"]),
        float(payload["currentLng"]),
    )
    return Envelope(
        success=True,
        data=NotificationResult(**notification),
        message="Notification sent successfully",
    )
