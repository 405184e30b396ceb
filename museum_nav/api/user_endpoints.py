"""User-scoped endpoints: personalized tour generation."""

from fastapi import APIRouter, Depends

from museum_nav.core.dependencies import ServiceContainer, get_current_principal, get_service_container
from museum_nav.core.exceptions import ForbiddenError
from museum_nav.core.security import Principal
from museum_nav.schemas.base import Envelope
from museum_nav.schemas.route import PersonalizedRoute

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}/routes", response_model=Envelope[PersonalizedRoute])
async def get_personalized_route(
    user_id: int,
    principal: Principal = Depends(get_current_principal),
    container: ServiceContainer = Depends(get_service_container),
):
    """
    Generate a tour through exhibits matching the user's interests.
    Only the user themself or an admin may request it.
    """
    if user_id != principal.user_id and not principal.is_admin:
        raise ForbiddenError("Forbidden: cannot access other user routes")

    route = await container.route_service.generate_personalized_route(user_id)
    return Envelope(
        success=True,
        data=PersonalizedRoute(**route),
        message="Personalized route generated successfully",
    )
