"""Offline synchronization endpoint."""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends

from museum_nav.core.dependencies import ServiceContainer, get_optional_principal, get_service_container
from museum_nav.core.exceptions import ValidationError
from museum_nav.core.security import Principal
from museum_nav.schemas.base import Envelope
from museum_nav.schemas.sync import SyncResult

router = APIRouter(prefix="/sync", tags=["sync"])


@router.post("", response_model=Envelope[SyncResult])
async def synchronize_offline_data(
    operations: Any = Body(None),
    principal: Optional[Principal] = Depends(get_optional_principal),
    container: ServiceContainer = Depends(get_service_container),
):
    """
    Replay operations queued while offline.

    The body is a JSON array of ``{operation_type, exhibit_id, rating?}``.
    Authentication is optional; operations that need a user fail individually
    for anonymous callers.
    """
    if not isinstance(operations, list):
        raise ValidationError("Invalid operations payload. Expected an array of operations.")

    if not operations:
        return Envelope(success=True, data=SyncResult(), message="No operations to synchronize")

    user_id = principal.user_id if principal else None
    result = await container.sync_service.synchronize(user_id, operations)
    return Envelope(success=True, data=SyncResult(**result), message="Synchronization completed")
