from .base import Envelope, fail
from .user import UserRead, LoginResult
from .route import Coordinates, RouteSummary, RouteDetails, StopsUpdateResult, PersonalizedRoute
from .notification import NotificationResult
from .sync import SyncFailure, SyncDetails, SyncResult

__all__ = [
    "Envelope",
    "fail",
    "UserRead",
    "LoginResult",
    "Coordinates",
    "RouteSummary",
    "RouteDetails",
    "StopsUpdateResult",
    "PersonalizedRoute",
    "NotificationResult",
    "SyncFailure",
    "SyncDetails",
    "SyncResult",
]
