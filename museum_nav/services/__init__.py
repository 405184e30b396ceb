from .auth_service import AuthService
from .destination_service import DestinationService
from .exhibit_service import ExhibitService
from .notification_service import NotificationService, NotificationType
from .route_service import RouteService
from .sync_service import SyncOperation, SyncService
from .user_service import UserService

__all__ = [
    "AuthService",
    "DestinationService",
    "ExhibitService",
    "NotificationService",
    "NotificationType",
    "RouteService",
    "SyncOperation",
    "SyncService",
    "UserService",
]
