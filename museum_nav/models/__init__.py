"""
ORM models for persistent mode. Importing this package registers every
mapper on ``museum_nav.core.db.Base``.
"""

from .user import User
from .exhibit import Exhibit
from .destination import Destination
from .route import Route
from .notification import Notification

__all__ = [
    "User",
    "Exhibit",
    "Destination",
    "Route",
    "Notification",
]
