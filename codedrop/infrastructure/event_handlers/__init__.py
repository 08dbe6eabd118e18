"""Event handlers subscribed to domain events."""

from .logging_handler import LoggingEventHandler
from .notification_handler import NotificationEventHandler

__all__ = ["LoggingEventHandler", "NotificationEventHandler"]
