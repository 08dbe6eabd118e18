"""Application layer: share workflow orchestration, events and wiring."""

from .dependency_container import DependencyContainer, DependencyNotFoundError
from .download_result import DownloadResult
from .event_publisher import EventPublisher
from .notifier import LoggingNotifier, Notifier
from .share_service import ShareService

__all__ = [
    "DependencyContainer",
    "DependencyNotFoundError",
    "DownloadResult",
    "EventPublisher",
    "LoggingNotifier",
    "Notifier",
    "ShareService",
]
