"""
Logging Event Handler

Infrastructure event handler for logging domain events.
Domain layer remains unaware of logging infrastructure.
"""

import logging

from codedrop.domain.events import (
    DomainEvent,
    FileBurnedEvent,
    FileDownloadedEvent,
    FileExpiredEvent,
    FileUploadedEvent,
)


class LoggingEventHandler:
    """Subscribes to domain events and logs them."""

    def __init__(self, logger: logging.Logger):
        """
        Args:
            logger: Python logging.Logger instance
        """
        self.logger = logger

    def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event by logging it.

        Args:
            event: Domain event to log
        """
        try:
            if isinstance(event, FileUploadedEvent):
                self._handle_uploaded(event)
            elif isinstance(event, FileDownloadedEvent):
                self._handle_downloaded(event)
            elif isinstance(event, FileBurnedEvent):
                self._handle_burned(event)
            elif isinstance(event, FileExpiredEvent):
                self._handle_expired(event)
            else:
                self.logger.debug(
                    f"Unhandled event: {event.__class__.__name__} "
                    f"(aggregate_id={event.aggregate_id})"
                )
        except Exception as e:
            self.logger.error(
                f"Error in logging event handler for {event.__class__.__name__}: {e}",
                exc_info=True,
            )

    def _handle_uploaded(self, event: FileUploadedEvent) -> None:
        quota = event.max_downloads if event.max_downloads is not None else "unlimited"
        self.logger.info(
            f"File registered: code={event.aggregate_id}, size={event.size_bytes}, "
            f"protected={event.is_protected}, quota={quota}, "
            f"expires_at={event.expires_at.isoformat()}"
        )

    def _handle_downloaded(self, event: FileDownloadedEvent) -> None:
        quota = event.max_downloads if event.max_downloads is not None else "unlimited"
        self.logger.info(
            f"File downloaded: code={event.aggregate_id}, "
            f"count={event.download_count}/{quota}"
        )

    def _handle_burned(self, event: FileBurnedEvent) -> None:
        self.logger.info(f"File burned after reaching quota: code={event.aggregate_id}")

    def _handle_expired(self, event: FileExpiredEvent) -> None:
        self.logger.info(
            f"File expired: code={event.aggregate_id}, "
            f"downloads served={event.download_count}"
        )
