"""
Notification Event Handler

Forwards download events to the uploader's notify address, if one was given.
"""

import logging

from codedrop.application.notifier import Notifier
from codedrop.domain.events import DomainEvent, FileDownloadedEvent

logger = logging.getLogger(__name__)


class NotificationEventHandler:
    """Turns FileDownloadedEvent into a message for the uploader."""

    def __init__(self, notifier: Notifier):
        self.notifier = notifier

    def handle(self, event: DomainEvent) -> None:
        if not isinstance(event, FileDownloadedEvent) or not event.notify_address:
            return

        subject = f"Your file {event.filename} was downloaded"
        body = f"Share code {event.aggregate_id} was downloaded at {event.occurred_at.isoformat()}."
        if event.max_downloads is not None and event.download_count >= event.max_downloads:
            body += " It has reached its download limit and was destroyed."

        try:
            self.notifier.notify(event.notify_address, subject, body)
        except Exception as e:
            logger.error(
                f"Failed to notify uploader of {event.aggregate_id}: {e}",
                exc_info=True,
            )
