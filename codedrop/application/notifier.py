"""
Notifier

Outbound notification seam. Delivery channels are pluggable; the default
implementation only logs.
"""

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Sends a short message to an opaque contact address."""

    @abstractmethod
    def notify(self, address: str, subject: str, body: str) -> None:
        """
        Deliver one message.

        Implementations may raise; callers treat notification as best effort.
        """
        pass  # pragma: no cover


class LoggingNotifier(Notifier):
    """Notifier that records messages in the application log."""

    def __init__(self, logger_: logging.Logger = logger):
        self.logger = logger_

    def notify(self, address: str, subject: str, body: str) -> None:
        self.logger.info(f"Notification to {address}: {subject} - {body}")
