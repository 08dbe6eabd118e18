"""
Event Publisher

Application service for publishing domain events to registered handlers.
Enables decoupling of side effects from core business logic.
"""

import logging
from concurrent.futures import Executor
from threading import Lock
from typing import Callable, Dict, List, Optional, Type

from codedrop.domain.events import DomainEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], None]


class EventPublisher:
    """
    Event publisher that dispatches domain events to registered handlers.

    Without an executor, handlers run synchronously in the publishing
    thread. With one, each handler is submitted to it and publish()
    returns immediately; the request path never waits on a handler.
    Handler exceptions are caught and logged in both modes.

    Thread-safe for concurrent event publishing.
    """

    def __init__(self, executor: Optional[Executor] = None):
        """
        Initialize EventPublisher with empty handler registry.

        Args:
            executor: Optional executor for fire-and-forget dispatch
        """
        self._handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}
        self._lock = Lock()
        self._executor = executor

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """
        Register a handler for a specific event type.

        Example:
            publisher = EventPublisher()
            publisher.subscribe(FileBurnedEvent, notifier_handler.handle)
        """
        with self._lock:
            self._handlers.setdefault(event_type, []).append(handler)
            logger.debug(
                f"Registered handler {_handler_name(handler)} for {event_type.__name__}"
            )

    def publish(self, event: DomainEvent) -> None:
        """
        Publish an event to all handlers registered for its type or any
        of its base classes (subscribe to DomainEvent to see everything).

        Args:
            event: The domain event to publish
        """
        event_type = type(event)

        with self._lock:
            handlers = [
                handler
                for cls in event_type.__mro__
                for handler in self._handlers.get(cls, [])
            ]

        if not handlers:
            logger.debug(f"No handlers registered for {event_type.__name__}")
            return

        logger.debug(f"Publishing {event_type.__name__} to {len(handlers)} handler(s)")

        for handler in handlers:
            if self._executor is None:
                self._dispatch(handler, event)
                continue
            try:
                self._executor.submit(self._dispatch, handler, event)
            except RuntimeError as e:
                # Executor already shut down
                logger.warning(
                    f"Dropped {event_type.__name__} for {_handler_name(handler)}: {e}"
                )

    def shutdown(self, wait: bool = True) -> None:
        """Stop the executor, if any, optionally waiting for queued handlers."""
        if self._executor is not None:
            self._executor.shutdown(wait=wait)

    @staticmethod
    def _dispatch(handler: EventHandler, event: DomainEvent) -> None:
        try:
            handler(event)
        except Exception as e:
            # Side effects must not break core logic
            logger.error(
                f"Error in handler {_handler_name(handler)} for "
                f"{type(event).__name__}: {e}",
                exc_info=True,
            )


def _handler_name(handler: EventHandler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)
