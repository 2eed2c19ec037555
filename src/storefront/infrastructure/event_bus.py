"""Event dispatcher for domain events.

Design goals
------------
1.  **Type-routed dispatching**: handlers register for a concrete
    ``DomainEvent`` subclass.  ``notify()`` routes an event to every
    handler whose registered type matches ``type(event)`` exactly.
2.  **Handler isolation**: a failing handler is logged and recorded as a
    dead letter; the remaining handlers still run.

This module provides:

*  ``IEventDispatcher``: the protocol (interface).
*  ``InMemoryEventDispatcher``: deterministic in-process implementation.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable
from typing import Protocol, runtime_checkable

from storefront.domain.events import DomainEvent

logger = logging.getLogger(__name__)

# Type alias for async event handlers.
EventHandler = Callable[[DomainEvent], Awaitable[None]]


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------

@runtime_checkable
class IEventDispatcher(Protocol):
    """Register handlers per event type and notify them."""

    async def notify(self, event: DomainEvent) -> None:
        """Deliver *event* to every handler registered for its type."""
        ...

    def register(
        self,
        event_type: type[DomainEvent],
        handler: EventHandler,
    ) -> None:
        """Register *handler* for events of exactly *event_type*."""
        ...

    def unregister(
        self,
        event_type: type[DomainEvent],
        handler: EventHandler,
    ) -> None: ...

    def unregister_all(self) -> None: ...


# ---------------------------------------------------------------------------
# In-memory implementation
# ---------------------------------------------------------------------------

class InMemoryEventDispatcher:
    """Deterministic, in-process event dispatcher.

    Handlers run sequentially in registration order.
    """

    def __init__(self) -> None:
        self._handlers: dict[
            type[DomainEvent], list[EventHandler]
        ] = defaultdict(list)
        self._history: list[DomainEvent] = []
        self._error_counts: dict[str, int] = defaultdict(int)
        self._dead_letters: list[tuple[DomainEvent, str]] = []
        self._messages_processed: int = 0

    # -- Registration ------------------------------------------------------

    def register(
        self,
        event_type: type[DomainEvent],
        handler: EventHandler,
    ) -> None:
        """Register *handler* for *event_type*.  Duplicates are ignored."""
        if handler not in self._handlers[event_type]:
            self._handlers[event_type].append(handler)

    def unregister(
        self,
        event_type: type[DomainEvent],
        handler: EventHandler,
    ) -> None:
        """Remove *handler* from *event_type*; unknown handlers are ignored."""
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)
            if not handlers:
                del self._handlers[event_type]

    def unregister_all(self) -> None:
        self._handlers.clear()

    def handlers_for(self, event_type: type[DomainEvent]) -> list[EventHandler]:
        return list(self._handlers.get(event_type, []))

    # -- Core API ----------------------------------------------------------

    async def notify(self, event: DomainEvent) -> None:
        """Deliver *event* to all handlers registered for its type."""
        event_cls = type(event)
        self._history.append(event)

        for handler in self._handlers.get(event_cls, []):
            try:
                await handler(event)
                self._messages_processed += 1
            except Exception as exc:
                key = event_cls.__name__
                self._error_counts[key] += 1
                self._dead_letters.append((event, str(exc)))
                logger.exception(
                    "Handler error on %s: %s", key, exc,
                )

    # -- Observability -----------------------------------------------------

    def get_history(
        self,
        event_type: type[DomainEvent] | None = None,
    ) -> list[DomainEvent]:
        """Return notified events, optionally filtered."""
        if event_type is None:
            return list(self._history)
        return [e for e in self._history if type(e) is event_type]

    def get_error_counts(self) -> dict[str, int]:
        return dict(self._error_counts)

    @property
    def dead_letters(self) -> list[tuple[DomainEvent, str]]:
        return list(self._dead_letters)

    @property
    def messages_processed(self) -> int:
        return self._messages_processed
