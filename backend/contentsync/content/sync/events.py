# contentsync/content/sync/events.py
"""Same-context event bus (the in-page custom event transport)."""
from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from typing import Any, Callable

logger = logging.getLogger(__name__)

CONTENT_SAVED = "content-saved"

Listener = Callable[[Any], None]


class EventBus:
    """
    Named-event pub/sub shared by components living in one context.

    Dispatch never runs listeners inline: each one is scheduled on the
    running loop, so the dispatcher is never blocked by (or exposed to)
    a listener.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def subscribe(self, event: str, listener: Listener) -> Callable[[], None]:
        """Register `listener`; returns a callable that removes it."""
        self._listeners[event].append(listener)

        def unsubscribe() -> None:
            listeners = self._listeners.get(event)
            if listeners and listener in listeners:
                listeners.remove(listener)
                if not listeners:
                    del self._listeners[event]

        return unsubscribe

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))

    def dispatch(self, event: str, detail: Any = None) -> int:
        """Schedule every listener of `event`. Returns how many were scheduled."""
        listeners = list(self._listeners.get(event, ()))
        if not listeners:
            return 0

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        for listener in listeners:
            if loop is None:
                listener(detail)
            else:
                loop.call_soon(listener, detail)

        logger.debug("Dispatched %s to %d listener(s)", event, len(listeners))
        return len(listeners)
