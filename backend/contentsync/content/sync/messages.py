# contentsync/content/sync/messages.py
"""Cross-window messaging: tagged messages and the window handle they travel through."""
from __future__ import annotations

import asyncio
import copy
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

logger = logging.getLogger(__name__)

CONTENT_CHANGED = "content-changed"


@dataclass(frozen=True)
class ContentChangedMessage:
    """A draft for `slug` was written; `version` is the writer's token."""

    slug: str
    version: str = ""

    def to_payload(self) -> dict:
        return {"type": CONTENT_CHANGED, "slug": self.slug, "version": self.version}

    @classmethod
    def from_payload(cls, data: Any) -> Optional["ContentChangedMessage"]:
        """
        Parse a received payload.

        Returns None for anything that is not a well-formed
        content-changed message; other traffic on the same window
        is expected and ignored.
        """
        if not isinstance(data, Mapping) or data.get("type") != CONTENT_CHANGED:
            return None

        slug = data.get("slug")
        if not isinstance(slug, str) or not slug:
            return None

        version = data.get("version", "")
        return cls(slug=slug, version=version if isinstance(version, str) else str(version))


class MessageWindow:
    """
    Handle to a separate browsing context (an iframe, its parent, a popup).

    Senders only hold the handle; listeners belong to the context the
    handle points at. Payloads are deep-copied on send, the way a
    structured clone would be, and delivered on a later loop iteration.
    """

    def __init__(self, name: str = "window") -> None:
        self.name = name
        self.closed = False
        self._listeners: list[Callable[[Any], None]] = []

    def add_listener(self, listener: Callable[[Any], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def close(self) -> None:
        self.closed = True
        self._listeners.clear()

    def post_message(self, data: Any) -> bool:
        """Deliver `data` to this window's listeners. False if the window is closed."""
        if self.closed:
            logger.debug("post_message to closed window %s dropped", self.name)
            return False

        loop = asyncio.get_running_loop()
        for listener in list(self._listeners):
            loop.call_soon(listener, copy.deepcopy(data))
        return True
