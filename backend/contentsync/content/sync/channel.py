# contentsync/content/sync/channel.py
"""
Preview sync: tell draft previews living elsewhere that content changed.

Three transports run side by side because none of them reaches every
embedding:

1. EventBus        - same context (side-by-side editor).
2. MessageWindow   - a known window handle (iframe <-> parent).
3. PreviewLocation - the preview's own URL token, polled by the preview
                     (plain new tab, no window relationship).

Delivery is best-effort. Reloads are idempotent, so a preview that hears
the same change on several transports only pays for extra fetches.
"""
from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping, Optional

from contentsync.domain.exceptions import SessionModeError

from .events import CONTENT_SAVED, EventBus
from .location import PreviewLocation
from .messages import ContentChangedMessage, MessageWindow

if TYPE_CHECKING:
    from contentsync.content.session import ContentSession

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 1.0


def poll_interval_from_config(config: Optional[Mapping[str, Any]]) -> float:
    """`PREVIEW_POLL_INTERVAL` from an app config, or the default when absent."""
    if not config:
        return DEFAULT_POLL_INTERVAL
    return float(config.get("PREVIEW_POLL_INTERVAL", DEFAULT_POLL_INTERVAL))


class PreviewBroadcaster:
    """Authoring side: fire every configured transport for a changed slug."""

    def __init__(
        self,
        *,
        bus: Optional[EventBus] = None,
        windows: Iterable[MessageWindow] = (),
        locations: Iterable[PreviewLocation] = (),
    ) -> None:
        self.bus = bus
        self.windows: list[MessageWindow] = list(windows)
        self.locations: list[PreviewLocation] = list(locations)

    def add_window(self, window: MessageWindow) -> None:
        if window not in self.windows:
            self.windows.append(window)

    def add_location(self, location: PreviewLocation) -> None:
        if location not in self.locations:
            self.locations.append(location)

    def broadcast(self, slug: str, version: str = "") -> int:
        """
        Signal that `slug` changed. Never raises and never waits.

        Returns the number of transports that accepted the signal.
        """
        message = ContentChangedMessage(slug=slug, version=version)
        delivered = 0

        if self.bus is not None:
            bus = self.bus

            def dispatch_event() -> bool:
                bus.dispatch(CONTENT_SAVED, message)
                return True

            delivered += self._fire("event", dispatch_event)

        for window in self.windows:
            delivered += self._fire(f"message:{window.name}", lambda w=window: w.post_message(message.to_payload()))

        for location in self.locations:
            delivered += self._fire("location", lambda loc=location: bool(loc.bump_version()))

        logger.info("Broadcast content change for %s on %d transport(s)", slug, delivered)
        return delivered

    @staticmethod
    def _fire(transport: str, send: Callable[[], bool]) -> int:
        try:
            return 1 if send() else 0
        except Exception:
            # Best-effort: one broken transport must not stop the others.
            logger.exception("Preview transport %s failed", transport)
            return 0


class PreviewListener:
    """
    Consuming side: reload a draft-preview session whenever any transport fires.

    Acquire with ``async with``; leaving the block releases the event
    subscription, the window listener and the poll task, and cancels a
    reload that is still running.

    Signals that arrive while a reload is running are coalesced into a
    single follow-up reload, so the session never runs two loads at once.
    """

    def __init__(
        self,
        session: "ContentSession",
        *,
        bus: Optional[EventBus] = None,
        window: Optional[MessageWindow] = None,
        location: Optional[PreviewLocation] = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")

        self._session = session
        self._bus = bus
        self._window = window
        self._location = location
        self.poll_interval = poll_interval

        self._releases: list[Callable[[], None]] = []
        self._poll_task: Optional[asyncio.Task] = None
        self._reload_task: Optional[asyncio.Task] = None
        self._pending = False
        self._last_token: Optional[str] = None
        self.active = False

        self.signal_count = 0
        self.reload_count = 0

    # -------------------------------------------------
    # Lifecycle
    # -------------------------------------------------
    async def __aenter__(self) -> "PreviewListener":
        self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.stop()

    def start(self) -> None:
        if self.active:
            return
        if not self._session.accepts_preview_signals:
            raise SessionModeError(
                f"Preview sync requires a consuming-draft session, got {self._session.mode.value}"
            )

        if self._bus is not None:
            self._releases.append(self._bus.subscribe(CONTENT_SAVED, self._on_event))

        if self._window is not None:
            self._releases.append(self._window.add_listener(self._on_message))

        if self._location is not None:
            self._last_token = self._location.version_token
            self._poll_task = asyncio.get_running_loop().create_task(self._poll())

        self.active = True
        logger.debug("Preview listener for %s started", self._session.slug)

    async def stop(self) -> None:
        if not self.active:
            return
        self.active = False

        for release in self._releases:
            release()
        self._releases.clear()

        for task in (self._poll_task, self._reload_task):
            if task is not None and not task.done():
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task

        self._poll_task = None
        self._reload_task = None
        self._pending = False
        logger.debug("Preview listener for %s stopped", self._session.slug)

    async def idle(self) -> None:
        """Wait until no reload is running or queued."""
        while self._reload_task is not None and not self._reload_task.done():
            await asyncio.shield(self._reload_task)

    # -------------------------------------------------
    # Transports
    # -------------------------------------------------
    def _on_event(self, detail: Any) -> None:
        slug = getattr(detail, "slug", None)
        if slug is not None and slug != self._session.slug:
            return
        self.request_reload("event")

    def _on_message(self, data: Any) -> None:
        message = ContentChangedMessage.from_payload(data)
        if message is None:
            logger.debug("Ignoring unrelated window message: %r", data)
            return
        if message.slug != self._session.slug:
            return
        self.request_reload("message")

    async def _poll(self) -> None:
        while True:
            await asyncio.sleep(self.poll_interval)

            token = self._location.version_token
            if token != self._last_token:
                self._last_token = token
                self.request_reload("poll")

    # -------------------------------------------------
    # Reloading
    # -------------------------------------------------
    def request_reload(self, source: str = "manual") -> None:
        if not self.active:
            return

        self.signal_count += 1
        logger.debug("Reload of %s requested via %s", self._session.slug, source)

        if self._reload_task is not None and not self._reload_task.done():
            self._pending = True
            return

        self._reload_task = asyncio.get_running_loop().create_task(self._reload())
        self._reload_task.add_done_callback(self._reload_done)

    def _reload_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Reload of %s crashed", self._session.slug, exc_info=exc)

    async def _reload(self) -> None:
        while True:
            self._pending = False
            await self._session.load()
            self.reload_count += 1
            if not self._pending:
                return
