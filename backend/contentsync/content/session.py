# contentsync/content/session.py
"""
Content sessions: one working document per page, bound to a mode.

- authoring:           loads the draft, mutates, saves, publishes.
- consuming-draft:     read-only preview of the draft; reloads on sync signals.
- consuming-published: read-only public view; loads once per navigation.

Every document that enters a session goes through the merger, so
callers never see a structurally incomplete document.
"""
from __future__ import annotations

import asyncio
import copy
import enum
import logging
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from contentsync.domain.exceptions import SessionModeError, StoreError

from .merger import merge
from .schema import defaults_for
from .store import AuthoringRecord, DraftWriteResult, PublishResult, VersionStore
from .sync import (
    EventBus,
    MessageWindow,
    PreviewBroadcaster,
    PreviewListener,
    PreviewLocation,
    poll_interval_from_config,
)

logger = logging.getLogger(__name__)

Document = dict
Updater = Callable[[Document], Mapping[str, Any]]


class SessionMode(str, enum.Enum):
    AUTHORING = "authoring"
    CONSUMING_DRAFT = "consuming-draft"
    CONSUMING_PUBLISHED = "consuming-published"


class SessionState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class SaveStatus(str, enum.Enum):
    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"
    FAILED = "failed"


def _draft_or_published(record: Optional[AuthoringRecord]) -> Optional[dict]:
    if record is None:
        return None
    return record.draft_document or record.published_document


def _unexpected(exc: BaseException) -> bool:
    """Store errors are routine; anything else gets a traceback in the log."""
    return not isinstance(exc, StoreError)


def _isoformat(ts: Optional[datetime]) -> str:
    return ts.isoformat() if ts is not None else ""


class ContentSession:
    """
    Holds the working document of one page for one consumer.

    Sessions share nothing with each other; an editor, its preview and
    the public page each get their own instance over the same store.
    """

    def __init__(
        self,
        slug: str,
        store: VersionStore,
        *,
        mode: SessionMode = SessionMode.AUTHORING,
        defaults: Optional[Mapping[str, Any]] = None,
        broadcaster: Optional[PreviewBroadcaster] = None,
    ) -> None:
        self.slug = slug
        self.mode = SessionMode(mode)
        self._store = store
        self._defaults = copy.deepcopy(dict(defaults)) if defaults is not None else defaults_for(slug)
        self._broadcaster = broadcaster

        self.document: Document = merge(None, self._defaults)
        self.state = SessionState.UNINITIALIZED
        self.save_status = SaveStatus.IDLE
        self.error: Optional[str] = None

        self.is_published = False
        self.updated_at: Optional[datetime] = None
        self.published_at: Optional[datetime] = None
        self.content_version = ""
        self._dirty = False

    def __repr__(self) -> str:
        return f"<ContentSession {self.slug} {self.mode.value} {self.state.value}>"

    # -------------------------------------------------
    # Flags
    # -------------------------------------------------
    @property
    def is_loading(self) -> bool:
        return self.state is SessionState.LOADING

    @property
    def is_saving(self) -> bool:
        return self.save_status is SaveStatus.SAVING

    @property
    def has_unsaved_changes(self) -> bool:
        return self._dirty

    @property
    def accepts_preview_signals(self) -> bool:
        return self.mode is SessionMode.CONSUMING_DRAFT

    @property
    def defaults(self) -> Document:
        return copy.deepcopy(self._defaults)

    def _require_authoring(self, operation: str) -> None:
        if self.mode is not SessionMode.AUTHORING:
            raise SessionModeError(f"{operation} is only available to authoring sessions (mode={self.mode.value})")

    # -------------------------------------------------
    # Loading
    # -------------------------------------------------
    async def load(self) -> Document:
        """
        Fetch the document for this session's mode and make it current.

        Any store failure (including a malformed record) moves the
        session to ERROR and keeps the previous working document; it
        is not raised.
        """
        previous_state = self.state
        self.state = SessionState.LOADING
        self.error = None

        try:
            if self.mode is SessionMode.CONSUMING_PUBLISHED:
                record = await self._store.fetch_for_public_read(self.slug)
                stored = record.published_document if record else None
            else:
                record = await self._store.fetch_for_authoring(self.slug)
                stored = _draft_or_published(record)
        except asyncio.CancelledError:
            self.state = previous_state
            raise
        except Exception as exc:
            self.state = SessionState.ERROR
            self.error = str(exc)
            logger.warning(
                "Loading %s (%s) failed: %s", self.slug, self.mode.value, exc,
                exc_info=_unexpected(exc),
            )
            return self.document

        self.document = merge(stored, self._defaults)
        self._dirty = False

        if record is None:
            self.is_published = False
            self.updated_at = None
            self.published_at = None
        else:
            self.is_published = record.is_published
            self.updated_at = record.updated_at
            self.published_at = record.published_at

        if self.mode is SessionMode.CONSUMING_PUBLISHED:
            self.content_version = _isoformat(self.published_at or self.updated_at)
        else:
            self.content_version = _isoformat(self.updated_at or self.published_at)

        self.state = SessionState.READY
        return self.document

    # -------------------------------------------------
    # Local edits
    # -------------------------------------------------
    def mutate(self, updater: Updater) -> Document:
        """Replace the working document with `updater(document)`. No I/O."""
        self._require_authoring("mutate")

        updated = updater(self.document)
        if not isinstance(updated, Mapping):
            raise TypeError(f"Content updater must return a mapping, got {type(updated).__name__}")

        self.document = dict(updated)
        self._dirty = True
        return self.document

    def reset_content(self) -> Document:
        """Throw away local edits and start again from the schema defaults."""
        self._require_authoring("reset_content")
        self.document = merge(None, self._defaults)
        self._dirty = True
        return self.document

    # -------------------------------------------------
    # Writes
    # -------------------------------------------------
    async def save_draft(self, *, if_unmodified: bool = False) -> DraftWriteResult:
        """
        Persist the working document as the draft.

        With `if_unmodified=True` the write is rejected (ConflictError)
        when someone else saved after this session last synced; the
        default is last-write-wins. On failure the working document is
        kept as-is and the error is raised.
        """
        self._require_authoring("save_draft")

        snapshot = copy.deepcopy(self.document)
        self.save_status = SaveStatus.SAVING
        self.error = None

        try:
            result = await self._store.upsert_draft(
                self.slug,
                snapshot,
                expected_updated_at=self.updated_at if if_unmodified else None,
            )
        except Exception as exc:
            self.save_status = SaveStatus.FAILED
            self.error = str(exc)
            logger.error("Saving draft of %s failed: %s", self.slug, exc, exc_info=_unexpected(exc))
            raise

        self.updated_at = result.updated_at
        self.published_at = result.published_at
        self.is_published = result.is_published
        self.content_version = _isoformat(result.updated_at)
        self.save_status = SaveStatus.SAVED
        # Edits made while the write was in flight are still unsaved.
        self._dirty = self.document != snapshot

        logger.info("Saved draft of %s at %s", self.slug, self.content_version)
        self._broadcast()
        return result

    async def publish_content(self) -> PublishResult:
        """Publish the working document. `is_published` only flips on success."""
        self._require_authoring("publish_content")

        snapshot = copy.deepcopy(self.document)
        self.save_status = SaveStatus.SAVING
        self.error = None

        try:
            result = await self._store.publish(self.slug, snapshot)
        except Exception as exc:
            self.save_status = SaveStatus.FAILED
            self.error = str(exc)
            logger.error("Publishing %s failed: %s", self.slug, exc, exc_info=_unexpected(exc))
            raise

        self.updated_at = result.updated_at
        self.published_at = result.published_at
        self.is_published = result.is_published
        self.content_version = _isoformat(result.updated_at)
        self.save_status = SaveStatus.SAVED
        self._dirty = self.document != snapshot

        logger.info("Published %s at %s", self.slug, self.content_version)
        self._broadcast()
        return result

    async def sync_from_published(self) -> Document:
        """
        Discard the working document and reload the live version.

        Only the in-memory document changes; the stored draft is left
        alone until the author saves.
        """
        self._require_authoring("sync_from_published")
        self.error = None

        try:
            record = await self._store.fetch_for_public_read(self.slug)
        except Exception as exc:
            self.error = str(exc)
            logger.error(
                "Syncing %s from published content failed: %s", self.slug, exc,
                exc_info=_unexpected(exc),
            )
            raise

        self.document = merge(record.published_document if record else None, self._defaults)
        self._dirty = True

        if record is not None:
            self.is_published = record.is_published
            self.published_at = record.published_at

        return self.document

    def _broadcast(self) -> None:
        if self._broadcaster is not None:
            self._broadcaster.broadcast(self.slug, version=self.content_version)

    # -------------------------------------------------
    # Preview sync
    # -------------------------------------------------
    def preview_sync(
        self,
        *,
        bus: Optional[EventBus] = None,
        window: Optional[MessageWindow] = None,
        location: Optional[PreviewLocation] = None,
        poll_interval: Optional[float] = None,
        config: Optional[Mapping[str, Any]] = None,
    ) -> PreviewListener:
        """
        Listener that reloads this session on any sync signal. Use with ``async with``.

        The poll interval is `poll_interval` when given, else
        `PREVIEW_POLL_INTERVAL` from `config` (e.g. ``app.config``).
        """
        if not self.accepts_preview_signals:
            raise SessionModeError(f"Preview sync requires a consuming-draft session (mode={self.mode.value})")

        return PreviewListener(
            self,
            bus=bus,
            window=window,
            location=location,
            poll_interval=poll_interval if poll_interval is not None else poll_interval_from_config(config),
        )


def session_for_url(
    url: str,
    slug: str,
    store: VersionStore,
    *,
    defaults: Optional[Mapping[str, Any]] = None,
) -> ContentSession:
    """Consuming session whose mode follows the `preview=draft` query parameter."""
    mode = (
        SessionMode.CONSUMING_DRAFT
        if PreviewLocation(url).is_draft_preview
        else SessionMode.CONSUMING_PUBLISHED
    )
    return ContentSession(slug, store, mode=mode, defaults=defaults)
