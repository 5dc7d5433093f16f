# contentsync/content/store.py
"""
Version store contract used by content sessions, plus an in-memory
implementation for tests and local tooling.

A store keeps one record per page slug with two document columns
(draft and published). Stores persist exactly what the writer sent;
merging with schema defaults is the reader's job.
"""
from __future__ import annotations

import asyncio
import copy
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Protocol

from contentsync.domain.exceptions import ConflictError, StoreError
from contentsync.domain.invariants.page_record import assert_page_record
from contentsync.domain.lifecycle.page_record import next_write_timestamp, utcnow

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


@dataclass(frozen=True)
class PublicRecord:
    published_document: Optional[Document]
    is_published: bool
    updated_at: Optional[datetime]
    published_at: Optional[datetime]


@dataclass(frozen=True)
class AuthoringRecord:
    draft_document: Optional[Document]
    published_document: Optional[Document]
    is_published: bool
    updated_at: Optional[datetime]
    published_at: Optional[datetime]


@dataclass(frozen=True)
class DraftWriteResult:
    updated_at: datetime
    is_published: bool
    published_at: Optional[datetime]


@dataclass(frozen=True)
class PublishResult:
    updated_at: datetime
    published_at: datetime
    is_published: bool = True


class VersionStore(Protocol):
    """Operations a content session needs from its backing store.

    Every operation is atomic per record. Concurrent draft writes to
    the same slug are last-write-wins unless the caller passes
    `expected_updated_at`.
    """

    async def fetch_for_public_read(self, slug: str) -> Optional[PublicRecord]:
        """Published view of `slug`, or None when nothing is published."""

    async def fetch_for_authoring(self, slug: str) -> Optional[AuthoringRecord]:
        """Draft and published documents of `slug`, or None when absent."""

    async def upsert_draft(
        self,
        slug: str,
        document: Document,
        *,
        expected_updated_at: Optional[datetime] = None,
    ) -> DraftWriteResult:
        """Write the draft column, creating the record if needed."""

    async def publish(self, slug: str, document: Document) -> PublishResult:
        """Write `document` into both columns and mark the record published."""


@dataclass
class _Row:
    draft_document: Optional[Document] = None
    published_document: Optional[Document] = None
    is_published: bool = False
    updated_at: Optional[datetime] = None
    published_at: Optional[datetime] = None


class InMemoryVersionStore:
    """
    Dict-backed VersionStore.

    Documents are deep-copied on the way in and out, so neither the
    writer nor a reader can alias stored state. Each operation yields
    to the event loop once before touching the row, which makes it a
    real suspension point for callers.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = utcnow,
        latency: float = 0.0,
    ) -> None:
        self._rows: dict[str, _Row] = {}
        self._clock = clock
        self._latency = latency
        self._failures: list[Exception] = []
        self._persistent_failure: Optional[Exception] = None
        self.fetch_count = 0
        self.write_count = 0

    # -------------------------------------------------
    # Failure injection
    # -------------------------------------------------
    def fail_next(self, error: Optional[Exception] = None) -> None:
        """Make the next operation raise `error` (a StoreError by default)."""
        self._failures.append(error or StoreError("Simulated store failure"))

    def fail_always(self, error: Optional[Exception] = None) -> None:
        self._persistent_failure = error or StoreError("Store unavailable")

    def recover(self) -> None:
        self._failures.clear()
        self._persistent_failure = None

    async def _enter(self, operation: str, slug: str) -> None:
        await asyncio.sleep(self._latency)

        if self._persistent_failure is not None:
            logger.debug("%s(%s) failing: store marked unavailable", operation, slug)
            raise self._persistent_failure
        if self._failures:
            logger.debug("%s(%s) failing: injected failure", operation, slug)
            raise self._failures.pop(0)

    # -------------------------------------------------
    # VersionStore
    # -------------------------------------------------
    async def fetch_for_public_read(self, slug: str) -> Optional[PublicRecord]:
        await self._enter("fetch_for_public_read", slug)
        self.fetch_count += 1

        row = self._rows.get(slug)
        if row is None or not row.is_published:
            return None

        return PublicRecord(
            published_document=copy.deepcopy(row.published_document),
            is_published=row.is_published,
            updated_at=row.updated_at,
            published_at=row.published_at,
        )

    async def fetch_for_authoring(self, slug: str) -> Optional[AuthoringRecord]:
        await self._enter("fetch_for_authoring", slug)
        self.fetch_count += 1

        row = self._rows.get(slug)
        if row is None:
            return None

        return AuthoringRecord(
            draft_document=copy.deepcopy(row.draft_document),
            published_document=copy.deepcopy(row.published_document),
            is_published=row.is_published,
            updated_at=row.updated_at,
            published_at=row.published_at,
        )

    async def upsert_draft(
        self,
        slug: str,
        document: Document,
        *,
        expected_updated_at: Optional[datetime] = None,
    ) -> DraftWriteResult:
        await self._enter("upsert_draft", slug)

        row = self._rows.setdefault(slug, _Row())

        if (
            expected_updated_at is not None
            and row.updated_at is not None
            and row.updated_at > expected_updated_at
        ):
            raise ConflictError()

        row.draft_document = copy.deepcopy(document)
        row.updated_at = next_write_timestamp(self._clock(), row.updated_at, row.published_at)
        self._check(row)
        self.write_count += 1

        return DraftWriteResult(
            updated_at=row.updated_at,
            is_published=row.is_published,
            published_at=row.published_at,
        )

    async def publish(self, slug: str, document: Document) -> PublishResult:
        await self._enter("publish", slug)

        row = self._rows.setdefault(slug, _Row())
        stamp = next_write_timestamp(self._clock(), row.updated_at, row.published_at)

        row.draft_document = copy.deepcopy(document)
        row.published_document = copy.deepcopy(document)
        row.is_published = True
        row.updated_at = stamp
        row.published_at = stamp
        self._check(row)
        self.write_count += 1

        return PublishResult(updated_at=stamp, published_at=stamp)

    @staticmethod
    def _check(row: _Row) -> None:
        assert_page_record(
            is_published=row.is_published,
            published_document=row.published_document,
            updated_at=row.updated_at,
            published_at=row.published_at,
        )
