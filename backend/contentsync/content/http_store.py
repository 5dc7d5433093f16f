# contentsync/content/http_store.py
"""VersionStore over the content REST API (see api/v1/content.py)."""
from __future__ import annotations

import contextlib
import logging
from datetime import datetime, timezone
from types import TracebackType
from typing import Any, Iterator, Optional
from urllib.parse import quote

import httpx
from dateutil.parser import isoparse

from contentsync.domain.exceptions import ConflictError, StoreError

from .store import AuthoringRecord, Document, DraftWriteResult, PublicRecord, PublishResult

logger = logging.getLogger(__name__)

# Raised while turning a response body into records
DECODE_ERRORS = (KeyError, TypeError, ValueError, OverflowError, AttributeError)


def _parse_ts(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    ts = isoparse(str(value))
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


def _required_ts(data: dict, key: str) -> datetime:
    ts = _parse_ts(data[key])
    if ts is None:
        raise KeyError(key)
    return ts


class HttpVersionStore:
    """
    Talks to the content API with an ``httpx.AsyncClient``.

    Usage:
        async with HttpVersionStore("https://cms.example.com/api/v1", token=jwt) as store:
            session = ContentSession("careers", store)
            await session.load()

    `client` may be supplied (e.g. with a mock transport); the store
    only closes clients it created itself.
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: Optional[str] = None,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._headers = {"Accept": "application/json"}
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    @classmethod
    def from_config(cls, config: Any, **kwargs: Any) -> "HttpVersionStore":
        return cls(
            config["CONTENT_API_URL"],
            timeout=config.get("CONTENT_API_TIMEOUT", 10.0),
            **kwargs,
        )

    async def __aenter__(self) -> "HttpVersionStore":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # -------------------------------------------------
    # Transport
    # -------------------------------------------------
    def _url(self, slug: str, suffix: str = "") -> str:
        return f"{self.base_url}/content/{quote(slug, safe='')}{suffix}"

    async def _request(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        headers: Optional[dict] = None,
        allow_missing: bool = False,
    ) -> Optional[dict]:
        try:
            response = await self._client.request(
                method,
                url,
                json=json,
                headers={**self._headers, **(headers or {})},
            )
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise StoreError(f"Content API unreachable: {exc}") from exc
        except (TypeError, ValueError) as exc:
            # the body could not be encoded (e.g. a non-JSON value in the document)
            logger.warning("%s %s not sent: %s", method, url, exc)
            raise StoreError(f"Request to content API could not be built: {exc}") from exc

        if response.status_code == 404 and allow_missing:
            return None
        if response.status_code == 409:
            raise ConflictError(self._error_message(response))
        if response.is_error:
            message = self._error_message(response)
            logger.warning("%s %s returned %s: %s", method, url, response.status_code, message)
            raise StoreError(message, status=response.status_code)

        try:
            body = response.json()
        except ValueError as exc:
            raise StoreError("Content API returned invalid JSON", status=response.status_code) from exc

        if not isinstance(body, dict):
            logger.warning("%s %s returned a %s body", method, url, type(body).__name__)
            raise StoreError(
                f"Content API returned a {type(body).__name__}, expected an object",
                status=response.status_code,
            )
        return body

    @contextlib.contextmanager
    def _decoding(self, url: str) -> Iterator[None]:
        """Turn a malformed record in a response body into a StoreError."""
        try:
            yield
        except DECODE_ERRORS as exc:
            logger.warning("Malformed record from %s: %s", url, exc)
            raise StoreError(f"Content API returned a malformed record: {exc}") from exc

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason_phrase
        if isinstance(body, dict):
            return body.get("message") or body.get("error") or response.reason_phrase
        return response.reason_phrase

    # -------------------------------------------------
    # VersionStore
    # -------------------------------------------------
    async def fetch_for_public_read(self, slug: str) -> Optional[PublicRecord]:
        url = self._url(slug)
        data = await self._request("GET", url, allow_missing=True)
        if data is None:
            return None

        with self._decoding(url):
            return PublicRecord(
                published_document=data.get("published_document"),
                is_published=bool(data.get("is_published")),
                updated_at=_parse_ts(data.get("updated_at")),
                published_at=_parse_ts(data.get("published_at")),
            )

    async def fetch_for_authoring(self, slug: str) -> Optional[AuthoringRecord]:
        url = self._url(slug, "/draft")
        data = await self._request("GET", url, allow_missing=True)
        if data is None:
            return None

        with self._decoding(url):
            return AuthoringRecord(
                draft_document=data.get("draft_document"),
                published_document=data.get("published_document"),
                is_published=bool(data.get("is_published")),
                updated_at=_parse_ts(data.get("updated_at")),
                published_at=_parse_ts(data.get("published_at")),
            )

    async def upsert_draft(
        self,
        slug: str,
        document: Document,
        *,
        expected_updated_at: Optional[datetime] = None,
    ) -> DraftWriteResult:
        headers = {}
        if expected_updated_at is not None:
            headers["If-Unmodified-Since"] = expected_updated_at.isoformat()

        url = self._url(slug, "/draft")
        data = await self._request("PUT", url, json={"document": document}, headers=headers)

        with self._decoding(url):
            return DraftWriteResult(
                updated_at=_required_ts(data, "updated_at"),
                is_published=bool(data.get("is_published")),
                published_at=_parse_ts(data.get("published_at")),
            )

    async def publish(self, slug: str, document: Document) -> PublishResult:
        url = self._url(slug, "/publish")
        data = await self._request("PUT", url, json={"document": document})

        with self._decoding(url):
            return PublishResult(
                updated_at=_required_ts(data, "updated_at"),
                published_at=_required_ts(data, "published_at"),
                is_published=bool(data.get("is_published", True)),
            )
