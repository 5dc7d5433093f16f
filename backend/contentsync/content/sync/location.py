# contentsync/content/sync/location.py
import uuid
from typing import Optional
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

PREVIEW_PARAM = "preview"
PREVIEW_DRAFT = "draft"
VERSION_PARAM = "v"


class PreviewLocation:
    """
    The navigable URL of a preview surface.

    `preview=draft` selects draft content; `v=<token>` is bumped by the
    authoring side after each write so that a polling preview can
    notice the change without any other channel.
    """

    def __init__(self, url: str):
        self._url = url

    @property
    def url(self) -> str:
        return self._url

    def navigate(self, url: str) -> None:
        self._url = url

    def param(self, name: str) -> Optional[str]:
        values = parse_qs(urlsplit(self._url).query).get(name)
        return values[-1] if values else None

    @property
    def is_draft_preview(self) -> bool:
        return self.param(PREVIEW_PARAM) == PREVIEW_DRAFT

    @property
    def version_token(self) -> Optional[str]:
        return self.param(VERSION_PARAM)

    def bump_version(self, token: Optional[str] = None) -> str:
        """Replace the `v` parameter with `token` (a fresh one if omitted)."""
        token = token or uuid.uuid4().hex[:12]

        parts = urlsplit(self._url)
        query = [
            (key, value)
            for key, values in parse_qs(parts.query, keep_blank_values=True).items()
            if key != VERSION_PARAM
            for value in values
        ]
        query.append((VERSION_PARAM, token))

        self._url = urlunsplit(parts._replace(query=urlencode(query)))
        return token

    def __repr__(self) -> str:
        return f"PreviewLocation({self._url!r})"
