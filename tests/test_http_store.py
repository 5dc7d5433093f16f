"""HttpVersionStore against the real Flask app, bridged through httpx.MockTransport."""

from __future__ import annotations

import httpx
import pytest

from contentsync.content.http_store import HttpVersionStore
from contentsync.content.session import ContentSession, SaveStatus, SessionMode, SessionState
from contentsync.domain.exceptions import ConflictError, StoreError

BASE_URL = "http://cms.test/api/v1"
FORWARDED_HEADERS = ("authorization", "content-type", "if-unmodified-since", "accept")


def _flask_transport(client) -> httpx.MockTransport:
    """Route httpx requests into the Flask test client."""

    def handler(request: httpx.Request) -> httpx.Response:
        headers = {k: v for k, v in request.headers.items() if k.lower() in FORWARDED_HEADERS}
        res = client.open(
            request.url.path,
            method=request.method,
            query_string=request.url.query.decode(),
            headers=headers,
            data=request.content,
        )
        return httpx.Response(
            res.status_code,
            headers={"Content-Type": res.headers.get("Content-Type", "application/json")},
            content=res.get_data(),
        )

    return httpx.MockTransport(handler)


@pytest.fixture
async def make_store(client):
    clients = []

    def _make(token=None) -> HttpVersionStore:
        http = httpx.AsyncClient(transport=_flask_transport(client))
        clients.append(http)
        return HttpVersionStore(BASE_URL, token=token, client=http)

    yield _make

    for http in clients:
        await http.aclose()


@pytest.fixture
def author_store(make_store, admin_token):
    return make_store(admin_token)


def _static_store(handler) -> HttpVersionStore:
    return HttpVersionStore(BASE_URL, client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


class TestRecords:
    async def test_missing_page_is_none(self, author_store) -> None:
        assert await author_store.fetch_for_authoring("careers") is None
        assert await author_store.fetch_for_public_read("careers") is None

    async def test_draft_then_publish(self, author_store) -> None:
        draft = await author_store.upsert_draft("careers", {"hero": {"title": "V1"}})
        assert draft.is_published is False
        assert draft.updated_at.tzinfo is not None

        record = await author_store.fetch_for_authoring("careers")
        assert record.draft_document == {"hero": {"title": "V1"}}
        assert record.updated_at == draft.updated_at

        published = await author_store.publish("careers", {"hero": {"title": "V1"}})
        assert published.published_at == published.updated_at

        public = await author_store.fetch_for_public_read("careers")
        assert public.published_document == {"hero": {"title": "V1"}}
        assert public.is_published is True

    async def test_expected_updated_at_conflict(self, author_store) -> None:
        first = await author_store.upsert_draft("careers", {"hero": {"title": "A"}})
        await author_store.upsert_draft("careers", {"hero": {"title": "B"}})

        with pytest.raises(ConflictError) as excinfo:
            await author_store.upsert_draft("careers", {"hero": {"title": "C"}}, expected_updated_at=first.updated_at)
        assert excinfo.value.status == 409

    async def test_forbidden_write_is_store_error(self, make_store, viewer_headers) -> None:
        token = viewer_headers["Authorization"].split()[1]
        store = make_store(token)

        with pytest.raises(StoreError) as excinfo:
            await store.upsert_draft("careers", {"hero": {}})
        assert excinfo.value.status == 403


class TestTransportErrors:
    async def test_network_failure(self) -> None:
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        store = _static_store(handler)
        with pytest.raises(StoreError, match="unreachable"):
            await store.fetch_for_public_read("careers")

    async def test_server_error_without_json(self) -> None:
        store = _static_store(lambda request: httpx.Response(502, text="Bad Gateway"))

        with pytest.raises(StoreError) as excinfo:
            await store.fetch_for_authoring("careers")
        assert excinfo.value.status == 502

    async def test_invalid_json_body(self) -> None:
        store = _static_store(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(StoreError, match="invalid JSON"):
            await store.fetch_for_public_read("careers")

    async def test_error_message_comes_from_body(self) -> None:
        store = _static_store(
            lambda request: httpx.Response(400, json={"error": "ValidationError", "message": "bad document"})
        )

        with pytest.raises(StoreError, match="bad document"):
            await store.publish("careers", {})

    async def test_slug_is_quoted(self) -> None:
        seen = []

        def handler(request):
            seen.append(request.url.raw_path)
            return httpx.Response(404, json={"error": "NotFound"})

        await _static_store(handler).fetch_for_public_read("a/b")
        assert seen == [b"/api/v1/content/a%2Fb"]


class TestMalformedResponses:
    async def test_list_body_is_store_error(self) -> None:
        store = _static_store(lambda request: httpx.Response(200, json=["unexpected"]))

        with pytest.raises(StoreError, match="expected an object"):
            await store.fetch_for_authoring("careers")
        with pytest.raises(StoreError, match="expected an object"):
            await store.upsert_draft("careers", {})

    async def test_unreadable_timestamp_is_store_error(self) -> None:
        store = _static_store(lambda request: httpx.Response(200, json={"updated_at": "not-a-date"}))

        with pytest.raises(StoreError, match="malformed record"):
            await store.upsert_draft("careers", {})
        with pytest.raises(StoreError, match="malformed record"):
            await store.fetch_for_public_read("careers")

    async def test_write_result_without_timestamps_is_store_error(self) -> None:
        store = _static_store(lambda request: httpx.Response(200, json={"is_published": True}))

        with pytest.raises(StoreError, match="malformed record"):
            await store.publish("careers", {})

    async def test_unserializable_document_is_store_error(self) -> None:
        sent = []
        store = _static_store(lambda request: sent.append(request) or httpx.Response(200, json={}))

        with pytest.raises(StoreError, match="could not be built"):
            await store.upsert_draft("careers", {"hero": {"title": object()}})
        assert sent == []

    async def test_preview_load_of_list_body_moves_to_error(self) -> None:
        store = _static_store(lambda request: httpx.Response(200, json=["unexpected"]))
        session = ContentSession("careers", store, mode=SessionMode.CONSUMING_DRAFT)

        document = await session.load()

        assert session.state is SessionState.ERROR
        assert "expected an object" in session.error
        assert document == session.defaults

    async def test_save_against_bad_timestamp_fails_and_keeps_edits(self) -> None:
        store = _static_store(lambda request: httpx.Response(200, json={"updated_at": "not-a-date"}))
        session = ContentSession("careers", store)
        session.mutate(lambda doc: {**doc, "hero": {**doc["hero"], "title": "Unsaved"}})

        with pytest.raises(StoreError):
            await session.save_draft()

        assert session.save_status is SaveStatus.FAILED
        assert session.has_unsaved_changes
        assert session.document["hero"]["title"] == "Unsaved"


class TestClientOwnership:
    async def test_supplied_client_is_left_open(self) -> None:
        http = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(404)))
        async with HttpVersionStore(BASE_URL, client=http):
            pass
        assert not http.is_closed
        await http.aclose()

    async def test_owned_client_is_closed(self) -> None:
        store = HttpVersionStore(BASE_URL)
        await store.aclose()
        assert store._client.is_closed

    def test_from_config(self) -> None:
        store = HttpVersionStore.from_config(
            {"CONTENT_API_URL": "http://cms.test/api/v1/", "CONTENT_API_TIMEOUT": 2.5},
            token="t",
        )
        assert store.base_url == BASE_URL
        assert store._headers["Authorization"] == "Bearer t"


class TestSessionsOverHttp:
    async def test_author_preview_and_public(self, make_store, admin_token) -> None:
        author = ContentSession("careers", make_store(admin_token))
        await author.load()
        assert author.state is SessionState.READY
        assert author.updated_at is None

        author.mutate(lambda doc: {**doc, "hero": {**doc["hero"], "title": "Draft title"}})
        await author.save_draft()

        preview = ContentSession("careers", make_store(admin_token), mode=SessionMode.CONSUMING_DRAFT)
        await preview.load()
        assert preview.document["hero"]["title"] == "Draft title"

        public = ContentSession("careers", make_store(), mode=SessionMode.CONSUMING_PUBLISHED)
        await public.load()
        assert public.document == public.defaults
        assert public.is_published is False

        await author.publish_content()
        await public.load()
        assert public.document["hero"]["title"] == "Draft title"
        assert public.content_version == author.content_version

    async def test_concurrent_author_conflict(self, make_store, admin_token) -> None:
        tab_one = ContentSession("careers", make_store(admin_token))
        tab_two = ContentSession("careers", make_store(admin_token))
        await tab_one.save_draft()
        await tab_two.load()
        await tab_one.save_draft()

        with pytest.raises(ConflictError):
            await tab_two.save_draft(if_unmodified=True)
        assert tab_two.save_status is SaveStatus.FAILED

    async def test_unauthorized_load_keeps_defaults(self, make_store) -> None:
        session = ContentSession("careers", make_store())
        await session.load()

        assert session.state is SessionState.ERROR
        assert session.error
        assert session.document == session.defaults
