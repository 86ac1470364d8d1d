import json

import httpx
import pytest

from permit_intake.storage.exceptions import StorageError
from permit_intake.storage.supabase_adapter import SupabaseObjectStore

BASE_URL = "https://abc.supabase.co"


def _make_store(handler) -> tuple[SupabaseObjectStore, list[httpx.Request]]:  # type: ignore[no-untyped-def]
    requests: list[httpx.Request] = []

    def _record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    client = httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(_record))
    store = SupabaseObjectStore(
        base_url=BASE_URL, api_key="key", bucket="documentos", client=client
    )
    return store, requests


class TestPut:
    def test_posts_object_without_upsert(self) -> None:
        store, requests = _make_store(lambda r: httpx.Response(200, json={"Key": "x"}))

        locator = store.put("docs/biz-1/1_a.pdf", b"%PDF", "application/pdf")

        assert locator == "docs/biz-1/1_a.pdf"
        request = requests[0]
        assert request.method == "POST"
        assert request.url.path == "/storage/v1/object/documentos/docs/biz-1/1_a.pdf"
        assert request.headers["content-type"] == "application/pdf"
        assert request.headers["x-upsert"] == "false"
        assert request.content == b"%PDF"

    def test_http_error_raises_storage_error(self) -> None:
        store, _requests = _make_store(lambda r: httpx.Response(409, text="Duplicate"))

        with pytest.raises(StorageError, match="409 Duplicate"):
            store.put("docs/biz-1/1_a.pdf", b"%PDF", "application/pdf")

    def test_transport_error_raises_storage_error(self) -> None:
        def _fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        store, _requests = _make_store(_fail)

        with pytest.raises(StorageError, match="connection refused"):
            store.put("docs/biz-1/1_a.pdf", b"%PDF", "application/pdf")


class TestPublicUrl:
    def test_builds_public_object_url(self) -> None:
        store, _requests = _make_store(lambda r: httpx.Response(200))
        assert store.public_url("docs/biz-1/1_a.pdf") == (
            f"{BASE_URL}/storage/v1/object/public/documentos/docs/biz-1/1_a.pdf"
        )


class TestDelete:
    def test_sends_prefixes(self) -> None:
        store, requests = _make_store(lambda r: httpx.Response(200, json=[]))

        store.delete(["docs/biz-1/1_a.pdf", "docs/biz-1/2_b.png"])

        request = requests[0]
        assert request.method == "DELETE"
        assert request.url.path == "/storage/v1/object/documentos"
        assert json.loads(request.content) == {
            "prefixes": ["docs/biz-1/1_a.pdf", "docs/biz-1/2_b.png"]
        }

    def test_nothing_to_delete_skips_request(self) -> None:
        store, requests = _make_store(lambda r: httpx.Response(200))

        store.delete([])

        assert requests == []
