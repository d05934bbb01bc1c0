"""Unit tests for HttpRemoteStore using httpx.MockTransport."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import httpx
import pytest

from todo_cli.adapters.remote import HttpRemoteStore
from todo_cli.exceptions import RemoteDecodeError, TransportError
from todo_cli.models import Task, TaskCollection

_NOW = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)

COLLECTION = TaskCollection(
    todos=[Task(id=1, title="Buy milk", created_at=_NOW)], next_id=2
)


def _store(handler, **kwargs) -> tuple[HttpRemoteStore, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def recording(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    client = httpx.Client(transport=httpx.MockTransport(recording))
    return HttpRemoteStore("http://todo.test/", client=client, **kwargs), requests


class TestUrl:
    def test_joins_server_and_endpoint(self):
        store = HttpRemoteStore("http://todo.test/")
        assert store.url == "http://todo.test/api/todos"
        assert store.describe() == "http://todo.test/"

    def test_custom_endpoint(self):
        store = HttpRemoteStore("http://todo.test", endpoint="/v2/list")
        assert store.url == "http://todo.test/v2/list"


class TestAuth:
    def test_basic_auth_when_both_given(self):
        store, requests = _store(
            lambda request: httpx.Response(200, text=COLLECTION.to_json()),
            username="ann",
            password="secret",
        )
        store.fetch()
        assert requests[0].headers["Authorization"].startswith("Basic ")

    @pytest.mark.parametrize("username, password", [("ann", None), (None, None)])
    def test_no_auth_when_incomplete(self, username, password):
        store, requests = _store(
            lambda request: httpx.Response(200, text=COLLECTION.to_json()),
            username=username,
            password=password,
        )
        store.fetch()
        assert "Authorization" not in requests[0].headers


class TestFetch:
    def test_parses_collection(self):
        store, requests = _store(
            lambda request: httpx.Response(200, text=COLLECTION.to_json())
        )
        assert store.fetch() == COLLECTION
        assert requests[0].method == "GET"
        assert str(requests[0].url) == "http://todo.test/api/todos"

    def test_non_2xx_is_transport_error(self):
        store, _ = _store(lambda request: httpx.Response(503, text="maintenance"))
        with pytest.raises(TransportError) as exc_info:
            store.fetch()
        assert exc_info.value.status_code == 503
        assert str(exc_info.value) == "maintenance (Status: 503)"

    def test_empty_error_body_uses_reason(self):
        store, _ = _store(lambda request: httpx.Response(404))
        with pytest.raises(TransportError, match=r"Not Found \(Status: 404\)"):
            store.fetch()

    def test_invalid_document(self):
        store, _ = _store(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(RemoteDecodeError, match="Invalid todo document"):
            store.fetch()

    def test_duplicate_ids_are_not_a_transport_error(self):
        document = {
            "todos": [
                {"id": 1, "title": "x", "created_at": "2026-01-01T00:00:00Z"},
                {"id": 1, "title": "y", "created_at": "2026-01-01T00:00:00Z"},
            ],
            "next_id": 9,
        }
        store, _ = _store(lambda request: httpx.Response(200, json=document))
        with pytest.raises(RemoteDecodeError) as exc_info:
            store.fetch()
        assert not isinstance(exc_info.value, TransportError)

    def test_connection_error(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        store, _ = _store(refuse)
        with pytest.raises(TransportError, match="Could not reach"):
            store.fetch()


class TestStore:
    def test_posts_compact_json(self):
        store, requests = _store(lambda request: httpx.Response(201))
        store.store(COLLECTION)

        request = requests[0]
        assert request.method == "POST"
        assert request.headers["Content-Type"] == "application/json"
        assert b"\n" not in request.content
        assert json.loads(request.content) == COLLECTION.to_dict()

    def test_any_2xx_is_success(self):
        store, _ = _store(lambda request: httpx.Response(204))
        store.store(COLLECTION)

    def test_error_status(self):
        store, _ = _store(lambda request: httpx.Response(401, text="bad credentials"))
        with pytest.raises(TransportError, match="bad credentials"):
            store.store(COLLECTION)


class TestClose:
    def test_does_not_close_injected_client(self):
        client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        with HttpRemoteStore("http://todo.test", client=client):
            pass
        assert client.is_closed is False

    def test_closes_own_client(self):
        store = HttpRemoteStore("http://todo.test")
        client = store._get_client()
        store.close()
        assert client.is_closed is True
