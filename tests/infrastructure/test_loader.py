"""Tests for the remote user loader."""

from __future__ import annotations

import httpx
import pytest

from userlist.infrastructure.loader import DEFAULT_ENDPOINT, LoadError, RemoteLoader, parse_users

from tests.conftest import FakeListingService, jane, john


class TestRemoteLoader:
    def test_loads_users_in_order(self, listing: FakeListingService) -> None:
        records = listing.loader().load()
        assert [r.first_name for r in records] == ["John", "Jane"]
        assert listing.calls == 1

    def test_requests_configured_endpoint(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"users": []})

        loader = RemoteLoader("http://localhost:3000/users", transport=httpx.MockTransport(handler))
        assert loader.load() == []
        assert seen[0].method == "GET"
        assert str(seen[0].url) == "http://localhost:3000/users"

    def test_default_endpoint(self) -> None:
        assert RemoteLoader().endpoint == DEFAULT_ENDPOINT == "https://dummyjson.com/users"

    def test_http_error_status(self, listing: FakeListingService) -> None:
        listing.status = 500
        with pytest.raises(LoadError, match="HTTP 500") as excinfo:
            listing.loader().load()
        assert excinfo.value.endpoint == "https://users.test/users"

    def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        loader = RemoteLoader(transport=httpx.MockTransport(handler))
        with pytest.raises(LoadError, match="connection refused"):
            loader.load()

    def test_non_json_body(self, listing: FakeListingService) -> None:
        listing.raw = b"<html>oops</html>"
        with pytest.raises(LoadError, match="not JSON"):
            listing.loader().load()

    def test_body_not_utf8(self, listing: FakeListingService) -> None:
        listing.raw = b'{"users": [{"firstName": "\xff\xfe"}]}'
        with pytest.raises(LoadError):
            listing.loader().load()

    def test_bare_array_accepted(self, listing: FakeListingService) -> None:
        listing.body = [john()]
        assert [r.id for r in listing.loader().load()] == ["1"]


class TestParseUsers:
    def test_missing_users_key(self) -> None:
        with pytest.raises(LoadError, match="no 'users'"):
            parse_users({"total": 0})

    def test_malformed_record(self) -> None:
        broken = john()
        del broken["address"]
        with pytest.raises(LoadError, match="malformed"):
            parse_users({"users": [broken, jane()]})

    def test_wrong_type(self) -> None:
        with pytest.raises(LoadError):
            parse_users("users")

    def test_duplicate_ids(self) -> None:
        with pytest.raises(LoadError, match="repeats id '1'"):
            parse_users({"users": [john(), john()]})

    def test_document_store_ids(self) -> None:
        doc = john()
        del doc["id"]
        doc["_id"] = "6640a1"
        assert parse_users([doc])[0].id == "6640a1"

    def test_extra_payload_fields_ignored(self) -> None:
        records = parse_users({"users": [john()], "total": 1, "skip": 0, "limit": 30})
        assert len(records) == 1
