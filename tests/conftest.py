"""Shared pytest fixtures and test helpers for userlist tests."""

from __future__ import annotations

import functools
import json
import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

import httpx
import pytest
from click.testing import CliRunner

from userlist.domain.records import UserCandidate, UserRecord
from userlist.infrastructure import loader as loader_mod
from userlist.services.telemetry import disable_telemetry

ENDPOINT = "https://users.test/users"


def john() -> dict[str, Any]:
    return {
        "id": 1,
        "firstName": "John",
        "lastName": "Doe",
        "company": {"name": "Acme", "title": "Engineer"},
        "address": {"country": "USA"},
    }


def jane() -> dict[str, Any]:
    return {
        "id": 2,
        "firstName": "Jane",
        "lastName": "Smith",
        "company": {"name": "Globex", "title": "Manager"},
        "address": {"country": "Canada"},
    }


class FakeListingService:
    """In-process stand-in for the user listing endpoint."""

    def __init__(self) -> None:
        self.status = 200
        self.body: Any = {"users": [john(), jane()]}
        self.raw: bytes | None = None
        self.calls = 0

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        if self.raw is not None:
            return httpx.Response(self.status, content=self.raw)
        return httpx.Response(self.status, content=json.dumps(self.body).encode())

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def loader(self) -> loader_mod.RemoteLoader:
        return loader_mod.RemoteLoader(ENDPOINT, transport=self.transport)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def listing() -> FakeListingService:
    return FakeListingService()


@pytest.fixture
def records() -> list[UserRecord]:
    return [UserRecord.model_validate(john()), UserRecord.model_validate(jane())]


@pytest.fixture
def valid_candidate() -> UserCandidate:
    return UserCandidate(
        first_name="Ada",
        last_name="Lovelace",
        company_name="Analytical",
        role="Programmer",
        country="UK",
    )


@pytest.fixture
def _isolated_cli(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    listing: FakeListingService,
) -> None:
    """Run CLI commands in an empty directory against the fake listing service.

    Use via ``@pytest.mark.usefixtures("_isolated_cli")`` on command test classes.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("USERLIST_CONFIG", raising=False)
    monkeypatch.setattr(
        loader_mod,
        "RemoteLoader",
        functools.partial(loader_mod.RemoteLoader, transport=listing.transport),
    )


@pytest.fixture(autouse=True)
def _restore_global_state() -> Generator[None]:
    """Undo the logging and telemetry setup performed by AppContext."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    app_level = logging.getLogger("userlist").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("userlist").setLevel(app_level)
    disable_telemetry()
