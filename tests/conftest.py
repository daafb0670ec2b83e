"""Shared pytest fixtures for the files_manager test suite."""

from __future__ import annotations

from typing import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from files_manager.config import DbConfig
from files_manager.store.db_client import DBClient


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def db_config() -> DbConfig:
    return DbConfig(host="localhost", port=27017, database="files_manager_test")


@pytest.fixture(autouse=True)
def clean_db_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # setenv first so teardown also removes values a .env file loads mid-test
    for var in ("DB_HOST", "DB_PORT", "DB_DATABASE", "LOG_LEVEL"):
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)


# ---------------------------------------------------------------------------
# Motor client fakes
# ---------------------------------------------------------------------------


def _make_collection(count: int = 0) -> MagicMock:
    col = MagicMock()
    col.count_documents = AsyncMock(return_value=count)
    return col


@pytest.fixture
def collections() -> dict[str, MagicMock]:
    """Per-name collection mocks; tests replace entries to change counts."""
    return {"users": _make_collection(0), "files": _make_collection(0)}


@pytest.fixture
def motor_client(collections: dict[str, MagicMock]) -> MagicMock:
    """A stand-in for AsyncIOMotorClient whose ping succeeds."""
    client = MagicMock()
    client.admin.command = AsyncMock(return_value={"ok": 1.0})

    db = MagicMock()
    db.__getitem__.side_effect = lambda name: collections.setdefault(name, _make_collection(0))
    client.__getitem__.return_value = db
    return client


@pytest.fixture
def make_db_client(motor_client: MagicMock) -> Callable[..., DBClient]:
    def _factory(**kwargs: object) -> DBClient:
        kwargs.setdefault("client", motor_client)
        return DBClient(**kwargs)  # type: ignore[arg-type]

    return _factory


@pytest.fixture
async def connected_client(make_db_client: Callable[..., DBClient]) -> DBClient:
    db_client = make_db_client()
    await db_client.connect()
    return db_client
