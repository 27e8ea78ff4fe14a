from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient


class InMemoryGateway:
    """Stands in for bookmarks.repository; rows live in a dict keyed by id."""

    def __init__(self) -> None:
        self.rows: dict[int, dict[str, Any]] = {}
        self.connections: list[Any] = []
        self.writes: list[tuple[str, Any]] = []
        self._next_id = 1

    def seed(self, **fields: Any) -> dict[str, Any]:
        row = {"description": None, **fields, "id": self._next_id}
        self.rows[row["id"]] = row
        self._next_id += 1
        return dict(row)

    async def list_bookmarks(self, conn) -> list[dict[str, Any]]:
        self.connections.append(conn)
        return [dict(self.rows[key]) for key in sorted(self.rows)]

    async def insert_bookmark(self, conn, record: dict[str, Any]) -> dict[str, Any]:
        self.connections.append(conn)
        self.writes.append(("insert", dict(record)))
        return self.seed(**record)

    async def get_bookmark_by_id(self, conn, bookmark_id: int) -> dict[str, Any] | None:
        self.connections.append(conn)
        row = self.rows.get(bookmark_id)
        return dict(row) if row is not None else None

    async def update_bookmark(self, conn, bookmark_id: int, fields: dict[str, Any]) -> int:
        self.connections.append(conn)
        self.writes.append(("update", dict(fields)))
        if bookmark_id not in self.rows:
            return 0
        self.rows[bookmark_id].update(fields)
        return 1

    async def delete_bookmark(self, conn, bookmark_id: int) -> int:
        self.connections.append(conn)
        self.writes.append(("delete", bookmark_id))
        return 1 if self.rows.pop(bookmark_id, None) is not None else 0


FAKE_CONNECTION = object()


@pytest.fixture
def fake_connection():
    return FAKE_CONNECTION


@pytest.fixture
def gateway(monkeypatch) -> InMemoryGateway:
    from bookmarks import repository

    gw = InMemoryGateway()
    for name in (
        "list_bookmarks",
        "insert_bookmark",
        "get_bookmark_by_id",
        "update_bookmark",
        "delete_bookmark",
    ):
        monkeypatch.setattr(repository, name, getattr(gw, name))
    return gw


@pytest.fixture
def app(gateway):
    from core import db
    from main import create_app

    application = create_app()
    application.dependency_overrides[db.connection] = lambda: FAKE_CONNECTION
    return application


@pytest.fixture
def client(app) -> TestClient:
    # Not used as a context manager, so the lifespan (real pool) never runs.
    return TestClient(app)
