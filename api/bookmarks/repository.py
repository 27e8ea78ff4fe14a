"""
Bookmark persistence (raw SQL).

Every function takes the connection explicitly; nothing here validates or
sanitizes values.
"""

from __future__ import annotations

from typing import Any

import asyncpg

from core import db

UPDATABLE_COLUMNS = ("title", "url", "description", "rating")


async def list_bookmarks(conn: asyncpg.Connection) -> list[dict[str, Any]]:
    return await db.fetch_all(
        conn,
        """
        SELECT id, title, url, description, rating
        FROM bookmarks
        ORDER BY id ASC
        """,
    )


async def insert_bookmark(conn: asyncpg.Connection, record: dict[str, Any]) -> dict[str, Any]:
    row = await db.fetch_one(
        conn,
        """
        INSERT INTO bookmarks (title, url, description, rating)
        VALUES ($1, $2, $3, $4)
        RETURNING id, title, url, description, rating
        """,
        record["title"],
        record["url"],
        record.get("description"),
        record["rating"],
    )
    if row is None:
        raise RuntimeError("Failed to insert bookmark.")
    return row


async def get_bookmark_by_id(conn: asyncpg.Connection, bookmark_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        conn,
        """
        SELECT id, title, url, description, rating
        FROM bookmarks
        WHERE id = $1
        """,
        bookmark_id,
    )


async def update_bookmark(conn: asyncpg.Connection, bookmark_id: int, fields: dict[str, Any]) -> int:
    """
    Update only the given columns. Returns the affected row count.
    """
    # Column names come from a fixed whitelist; values are always bound.
    columns = [name for name in UPDATABLE_COLUMNS if name in fields]
    if not columns:
        return 0

    assignments = ", ".join(f"{name} = ${index}" for index, name in enumerate(columns, start=2))
    return await db.execute(
        conn,
        f"UPDATE bookmarks SET {assignments} WHERE id = $1",
        bookmark_id,
        *(fields[name] for name in columns),
    )


async def delete_bookmark(conn: asyncpg.Connection, bookmark_id: int) -> int:
    return await db.execute(
        conn,
        """
        DELETE FROM bookmarks
        WHERE id = $1
        """,
        bookmark_id,
    )
