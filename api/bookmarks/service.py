"""
Bookmark validation and serialization.

Scope:
- validate create/update payloads before anything is written
- resolve a bookmark by id (shared precondition of retrieve/update/delete)
- sanitize rows on the way out

Operations return either their success value or a `BookmarkError`; they never
raise for bad input. Persistence failures are not caught here.
"""

from __future__ import annotations

import logging
import re
from typing import Any

import asyncpg
from bleach.sanitizer import Cleaner
from pydantic import HttpUrl, TypeAdapter, ValidationError

from . import repository, schemas
from .errors import BookmarkError, EmptyUpdate, InvalidRating, InvalidUrl, MissingField, NotFound

REQUIRED_FIELDS = ("title", "url", "rating")
MIN_RATING = 0
MAX_RATING = 5

# URLs are served back unescaped, so only RFC 3986 characters are accepted.
_URI_CHARS = re.compile(r"[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]+")
_BAD_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_HTTP_URL = TypeAdapter(HttpUrl)

# Disallowed markup is escaped rather than stripped, so the caller still sees it.
_TEXT_CLEANER = Cleaner(strip=False)

logger = logging.getLogger(__name__)


def is_web_url(value: Any) -> bool:
    """
    True for an absolute http(s) URL with a host, written only with URI
    characters and well-formed percent escapes.
    """
    if not isinstance(value, str) or not value:
        return False
    if not _URI_CHARS.fullmatch(value) or _BAD_PERCENT_ESCAPE.search(value):
        return False
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError:
        return False
    return True


def parse_rating(value: Any) -> int | None:
    """
    Return the rating as an int, or None when it is not an integer in range.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        rating = value
    elif isinstance(value, float) and value.is_integer():
        rating = int(value)
    else:
        return None
    if rating < MIN_RATING or rating > MAX_RATING:
        return None
    return rating


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _clean_text(value: str | None) -> str:
    if value is None:
        return ""
    return _TEXT_CLEANER.clean(str(value))


def serialize_bookmark(row: dict[str, Any]) -> schemas.Bookmark:
    return schemas.Bookmark(
        id=int(row["id"]),
        title=_clean_text(row.get("title")),
        url=str(row["url"]),
        description=_clean_text(row.get("description")),
        rating=int(row["rating"]),
    )


def validate_create(payload: schemas.BookmarkCreate) -> dict[str, Any] | BookmarkError:
    data = payload.model_dump()
    for field in REQUIRED_FIELDS:
        if _is_blank(data[field]):
            logger.error("%s is required", field)
            return MissingField(field)

    rating = parse_rating(data["rating"])
    if rating is None:
        logger.error("Invalid rating '%s' supplied", data["rating"])
        return InvalidRating(data["rating"])

    if not is_web_url(data["url"]):
        logger.error("Invalid url '%s' supplied", data["url"])
        return InvalidUrl(data["url"])

    return {
        "title": data["title"],
        "url": data["url"],
        "description": data["description"],
        "rating": rating,
    }


def validate_update(payload: schemas.BookmarkUpdate) -> dict[str, Any] | BookmarkError:
    """
    Keep only the provided fields; url and rating get the create-time checks.
    """
    fields = {name: value for name, value in payload.model_dump().items() if not _is_blank(value)}
    if not fields:
        return EmptyUpdate()

    if "rating" in fields:
        rating = parse_rating(fields["rating"])
        if rating is None:
            logger.error("Invalid rating '%s' supplied", fields["rating"])
            return InvalidRating(fields["rating"])
        fields["rating"] = rating

    if "url" in fields and not is_web_url(fields["url"]):
        logger.error("Invalid url '%s' supplied", fields["url"])
        return InvalidUrl(fields["url"])

    return fields


async def list_bookmarks(conn: asyncpg.Connection) -> list[schemas.Bookmark]:
    rows = await repository.list_bookmarks(conn)
    return [serialize_bookmark(row) for row in rows]


async def create_bookmark(
    conn: asyncpg.Connection,
    payload: schemas.BookmarkCreate,
) -> schemas.Bookmark | BookmarkError:
    record = validate_create(payload)
    if isinstance(record, BookmarkError):
        return record

    row = await repository.insert_bookmark(conn, record)
    logger.info("Bookmark with id %s created.", row["id"])
    return serialize_bookmark(row)


async def fetch_bookmark(conn: asyncpg.Connection, bookmark_id: int) -> dict[str, Any] | NotFound:
    row = await repository.get_bookmark_by_id(conn, bookmark_id)
    if row is None:
        logger.error("Bookmark with id %s not found.", bookmark_id)
        return NotFound(bookmark_id)
    return row


async def retrieve_bookmark(conn: asyncpg.Connection, bookmark_id: int) -> schemas.Bookmark | NotFound:
    row = await fetch_bookmark(conn, bookmark_id)
    if isinstance(row, NotFound):
        return row
    return serialize_bookmark(row)


async def update_bookmark(
    conn: asyncpg.Connection,
    bookmark_id: int,
    payload: schemas.BookmarkUpdate,
) -> int | BookmarkError:
    row = await fetch_bookmark(conn, bookmark_id)
    if isinstance(row, NotFound):
        return row

    fields = validate_update(payload)
    if isinstance(fields, BookmarkError):
        logger.error("Update of bookmark %s rejected: %s", bookmark_id, fields.message)
        return fields

    updated = await repository.update_bookmark(conn, bookmark_id, fields)
    logger.info("Bookmark with id %s updated fields=%s.", bookmark_id, ",".join(sorted(fields)))
    return updated


async def delete_bookmark(conn: asyncpg.Connection, bookmark_id: int) -> int | NotFound:
    row = await fetch_bookmark(conn, bookmark_id)
    if isinstance(row, NotFound):
        return row

    deleted = await repository.delete_bookmark(conn, bookmark_id)
    logger.info("Bookmark with id %s deleted.", bookmark_id)
    return deleted
