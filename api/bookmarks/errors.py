"""
Bookmark error taxonomy.

Service operations return these as values instead of raising, and the router
maps them onto HTTP responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from fastapi.responses import JSONResponse


@dataclass(frozen=True)
class BookmarkError:
    status_code: ClassVar[int] = 400

    @property
    def message(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class MissingField(BookmarkError):
    field: str

    @property
    def message(self) -> str:
        return f"'{self.field}' is required"


@dataclass(frozen=True)
class InvalidRating(BookmarkError):
    value: Any

    @property
    def message(self) -> str:
        return "'rating' must be a number between 0 and 5"


@dataclass(frozen=True)
class InvalidUrl(BookmarkError):
    value: Any

    @property
    def message(self) -> str:
        return "'url' must be a valid URL"


@dataclass(frozen=True)
class EmptyUpdate(BookmarkError):
    @property
    def message(self) -> str:
        return "Request body must contain at least one of 'title', 'url', 'rating' or 'description'"


@dataclass(frozen=True)
class NotFound(BookmarkError):
    status_code: ClassVar[int] = 404

    bookmark_id: int

    @property
    def message(self) -> str:
        return "Bookmark Not Found"


def to_response(error: BookmarkError) -> JSONResponse:
    return JSONResponse({"error": {"message": error.message}}, status_code=error.status_code)
