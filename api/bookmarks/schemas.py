"""
Pydantic schemas for bookmark endpoints.

Request models are deliberately loose on `rating`: the service owns the
integer/range check so it can report `InvalidRating` instead of a generic
validation failure.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class BookmarkCreate(BaseModel):
    title: str | None = None
    url: str | None = None
    description: str | None = None
    rating: Any = None


class BookmarkUpdate(BaseModel):
    title: str | None = None
    url: str | None = None
    description: str | None = None
    rating: Any = None


class Bookmark(BaseModel):
    id: int
    title: str
    url: str
    description: str
    rating: int


class ErrorDetail(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: ErrorDetail
