"""
Bookmark API endpoints.
"""

from __future__ import annotations

import asyncpg
from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from core import db

from . import errors, schemas, service

router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": schemas.ErrorResponse},
    404: {"model": schemas.ErrorResponse},
}


@router.get("/bookmarks", response_model=list[schemas.Bookmark])
async def list_bookmarks(conn: asyncpg.Connection = Depends(db.connection)) -> list[schemas.Bookmark]:
    return await service.list_bookmarks(conn)


@router.post(
    "/bookmarks",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.Bookmark,
    responses=_ERROR_RESPONSES,
)
async def create_bookmark(
    payload: schemas.BookmarkCreate,
    conn: asyncpg.Connection = Depends(db.connection),
) -> schemas.Bookmark | JSONResponse:
    result = await service.create_bookmark(conn, payload)
    if isinstance(result, errors.BookmarkError):
        return errors.to_response(result)
    return JSONResponse(
        result.model_dump(),
        status_code=status.HTTP_201_CREATED,
        headers={"Location": f"/bookmarks/{result.id}"},
    )


@router.get("/bookmarks/{bookmark_id}", response_model=schemas.Bookmark, responses=_ERROR_RESPONSES)
async def get_bookmark(
    bookmark_id: int,
    conn: asyncpg.Connection = Depends(db.connection),
) -> schemas.Bookmark | JSONResponse:
    result = await service.retrieve_bookmark(conn, bookmark_id)
    if isinstance(result, errors.BookmarkError):
        return errors.to_response(result)
    return result


@router.patch(
    "/bookmarks/{bookmark_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ERROR_RESPONSES,
)
async def update_bookmark(
    bookmark_id: int,
    payload: schemas.BookmarkUpdate | None = None,
    conn: asyncpg.Connection = Depends(db.connection),
) -> Response:
    """
    Partial update. An absent body is treated like `{}`.
    """
    result = await service.update_bookmark(conn, bookmark_id, payload or schemas.BookmarkUpdate())
    if isinstance(result, errors.BookmarkError):
        return errors.to_response(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/bookmarks/{bookmark_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_ERROR_RESPONSES,
)
async def delete_bookmark(
    bookmark_id: int,
    conn: asyncpg.Connection = Depends(db.connection),
) -> Response:
    result = await service.delete_bookmark(conn, bookmark_id)
    if isinstance(result, errors.BookmarkError):
        return errors.to_response(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
