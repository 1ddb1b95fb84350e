# document_endpoints.py
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from persistence.errors import (
    ArrayIndexError,
    EncodeError,
    KeyNotFoundError,
    NotAnArrayError,
    StorageIOError,
    StoreError,
)
from persistence.paths import data_dir, document_path
from persistence.pipeline import EditResult
from persistence.repositories import AsyncDiskJsonDocumentStore
from settings import get_settings

router = APIRouter(prefix="/documents", tags=["documents"])
logger = logging.getLogger(__name__)

# Centralized settings
SETTINGS = get_settings()
DATA_DIR = data_dir(SETTINGS)


class DocumentOut(BaseModel):
    name: str
    document: Any


class WrittenOut(BaseModel):
    name: str
    written: str


class EditOut(BaseModel):
    name: str
    phase: str
    document: Any = None
    written: str | None = None
    error: str | None = None
    write_error: str | None = None


def status_for(exc: StoreError) -> int:
    if isinstance(exc, StorageIOError):
        return 404 if exc.not_found else 500
    if isinstance(exc, (KeyNotFoundError, ArrayIndexError)):
        return 404
    if isinstance(exc, NotAnArrayError):
        return 409
    if isinstance(exc, EncodeError):
        return 400
    # DecodeError and anything else: the stored file is at fault
    return 500


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    return JSONResponse(
        status_code=status_for(exc),
        content={"detail": str(exc), "error": type(exc).__name__},
    )


def _store(name: str) -> AsyncDiskJsonDocumentStore:
    try:
        path = document_path(name, DATA_DIR)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return AsyncDiskJsonDocumentStore(path, settings=SETTINGS)


def _edit_response(name: str, result: EditResult) -> JSONResponse:
    body = EditOut(
        name=name,
        phase=result.phase,
        document=result.document,
        written=result.written,
        error=str(result.error) if result.error is not None else None,
        write_error=str(result.write_error) if result.write_error is not None else None,
    )
    failure = result.error or result.write_error
    status_code = 200 if failure is None else status_for(failure)
    if failure is not None:
        logger.info("Edit of %s ended in %s: %s", name, result.phase, failure)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@router.get("/{name}", response_model=DocumentOut)
async def get_document(name: str):
    document = await _store(name).read()
    return DocumentOut(name=name, document=document)


@router.put("/{name}", response_model=WrittenOut)
async def put_document(name: str, document: Any = Body(...)):
    written = await _store(name).write(document)
    return WrittenOut(name=name, written=written)


@router.post("/{name}/arrays/{key}")
async def append_value(name: str, key: str, value: Any = Body(..., embed=True)):
    result = await _store(name).append(key, value)
    return _edit_response(name, result)


@router.put("/{name}/arrays/{key}/{index}")
async def replace_value(name: str, key: str, index: int, value: Any = Body(..., embed=True)):
    result = await _store(name).replace(key, index, value)
    return _edit_response(name, result)


@router.delete("/{name}/arrays/{key}/{index}")
async def remove_value(name: str, key: str, index: int):
    result = await _store(name).remove(key, index)
    return _edit_response(name, result)
