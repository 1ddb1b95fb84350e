from __future__ import annotations

from .errors import (
    ArrayIndexError,
    DecodeError,
    EncodeError,
    KeyNotFoundError,
    MutationError,
    NotAnArrayError,
    StorageIOError,
    StoreError,
)
from .pipeline import (
    EditResult,
    Replace,
    WriteOptions,
    append_to_array,
    edit_document,
    read_document,
    remove_from_array,
    replace_in_array,
    write_document,
)
from .disk_store import DiskJsonDocumentStore
from .interfaces import JsonDocumentStore
from .repositories import AsyncDiskJsonDocumentStore, AsyncJsonDocumentStore

__all__ = [
    "StoreError",
    "StorageIOError",
    "DecodeError",
    "EncodeError",
    "MutationError",
    "KeyNotFoundError",
    "NotAnArrayError",
    "ArrayIndexError",
    "EditResult",
    "Replace",
    "WriteOptions",
    "read_document",
    "write_document",
    "edit_document",
    "append_to_array",
    "remove_from_array",
    "replace_in_array",
    "JsonDocumentStore",
    "DiskJsonDocumentStore",
    "AsyncJsonDocumentStore",
    "AsyncDiskJsonDocumentStore",
]
