from __future__ import annotations

import errno as errno_codes
from typing import Any


class StoreError(Exception):
    """Base class for every failure surfaced by the document store."""

    def __init__(self, message: str, path: Any = None):
        super().__init__(message)
        self.path = None if path is None else str(path)


class StorageIOError(StoreError):
    """
    The file could not be opened, read or written.

    Wraps the OSError, or the ValueError raised for an unusable path
    (such as one with an embedded NUL byte).
    """

    def __init__(self, path: Any, cause: Exception):
        reason = getattr(cause, "strerror", None) or cause
        super().__init__(f"I/O error on {path!r}: {reason}", path)
        self.cause = cause
        self.errno = getattr(cause, "errno", None)

    @property
    def not_found(self) -> bool:
        return isinstance(self.cause, FileNotFoundError) or self.errno == errno_codes.ENOENT


class DecodeError(StoreError):
    """File contents are not well-formed JSON."""

    def __init__(self, path: Any, cause: Exception):
        where = f" in {path}" if path is not None else ""
        super().__init__(f"Malformed JSON{where}: {cause}", path)
        self.cause = cause


class EncodeError(StoreError):
    """Document holds values that cannot be represented as JSON."""

    def __init__(self, path: Any, cause: Exception):
        super().__init__(f"Document is not JSON-serializable: {cause}", path)
        self.cause = cause


class MutationError(StoreError):
    """Raised by a mutation to report a precondition failure on the document."""


class KeyNotFoundError(MutationError):
    def __init__(self, key: str, path: Any = None):
        super().__init__(f"Key does not exist: {key!r}", path)
        self.key = key


class NotAnArrayError(MutationError):
    def __init__(self, key: str, actual: Any, path: Any = None):
        super().__init__(f"Value at {key!r} is {type(actual).__name__}, not an array", path)
        self.key = key


class ArrayIndexError(MutationError):
    def __init__(self, key: str, index: int, length: int, path: Any = None):
        super().__init__(f"Index {index} out of range for {key!r} (length {length})", path)
        self.key = key
        self.index = index
        self.length = length
