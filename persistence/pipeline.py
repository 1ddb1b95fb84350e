from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Callable, Literal, Union

from pydantic import BaseModel, ConfigDict

import json_store

from .errors import (
    ArrayIndexError,
    KeyNotFoundError,
    MutationError,
    NotAnArrayError,
    StorageIOError,
    StoreError,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

# Receives the freshly decoded document and mutates it in place. Its return
# value is ignored unless it is a Replace.
Mutation = Callable[[Any], Any]

Phase = Literal["read_failed", "mutation_failed", "write_failed", "succeeded"]


class Replace:
    """Return ``Replace(new_document)`` from a mutation to swap out the whole document."""

    __slots__ = ("document",)

    def __init__(self, document: Any):
        self.document = document


class WriteOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    indent: int | None = None
    sort_keys: bool = False
    atomic: bool = False


class EditResult(BaseModel):
    """
    Outcome of one read -> mutate -> write run.

    ``error`` holds a read failure or a mutation failure (both happen before
    the write), ``write_error`` holds a write failure. A mutation failure
    can coexist with a successful rewrite of the unchanged document.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    path: str
    phase: Phase
    document: Any = None
    written: str | None = None
    error: StoreError | None = None
    write_error: StoreError | None = None

    @classmethod
    def settle(
        cls,
        path: PathLike,
        *,
        document: Any = None,
        written: str | None = None,
        error: StoreError | None = None,
        write_error: StoreError | None = None,
    ) -> "EditResult":
        if write_error is not None:
            phase: Phase = "write_failed"
        elif isinstance(error, MutationError):
            phase = "mutation_failed"
        elif error is not None:
            phase = "read_failed"
        else:
            phase = "succeeded"
        return cls(
            path=str(path),
            phase=phase,
            document=document,
            written=written,
            error=error,
            write_error=write_error,
        )

    @property
    def ok(self) -> bool:
        return self.phase == "succeeded"

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error
        if self.write_error is not None:
            raise self.write_error


def read_document(path: PathLike) -> Any:
    """
    Load and decode the JSON document at ``path``.

    One read attempt; raises StorageIOError or DecodeError, never returns a
    default in place of a missing or broken file.
    """
    try:
        raw = Path(path).read_bytes()
    except (OSError, ValueError) as exc:
        # ValueError: invalid path, e.g. an embedded NUL byte
        logger.warning("Read error on %s: %s", path, exc)
        raise StorageIOError(path, exc) from exc
    try:
        return json_store.decode(raw, path=path)
    except StoreError as exc:
        logger.warning("Decode error on %s: %s", path, exc)
        raise


def write_document(path: PathLike, document: Any, options: WriteOptions | None = None) -> str:
    """
    Encode ``document`` and replace the contents of ``path`` with it.

    Returns the exact text written. Nothing is written if encoding fails.
    Unless ``options.atomic`` is set the write is not atomic: a crash
    mid-write can leave the file truncated.
    """
    opts = options or WriteOptions()
    data = json_store.encode(document, indent=opts.indent, sort_keys=opts.sort_keys, path=path)
    try:
        json_store.write_bytes(Path(path), data, atomic=opts.atomic)
    except (OSError, ValueError) as exc:
        logger.warning("Write error on %s: %s", path, exc)
        raise StorageIOError(path, exc) from exc
    logger.debug("Wrote %d bytes to %s", len(data), path)
    return data.decode("utf-8")


def apply_mutation(path: PathLike, document: Any, mutation: Mutation) -> tuple[Any, MutationError | None]:
    try:
        outcome = mutation(document)
    except MutationError as exc:
        if exc.path is None:
            exc.path = str(path)
        logger.warning("Edit error on %s: %s", path, exc)
        return document, exc
    if isinstance(outcome, Replace):
        return outcome.document, None
    return document, None


def edit_document(
    path: PathLike,
    mutation: Mutation,
    *,
    options: WriteOptions | None = None,
    rewrite_on_mutation_error: bool = True,
) -> EditResult:
    """
    Read ``path``, run ``mutation`` on the decoded document, write it back.

    - A failed read returns a ``read_failed`` result; the mutation and the
      writer are never called.
    - A MutationError raised by ``mutation`` is captured. The document is
      still written (unchanged by that failure) unless
      ``rewrite_on_mutation_error`` is False.
    - Any other exception from ``mutation`` propagates and nothing is written.

    There is no locking: overlapping edits of the same file can interleave
    and the last writer wins.
    """
    try:
        document = read_document(path)
    except StoreError as exc:
        return EditResult.settle(path, error=exc)

    document, mutation_error = apply_mutation(path, document, mutation)
    if mutation_error is not None and not rewrite_on_mutation_error:
        return EditResult.settle(path, document=document, error=mutation_error)

    try:
        written = write_document(path, document, options)
    except StoreError as exc:
        return EditResult.settle(path, document=document, error=mutation_error, write_error=exc)
    return EditResult.settle(path, document=document, written=written, error=mutation_error)


def _array_at(document: Any, key: str) -> list:
    if not isinstance(document, dict) or key not in document:
        raise KeyNotFoundError(key)
    target = document[key]
    if not isinstance(target, list):
        raise NotAnArrayError(key, target)
    return target


def _checked_index(array: list, key: str, index: int) -> int:
    if not 0 <= index < len(array):
        raise ArrayIndexError(key, index, len(array))
    return index


def append_mutation(key: str, value: Any) -> Mutation:
    def _append(document: Any) -> None:
        _array_at(document, key).append(value)

    return _append


def remove_mutation(key: str, index: int) -> Mutation:
    def _remove(document: Any) -> None:
        array = _array_at(document, key)
        del array[_checked_index(array, key, index)]

    return _remove


def replace_mutation(key: str, index: int, payload: Any) -> Mutation:
    def _replace(document: Any) -> None:
        array = _array_at(document, key)
        array[_checked_index(array, key, index)] = payload

    return _replace


def append_to_array(
    path: PathLike,
    key: str,
    value: Any,
    *,
    options: WriteOptions | None = None,
    rewrite_on_mutation_error: bool = True,
) -> EditResult:
    """Append ``value`` to the array stored under ``document[key]``."""
    return edit_document(
        path,
        append_mutation(key, value),
        options=options,
        rewrite_on_mutation_error=rewrite_on_mutation_error,
    )


def remove_from_array(
    path: PathLike,
    key: str,
    index: int,
    *,
    options: WriteOptions | None = None,
    rewrite_on_mutation_error: bool = True,
) -> EditResult:
    return edit_document(
        path,
        remove_mutation(key, index),
        options=options,
        rewrite_on_mutation_error=rewrite_on_mutation_error,
    )


def replace_in_array(
    path: PathLike,
    key: str,
    index: int,
    payload: Any,
    *,
    options: WriteOptions | None = None,
    rewrite_on_mutation_error: bool = True,
) -> EditResult:
    return edit_document(
        path,
        replace_mutation(key, index, payload),
        options=options,
        rewrite_on_mutation_error=rewrite_on_mutation_error,
    )
