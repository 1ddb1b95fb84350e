from __future__ import annotations

from pathlib import Path
from typing import Any

from settings import Settings, get_settings

from .interfaces import JsonDocumentStore
from .pipeline import (
    EditResult,
    Mutation,
    PathLike,
    WriteOptions,
    append_mutation,
    edit_document,
    read_document,
    remove_mutation,
    replace_mutation,
    write_document,
)


class DiskJsonDocumentStore(JsonDocumentStore):
    """
    Stores a single JSON document on disk at a fixed path.

    - Every call re-reads the file; nothing is cached between operations.
    - Read failures raise instead of falling back to an empty document.
    - No locking: concurrent edits of the same file may lose updates.
    """

    def __init__(self, path: PathLike, *, settings: Settings | None = None):
        self._path = Path(path)
        cfg = settings or get_settings()
        self._options = WriteOptions(
            indent=cfg.json_indent,
            sort_keys=cfg.json_sort_keys,
            atomic=cfg.atomic_writes,
        )
        self._rewrite_on_mutation_error = cfg.rewrite_on_mutation_error

    @property
    def path(self) -> Path:
        return self._path

    @property
    def options(self) -> WriteOptions:
        return self._options

    @property
    def rewrite_on_mutation_error(self) -> bool:
        return self._rewrite_on_mutation_error

    def read(self) -> Any:
        return read_document(self._path)

    def write(self, document: Any) -> str:
        return write_document(self._path, document, self._options)

    def edit(self, mutation: Mutation) -> EditResult:
        return edit_document(
            self._path,
            mutation,
            options=self._options,
            rewrite_on_mutation_error=self._rewrite_on_mutation_error,
        )

    def append(self, key: str, value: Any) -> EditResult:
        return self.edit(append_mutation(key, value))

    def remove(self, key: str, index: int) -> EditResult:
        return self.edit(remove_mutation(key, index))

    def replace(self, key: str, index: int, payload: Any) -> EditResult:
        return self.edit(replace_mutation(key, index, payload))
