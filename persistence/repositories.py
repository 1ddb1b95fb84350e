from __future__ import annotations

import asyncio
from typing import Any, Protocol

from settings import Settings

from .disk_store import DiskJsonDocumentStore
from .errors import StoreError
from .pipeline import (
    EditResult,
    Mutation,
    PathLike,
    append_mutation,
    apply_mutation,
    remove_mutation,
    replace_mutation,
)


class AsyncJsonDocumentStore(Protocol):
    async def read(self) -> Any: ...
    async def write(self, document: Any) -> str: ...

    async def edit(self, mutation: Mutation) -> EditResult: ...
    async def append(self, key: str, value: Any) -> EditResult: ...
    async def remove(self, key: str, index: int) -> EditResult: ...
    async def replace(self, key: str, index: int, payload: Any) -> EditResult: ...


class AsyncDiskJsonDocumentStore(AsyncJsonDocumentStore):
    """
    Async wrapper around the disk-backed document store.

    The file read and the file write each run in a worker thread via
    asyncio.to_thread; the mutation itself runs synchronously on the event
    loop in between, so those two I/O calls are the only suspension points.
    Overlapping edits of one path can interleave at those points and lose
    an update.
    """

    def __init__(self, path: PathLike, *, settings: Settings | None = None) -> None:
        self._store = DiskJsonDocumentStore(path, settings=settings)

    @property
    def path(self):
        return self._store.path

    async def read(self) -> Any:
        return await asyncio.to_thread(self._store.read)

    async def write(self, document: Any) -> str:
        return await asyncio.to_thread(self._store.write, document)

    async def edit(self, mutation: Mutation) -> EditResult:
        path = self._store.path
        try:
            document = await self.read()
        except StoreError as exc:
            return EditResult.settle(path, error=exc)

        document, mutation_error = apply_mutation(path, document, mutation)
        if mutation_error is not None and not self._store.rewrite_on_mutation_error:
            return EditResult.settle(path, document=document, error=mutation_error)

        try:
            written = await self.write(document)
        except StoreError as exc:
            return EditResult.settle(path, document=document, error=mutation_error, write_error=exc)
        return EditResult.settle(path, document=document, written=written, error=mutation_error)

    async def append(self, key: str, value: Any) -> EditResult:
        return await self.edit(append_mutation(key, value))

    async def remove(self, key: str, index: int) -> EditResult:
        return await self.edit(remove_mutation(key, index))

    async def replace(self, key: str, index: int, payload: Any) -> EditResult:
        return await self.edit(replace_mutation(key, index, payload))
