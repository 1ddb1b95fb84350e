from __future__ import annotations

from typing import Any, Protocol

from .pipeline import EditResult, Mutation


class JsonDocumentStore(Protocol):
    """
    A single JSON document persisted at a fixed location.
    """

    def read(self) -> Any:
        """Load and return the decoded document. Raises on missing/invalid files."""
        ...

    def write(self, document: Any) -> str:
        """Replace the stored document; returns the text written."""
        ...

    def edit(self, mutation: Mutation) -> EditResult:
        ...

    def append(self, key: str, value: Any) -> EditResult:
        ...

    def remove(self, key: str, index: int) -> EditResult:
        ...

    def replace(self, key: str, index: int, payload: Any) -> EditResult:
        ...
