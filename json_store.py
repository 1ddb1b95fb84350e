from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from persistence.errors import DecodeError, EncodeError


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def encode(document: Any, *, indent: int | None = None, sort_keys: bool = False, path: Any = None) -> bytes:
    """
    Serialize a document to UTF-8 JSON bytes.

    Compact by default (no whitespace between tokens), non-ASCII kept as-is.
    NaN/Infinity and unencodable strings (lone surrogates) are rejected so
    the output is always valid JSON.
    """
    separators = (",", ":") if indent is None else (",", ": ")
    try:
        text = json.dumps(
            document,
            indent=indent,
            sort_keys=sort_keys,
            separators=separators,
            ensure_ascii=False,
            allow_nan=False,
        )
        return text.encode("utf-8")
    except (TypeError, ValueError, RecursionError) as exc:
        raise EncodeError(path, exc) from exc


def decode(data: str | bytes, *, path: Any = None) -> Any:
    """Parse JSON text (bytes are decoded as UTF-8). NaN/Infinity are refused."""
    try:
        text = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise DecodeError(path, exc) from exc


def write_bytes(path: Path, data: bytes, *, atomic: bool = False) -> None:
    """
    Replace the contents of ``path`` with ``data``.

    Plain writes truncate first, so an interrupted write can leave the file
    partially written. With ``atomic=True`` the data goes to a sibling temp file
    which then replaces the target.
    """
    if not atomic:
        with path.open("wb") as f:
            f.write(data)
        return
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        with tmp_path.open("wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
