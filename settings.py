from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str) -> int | None:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return None
    return int(raw)


@dataclass(frozen=True)
class Settings:
    # Named documents served over HTTP live here
    data_dir: Path

    # Encoding
    json_indent: int | None
    json_sort_keys: bool

    # Writes
    atomic_writes: bool
    rewrite_on_mutation_error: bool

    # Logging
    log_level: str


def get_settings() -> Settings:
    data_dir = Path(os.getenv("JSONSTORE_DATA_DIR", "data")).expanduser()

    json_indent = _env_int("JSONSTORE_INDENT")
    json_sort_keys = _env_bool("JSONSTORE_SORT_KEYS", False)

    # Off by default: plain truncate-and-write, an interrupted write may corrupt the file.
    atomic_writes = _env_bool("JSONSTORE_ATOMIC_WRITES", False)

    # A failed append still rewrites the (unchanged) document unless disabled.
    rewrite_on_mutation_error = _env_bool("JSONSTORE_REWRITE_ON_MUTATION_ERROR", True)

    log_level = os.getenv("JSONSTORE_LOG_LEVEL", "INFO").strip().upper()

    return Settings(
        data_dir=data_dir,
        json_indent=json_indent,
        json_sort_keys=json_sort_keys,
        atomic_writes=atomic_writes,
        rewrite_on_mutation_error=rewrite_on_mutation_error,
        log_level=log_level,
    )
