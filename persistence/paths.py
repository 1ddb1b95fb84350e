from __future__ import annotations

from pathlib import Path

from settings import Settings, get_settings


def project_root() -> Path:
    # persistence/paths.py -> persistence -> project root
    return Path(__file__).resolve().parents[1]


def data_dir(settings: Settings | None = None) -> Path:
    base = (settings or get_settings()).data_dir
    if not base.is_absolute():
        base = project_root() / base
    return ensure_dir(base)


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def document_path(name: str, base: Path) -> Path:
    """Map a document name to ``<base>/<name>.json``; names may not leave ``base``."""
    cleaned = name.strip()
    if not cleaned or cleaned.startswith(".") or "/" in cleaned or "\\" in cleaned:
        raise ValueError(f"Invalid document name: {name!r}")
    return base / f"{cleaned}.json"
