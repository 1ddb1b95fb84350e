from __future__ import annotations

import importlib
from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for imports like `import persistence...` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def items_file(tmp_path: Path) -> Path:
    p = tmp_path / "db.json"
    p.write_text('{"items":[1,2,3]}', encoding="utf-8")
    return p


@pytest.fixture
def make_settings():
    from settings import Settings

    def _make(**overrides) -> Settings:
        values = dict(
            data_dir=Path("data"),
            json_indent=None,
            json_sort_keys=False,
            atomic_writes=False,
            rewrite_on_mutation_error=True,
            log_level="INFO",
        )
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def sandbox_data(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Point the data directory at a temp dir so tests never touch real ./data.
    """
    data = tmp_path / "data"
    monkeypatch.setenv("JSONSTORE_DATA_DIR", str(data))
    for name in (
        "JSONSTORE_INDENT",
        "JSONSTORE_SORT_KEYS",
        "JSONSTORE_ATOMIC_WRITES",
        "JSONSTORE_REWRITE_ON_MUTATION_ERROR",
    ):
        monkeypatch.delenv(name, raising=False)
    return data


@pytest.fixture
def reload_endpoints(sandbox_data: Path) -> None:
    """
    Endpoints read settings at import time; reload after sandboxing the data dir.
    """
    import endpoints.document_endpoints as document_endpoints

    importlib.reload(document_endpoints)
