from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def write_document(tmp_path: Path) -> Callable[[str], Path]:
    """Return a helper writing JSON text to a temporary file."""

    def _write(text: str, name: str = "document.json") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
