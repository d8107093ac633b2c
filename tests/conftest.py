from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def make_file(tmp_path: Path):
    """Create a file under tmp_path; str content is written as UTF-8 bytes, newlines untouched."""
    def _make(name: str, content: str | bytes) -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        data = content if isinstance(content, bytes) else content.encode("utf-8")
        path.write_bytes(data)
        return str(path)

    return _make
