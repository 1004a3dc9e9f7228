from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from notesexport.config import Settings  # noqa: E402
from tests.helpers import GIF_BYTES, PNG_BYTES  # noqa: E402


@pytest.fixture()
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture()
def gif_bytes() -> bytes:
    return GIF_BYTES


@pytest.fixture()
def write_note(tmp_path: Path) -> Callable[..., Path]:
    def _write(relative: str, body: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"<html><body>{body}</body></html>", encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def temp_settings(tmp_path: Path) -> Settings:
    return Settings(
        script_path=None,
        osascript="osascript",
        extract_attachments=True,
        log_dir=tmp_path / "logs",
        redact_home=True,
    )
