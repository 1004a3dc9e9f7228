from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from uuid import uuid4

from notesexport.errors import DocumentReadError


def timestamped_stem(prefix: str) -> str:
    """Return a safe stem combining prefix, timestamp and a random suffix."""

    now = datetime.now(tz=UTC).strftime("%Y%m%dT%H%M%S")
    return f"{prefix}-{now}-{uuid4().hex[:8]}"


def read_document(path: Path) -> str:
    """Read an HTML document as UTF-8 without translating line endings."""

    try:
        with path.open("r", encoding="utf-8", newline="") as handle:
            return handle.read()
    except UnicodeDecodeError as exc:
        raise DocumentReadError(path, exc) from exc


def write_document(path: Path, text: str) -> Path:
    """Overwrite an HTML document, keeping the line endings present in ``text``."""

    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(text)
    return path


def write_attachment(destination: Path, payload: bytes) -> Path:
    """Persist decoded attachment bytes, replacing any previous file."""

    with destination.open("wb") as handle:
        handle.write(payload)
    return destination


__all__ = ["timestamped_stem", "read_document", "write_document", "write_attachment"]
