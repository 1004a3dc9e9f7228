from __future__ import annotations

import os
from pathlib import Path

from notesexport.extraction.document import ATTACHMENTS_SUFFIX, extract_from_document
from notesexport.extraction.types import DirectoryExtractionReport

HTML_SUFFIX = ".html"


def iter_documents(root: Path) -> list[Path]:
    """List ``.html`` files below ``root``, skipping attachment directories."""

    documents: list[Path] = []
    with os.scandir(root) as scanner:
        entries = sorted(scanner, key=lambda entry: entry.name)
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            if entry.name.endswith(ATTACHMENTS_SUFFIX):
                continue
            documents.extend(iter_documents(Path(entry.path)))
        elif entry.is_file() and Path(entry.name).suffix == HTML_SUFFIX:
            documents.append(Path(entry.path))
    return documents


def extract_from_directory(root: Path | str) -> DirectoryExtractionReport:
    """Run attachment extraction on every HTML document below ``root``.

    A missing root yields an empty report. The first failing document aborts
    the walk.
    """

    root_path = Path(root)
    report = DirectoryExtractionReport(root=root_path)
    if not root_path.is_dir():
        return report
    for document in iter_documents(root_path):
        report.append(extract_from_document(document))
    return report


__all__ = ["HTML_SUFFIX", "iter_documents", "extract_from_directory"]
