from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import overload


@dataclass(slots=True, frozen=True)
class EmbeddedAttachment:
    """Binary payload pulled out of a document and written beside it."""

    sequence: int
    stored_path: Path
    original_reference: str
    declared_media_type: str
    size_bytes: int = 0

    @property
    def relative_reference(self) -> str:
        """Reference written into the document, relative to its directory."""

        return f"{self.stored_path.parent.name}/{self.stored_path.name}"


@dataclass(slots=True)
class DocumentExtractionResult:
    """Outcome of extracting attachments from a single HTML document."""

    document_path: Path
    attachments: list[EmbeddedAttachment] = field(default_factory=list)

    @property
    def was_modified(self) -> bool:
        return bool(self.attachments)


@dataclass(slots=True)
class DirectoryExtractionReport(Sequence[DocumentExtractionResult]):
    """Per-document results of a recursive walk, in traversal order."""

    root: Path
    results: list[DocumentExtractionResult] = field(default_factory=list)

    @overload
    def __getitem__(self, index: int) -> DocumentExtractionResult: ...

    @overload
    def __getitem__(self, index: slice) -> list[DocumentExtractionResult]: ...

    def __getitem__(
        self, index: int | slice
    ) -> DocumentExtractionResult | list[DocumentExtractionResult]:
        return self.results[index]

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self) -> Iterator[DocumentExtractionResult]:
        return iter(self.results)

    def append(self, result: DocumentExtractionResult) -> None:
        self.results.append(result)

    @property
    def documents_modified(self) -> list[DocumentExtractionResult]:
        return [result for result in self.results if result.was_modified]

    @property
    def attachment_count(self) -> int:
        return sum(len(result.attachments) for result in self.results)


__all__ = ["EmbeddedAttachment", "DocumentExtractionResult", "DirectoryExtractionReport"]
