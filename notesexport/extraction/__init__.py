from notesexport.extraction.document import extract_from_document
from notesexport.extraction.types import (
    DirectoryExtractionReport,
    DocumentExtractionResult,
    EmbeddedAttachment,
)
from notesexport.extraction.walker import extract_from_directory

__all__ = [
    "DirectoryExtractionReport",
    "DocumentExtractionResult",
    "EmbeddedAttachment",
    "extract_from_directory",
    "extract_from_document",
]
