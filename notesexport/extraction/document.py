"""Pull inline ``data:image`` payloads out of one exported note.

Each matched ``<img>`` gets its own numbered file in
``<stem>-attachments/`` next to the document and its ``src`` attribute is
rewritten to point at that file. Documents without embedded images are never
written to.
"""

from __future__ import annotations

from pathlib import Path

from bs4 import BeautifulSoup, Tag

from notesexport.errors import AttachmentDecodeError
from notesexport.extraction.dataurl import DataURL, parse_data_url
from notesexport.extraction.extensions import extension_for
from notesexport.extraction.types import DocumentExtractionResult, EmbeddedAttachment
from notesexport.utils.files import read_document, write_attachment, write_document

ATTACHMENTS_SUFFIX = "-attachments"
HTML_PARSER = "html.parser"


def attachments_dir_for(document_path: Path) -> Path:
    """Return the sibling directory that holds a document's attachments."""

    return document_path.parent / f"{document_path.stem}{ATTACHMENTS_SUFFIX}"


def attachment_filename(sequence: int, extension: str) -> str:
    return f"attachment-{sequence:03d}.{extension}"


def extract_from_document(path: Path | str) -> DocumentExtractionResult:
    """Extract every embedded image of an HTML document into sibling files.

    Raises :class:`AttachmentDecodeError` when a payload is not valid base64.
    Files written for earlier images of the same document are kept in that
    case, but the document itself is left unchanged.
    """

    document_path = Path(path)
    result = DocumentExtractionResult(document_path=document_path)

    text = read_document(document_path)
    crlf = "\r\n" in text
    soup = BeautifulSoup(text, HTML_PARSER)
    matches = _embedded_images(soup)
    if not matches:
        return result

    target_dir = attachments_dir_for(document_path)
    for sequence, (element, data_url) in enumerate(matches, start=1):
        try:
            payload = data_url.decode()
        except AttachmentDecodeError as exc:
            exc.document_path = document_path
            raise
        destination = target_dir / attachment_filename(sequence, extension_for(data_url.media_type))
        if sequence == 1:
            target_dir.mkdir(parents=True, exist_ok=True)
        write_attachment(destination, payload)

        attachment = EmbeddedAttachment(
            sequence=sequence,
            stored_path=destination,
            original_reference=data_url.reference,
            declared_media_type=data_url.media_type,
            size_bytes=len(payload),
        )
        element["src"] = attachment.relative_reference
        result.attachments.append(attachment)

    rewritten = soup.decode(formatter="html5")
    # the parser folds CRLF into LF
    if crlf:
        rewritten = rewritten.replace("\r\n", "\n").replace("\n", "\r\n")
    write_document(document_path, rewritten)
    return result


def _embedded_images(soup: BeautifulSoup) -> list[tuple[Tag, DataURL]]:
    found: list[tuple[Tag, DataURL]] = []
    for element in soup.find_all("img"):
        if not isinstance(element, Tag):
            continue
        source = element.get("src")
        if not isinstance(source, str):
            continue
        data_url = parse_data_url(source)
        if data_url is not None:
            found.append((element, data_url))
    return found


__all__ = [
    "ATTACHMENTS_SUFFIX",
    "attachments_dir_for",
    "attachment_filename",
    "extract_from_document",
]
