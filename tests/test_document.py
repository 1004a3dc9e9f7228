from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from bs4 import BeautifulSoup

from notesexport.errors import AttachmentDecodeError, DocumentReadError
from notesexport.extraction import extract_from_document
from notesexport.extraction.document import attachments_dir_for
from tests.helpers import data_url


def _sources(path: Path) -> list[str]:
    soup = BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")
    return [img["src"] for img in soup.find_all("img")]


def test_round_trip_single_png(write_note: Callable[..., Path], png_bytes: bytes) -> None:
    document = write_note("Note.html", f'<p>hi</p><img src="{data_url(png_bytes)}">')

    result = extract_from_document(document)

    assert result.was_modified
    assert len(result.attachments) == 1
    attachment = result.attachments[0]
    assert attachment.stored_path == document.parent / "Note-attachments" / "attachment-001.png"
    assert attachment.stored_path.read_bytes() == png_bytes
    assert attachment.declared_media_type == "image/png"
    assert attachment.original_reference == data_url(png_bytes)
    assert attachment.size_bytes == len(png_bytes)

    (source,) = _sources(document)
    assert source == "Note-attachments/attachment-001.png"
    assert (document.parent / source).read_bytes() == png_bytes
    assert "data:image" not in document.read_text(encoding="utf-8")


def test_duplicate_references_get_distinct_files(
    write_note: Callable[..., Path],
    png_bytes: bytes,
) -> None:
    reference = data_url(png_bytes)
    document = write_note("Dup.html", f'<img src="{reference}"><div><img src="{reference}"></div>')

    result = extract_from_document(document)

    names = [attachment.stored_path.name for attachment in result.attachments]
    assert names == ["attachment-001.png", "attachment-002.png"]
    assert all(attachment.original_reference == reference for attachment in result.attachments)
    assert _sources(document) == [
        "Dup-attachments/attachment-001.png",
        "Dup-attachments/attachment-002.png",
    ]
    for attachment in result.attachments:
        assert attachment.stored_path.read_bytes() == png_bytes


def test_sequence_is_shared_across_media_types(
    write_note: Callable[..., Path],
    png_bytes: bytes,
    gif_bytes: bytes,
) -> None:
    document = write_note(
        "Mixed.html",
        f'<img src="{data_url(gif_bytes, "image/gif")}">'
        '<img src="https://example.com/remote.png">'
        f'<img src="{data_url(png_bytes)}">',
    )

    result = extract_from_document(document)

    assert [a.sequence for a in result.attachments] == [1, 2]
    assert [a.stored_path.name for a in result.attachments] == [
        "attachment-001.gif",
        "attachment-002.png",
    ]
    assert _sources(document) == [
        "Mixed-attachments/attachment-001.gif",
        "https://example.com/remote.png",
        "Mixed-attachments/attachment-002.png",
    ]


def test_non_matching_document_is_untouched(write_note: Callable[..., Path]) -> None:
    document = write_note(
        "Plain.html",
        '<img src="https://example.com/a.png"><img src="local.jpg"><img>',
    )
    before = document.read_bytes()
    mtime = document.stat().st_mtime_ns

    result = extract_from_document(document)

    assert result.attachments == []
    assert result.was_modified is False
    assert document.read_bytes() == before
    assert document.stat().st_mtime_ns == mtime
    assert not attachments_dir_for(document).exists()


def test_unknown_media_type_is_stored_as_bin(
    write_note: Callable[..., Path],
    png_bytes: bytes,
) -> None:
    document = write_note("Custom.html", f'<img src="{data_url(png_bytes, "image/x-custom")}">')

    result = extract_from_document(document)

    (attachment,) = result.attachments
    assert attachment.stored_path.name == "attachment-001.bin"
    assert attachment.declared_media_type == "image/x-custom"
    assert attachment.stored_path.read_bytes() == png_bytes


def test_unknown_media_type_without_parameters(write_note: Callable[..., Path]) -> None:
    document = write_note("Bare.html", '<img src="data:image/x-custom,aGVsbG8=">')

    result = extract_from_document(document)

    assert result.attachments[0].stored_path.read_bytes() == b"hello"
    assert result.attachments[0].stored_path.suffix == ".bin"


def test_malformed_payload_leaves_document_unchanged(
    write_note: Callable[..., Path],
    png_bytes: bytes,
) -> None:
    document = write_note(
        "Broken.html",
        f'<img src="{data_url(png_bytes)}"><img src="data:image/png;base64,!!!invalid!!!">',
    )
    before = document.read_bytes()

    with pytest.raises(AttachmentDecodeError) as excinfo:
        extract_from_document(document)

    assert excinfo.value.document_path == document
    assert str(document) in str(excinfo.value)
    assert document.read_bytes() == before
    # earlier attachments are not rolled back
    assert (attachments_dir_for(document) / "attachment-001.png").read_bytes() == png_bytes


def test_malformed_first_payload_creates_no_directory(write_note: Callable[..., Path]) -> None:
    document = write_note("Bad.html", '<img src="data:image/gif;base64,@@">')

    with pytest.raises(AttachmentDecodeError):
        extract_from_document(document)

    assert not attachments_dir_for(document).exists()


def test_second_run_is_a_no_op(write_note: Callable[..., Path], png_bytes: bytes) -> None:
    document = write_note("Again.html", f'<img src="{data_url(png_bytes)}">')
    extract_from_document(document)
    rewritten = document.read_bytes()
    files = sorted(attachments_dir_for(document).iterdir())

    second = extract_from_document(document)

    assert second.was_modified is False
    assert document.read_bytes() == rewritten
    assert sorted(attachments_dir_for(document).iterdir()) == files


def test_existing_attachment_file_is_overwritten(
    write_note: Callable[..., Path],
    png_bytes: bytes,
) -> None:
    document = write_note("Over.html", f'<img src="{data_url(png_bytes)}">')
    stale = attachments_dir_for(document) / "attachment-001.png"
    stale.parent.mkdir()
    stale.write_bytes(b"stale")

    extract_from_document(document)

    assert stale.read_bytes() == png_bytes


def test_line_endings_are_preserved(tmp_path: Path, png_bytes: bytes) -> None:
    document = tmp_path / "Crlf.html"
    document.write_bytes(
        f'<html>\r\n<body>\r\n<img src="{data_url(png_bytes)}">\r\n</body>\r\n</html>'.encode()
    )

    extract_from_document(document)

    content = document.read_bytes()
    assert content.count(b"\r\n") == 4
    assert content.count(b"\n") == content.count(b"\r\n")
    assert b"\r\r" not in content


def test_lf_documents_stay_lf(write_note: Callable[..., Path], png_bytes: bytes) -> None:
    document = write_note("Lf.html", f'<p>a</p>\n<img src="{data_url(png_bytes)}">\n')

    extract_from_document(document)

    assert b"\r" not in document.read_bytes()


def test_rewrite_keeps_named_entities_and_void_tags(
    write_note: Callable[..., Path],
    png_bytes: bytes,
) -> None:
    document = write_note("Ent.html", f'<p>a&nbsp;b &copy; 2024</p><img src="{data_url(png_bytes)}">')

    extract_from_document(document)

    content = document.read_text(encoding="utf-8")
    assert "a&nbsp;b &copy; 2024" in content
    assert '<img src="Ent-attachments/attachment-001.png">' in content


def test_invalid_utf8_document_names_the_path(tmp_path: Path) -> None:
    document = tmp_path / "Latin.html"
    document.write_bytes("<p>café</p>".encode("latin-1"))

    with pytest.raises(DocumentReadError) as excinfo:
        extract_from_document(document)

    assert excinfo.value.path == document
    assert str(document) in str(excinfo.value)
