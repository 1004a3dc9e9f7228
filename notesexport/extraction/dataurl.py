"""Recognise and decode ``data:image/...`` URLs embedded in note HTML."""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass

from notesexport.errors import AttachmentDecodeError

# data:<image media type>[;params],<payload>
_DATA_URL_RE = re.compile(
    r"^data:(?P<media_type>image/[^;,]+)(?P<params>;[^,]*)?,(?P<payload>.*)$",
    re.IGNORECASE | re.DOTALL,
)
_WHITESPACE_RE = re.compile(r"[ \t\r\n\f]+")
_PREVIEW_LENGTH = 48


@dataclass(slots=True, frozen=True)
class DataURL:
    """A matched data URL split into its declared media type and raw payload."""

    reference: str
    media_type: str
    payload: str

    def decode(self) -> bytes:
        try:
            return decode_payload(self.payload)
        except AttachmentDecodeError as exc:
            raise AttachmentDecodeError(
                f"invalid base64 payload in {preview(self.reference)}",
                reference=self.reference,
            ) from exc


def parse_data_url(value: str | None) -> DataURL | None:
    """Return the parsed data URL, or ``None`` when ``value`` is not an embedded image."""

    if not value:
        return None
    match = _DATA_URL_RE.match(value.strip())
    if match is None:
        return None
    return DataURL(
        reference=value,
        media_type=match.group("media_type").strip().lower(),
        payload=match.group("payload"),
    )


def decode_payload(payload: str) -> bytes:
    """Decode a padded, standard-alphabet base64 payload.

    Line wrapping is tolerated; any other character outside the alphabet, or
    missing padding, raises :class:`AttachmentDecodeError`.
    """

    compact = _WHITESPACE_RE.sub("", payload)
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise AttachmentDecodeError(f"invalid base64 payload: {exc}") from exc


def preview(reference: str) -> str:
    if len(reference) <= _PREVIEW_LENGTH:
        return reference
    return reference[:_PREVIEW_LENGTH] + "..."


__all__ = ["DataURL", "parse_data_url", "decode_payload", "preview"]
