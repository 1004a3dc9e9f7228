from __future__ import annotations

FALLBACK_EXTENSION = "bin"

_EXTENSIONS: dict[str, str] = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/svg+xml": "svg",
    "image/bmp": "bmp",
    "image/tiff": "tiff",
}


def extension_for(media_type: str) -> str:
    """Map a declared media type to the extension used for its attachment file."""

    return _EXTENSIONS.get(media_type.strip().lower(), FALLBACK_EXTENSION)


__all__ = ["FALLBACK_EXTENSION", "extension_for"]
