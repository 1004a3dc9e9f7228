from __future__ import annotations

from pathlib import Path


class NotesExportError(Exception):
    """Base class for every error raised by notesexport."""


class AttachmentDecodeError(NotesExportError, ValueError):
    """An embedded data URL carried a payload that is not valid base64."""

    def __init__(
        self,
        message: str,
        reference: str | None = None,
        document_path: Path | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.reference = reference
        self.document_path = document_path

    def __str__(self) -> str:
        if self.document_path is not None:
            return f"{self.document_path}: {self.message}"
        return self.message


class DocumentReadError(NotesExportError):
    """A note could not be decoded as UTF-8 text."""

    def __init__(self, path: Path, cause: UnicodeDecodeError) -> None:
        super().__init__(f"{path}: not valid UTF-8 ({cause.reason} at byte {cause.start})")
        self.path = path


class ExportError(NotesExportError):
    """Running the AppleScript exporter failed."""


class UnsupportedPlatformError(ExportError):
    def __init__(self, platform: str) -> None:
        super().__init__(
            "This tool only works on macOS. It relies on AppleScript and the Notes app, "
            f"which are not available on {platform}."
        )
        self.platform = platform


class ScriptNotFoundError(ExportError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"AppleScript not found at {path}")
        self.path = path


class ScriptLaunchError(ExportError):
    def __init__(self, executable: str, cause: OSError) -> None:
        super().__init__(f"Failed to launch {executable}: {cause}")
        self.executable = executable


class ScriptFailedError(ExportError):
    def __init__(self, returncode: int) -> None:
        super().__init__(f"AppleScript exited with status {returncode}")
        self.returncode = returncode


__all__ = [
    "NotesExportError",
    "AttachmentDecodeError",
    "DocumentReadError",
    "ExportError",
    "UnsupportedPlatformError",
    "ScriptNotFoundError",
    "ScriptLaunchError",
    "ScriptFailedError",
]
