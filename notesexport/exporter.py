"""Drive the Notes app through ``osascript`` to list and export folders.

Only macOS ships AppleScript and the Notes app; every other platform raises
:class:`UnsupportedPlatformError` before any process is started.
"""

from __future__ import annotations

import subprocess
import sys
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from importlib import resources
from pathlib import Path

from notesexport.errors import (
    ScriptFailedError,
    ScriptLaunchError,
    ScriptNotFoundError,
    UnsupportedPlatformError,
)

EMBEDDED_SCRIPT = "export_notes.applescript"


def check_platform() -> None:
    if sys.platform != "darwin":
        raise UnsupportedPlatformError(sys.platform)


class Exporter:
    """List and export Apple Notes folders with an AppleScript.

    The script bundled with the package is used unless ``script_path`` is given.
    """

    def __init__(self, script_path: Path | None = None, osascript: str = "osascript") -> None:
        self.script_path = script_path
        self.osascript = osascript

    @classmethod
    def with_script_path(cls, path: Path | str, osascript: str = "osascript") -> Exporter:
        script = Path(path)
        if not script.exists():
            raise ScriptNotFoundError(script)
        return cls(script_path=script, osascript=osascript)

    def list_folders(self) -> None:
        """Print every top-level folder of every account (output goes to stdout)."""

        self._run_script(["list"])

    def export_folder(self, folder: str, output_dir: Path | str) -> Path:
        """Export ``folder`` and its subfolders as HTML files below ``output_dir``.

        The folder is searched breadth-first across all accounts and levels.
        Returns the resolved output directory.
        """

        target = Path(output_dir)
        target.mkdir(parents=True, exist_ok=True)
        target = target.resolve()
        self._run_script(["export", folder, str(target)])
        return target

    def export_folder_from_account(
        self,
        account: str,
        folder: str,
        output_dir: Path | str,
    ) -> Path:
        """Like :meth:`export_folder` but restricted to one account (e.g. ``iCloud``)."""

        return self.export_folder(f"{account}:{folder}", output_dir)

    def _run_script(self, args: Sequence[str]) -> None:
        check_platform()
        with self._script() as script:
            command = [self.osascript, str(script), *args]
            try:
                completed = subprocess.run(command, check=False)
            except OSError as exc:
                raise ScriptLaunchError(self.osascript, exc) from exc
        if completed.returncode != 0:
            raise ScriptFailedError(completed.returncode)

    @contextmanager
    def _script(self) -> Iterator[Path]:
        if self.script_path is not None:
            if not self.script_path.exists():
                raise ScriptNotFoundError(self.script_path)
            yield self.script_path.resolve()
            return
        bundled = resources.files("notesexport.scripts").joinpath(EMBEDDED_SCRIPT)
        with resources.as_file(bundled) as path:
            yield path


def list_folders() -> None:
    Exporter().list_folders()


def export_folder(folder: str, output_dir: Path | str) -> Path:
    return Exporter().export_folder(folder, output_dir)


def export_folder_from_account(account: str, folder: str, output_dir: Path | str) -> Path:
    return Exporter().export_folder_from_account(account, folder, output_dir)


__all__ = [
    "Exporter",
    "check_platform",
    "list_folders",
    "export_folder",
    "export_folder_from_account",
]
