from __future__ import annotations

from pathlib import Path
from typing import Any

import typer

from notesexport import __version__
from notesexport.config import Settings, settings
from notesexport.errors import NotesExportError
from notesexport.exporter import Exporter
from notesexport.extraction import (
    DirectoryExtractionReport,
    DocumentExtractionResult,
    extract_from_directory,
    extract_from_document,
)
from notesexport.utils.audit import AuditTrail

app = typer.Typer(help="Export Apple Notes folders via AppleScript.", add_completion=False)


def _script_option() -> Any:
    return typer.Option(
        None,
        "--script",
        exists=True,
        dir_okay=False,
        help="Custom AppleScript to run instead of the bundled one.",
    )


def _version_callback(
    ctx: typer.Context,
    param: Any,
    value: bool,
) -> bool:
    if value:
        typer.echo(__version__)
        raise typer.Exit()
    return value


@app.callback()
def _main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Root entry point."""


def _exporter(script: Path | None, config: Settings) -> Exporter:
    script_path = script or config.script_path
    if script_path is not None:
        return Exporter.with_script_path(script_path, osascript=config.osascript)
    return Exporter(osascript=config.osascript)


def _fail(audit: AuditTrail, event: str, exc: Exception) -> typer.Exit:
    audit.record("error", event, error=str(exc), kind=type(exc).__name__)
    typer.echo(f"Error: {exc}", err=True)
    return typer.Exit(code=1)


def _echo_document(result: DocumentExtractionResult, audit: AuditTrail) -> None:
    audit.record(
        "info",
        "extract.document",
        path=result.document_path,
        attachments=[attachment.relative_reference for attachment in result.attachments],
    )
    if result.was_modified:
        typer.echo(f"{result.document_path}: {len(result.attachments)} attachment(s) extracted")


def _echo_summary(report: DirectoryExtractionReport, audit: AuditTrail) -> None:
    for result in report:
        _echo_document(result, audit)
    modified = len(report.documents_modified)
    audit.record(
        "info",
        "extract.finished",
        root=report.root,
        documents=len(report),
        modified=modified,
        attachments=report.attachment_count,
    )
    typer.echo(
        f"Processed {len(report)} document(s): {modified} rewritten, "
        f"{report.attachment_count} attachment(s) extracted."
    )


@app.command("list", help="List all top-level folders across all accounts.")
def list_command(script: Path | None = _script_option()) -> None:
    audit = AuditTrail(settings.log_dir, prefix="list", redact=settings.redact_home)
    try:
        _exporter(script, settings).list_folders()
    except (NotesExportError, OSError) as exc:
        raise _fail(audit, "list.failed", exc) from exc


@app.command(help="Export a folder recursively to HTML files, then extract attachments.")
def export(
    folder: str = typer.Argument(
        ...,
        help='Folder to export. Use "Account:Folder" for folders in a specific account.',
    ),
    output_dir: Path = typer.Argument(..., file_okay=False, help="Output directory."),
    account: str | None = typer.Option(None, "--account", "-a", help="Account to search."),
    script: Path | None = _script_option(),
    extract: bool = typer.Option(
        True,
        "--extract/--no-extract",
        help="Extract embedded images after exporting.",
    ),
) -> None:
    audit = AuditTrail(settings.log_dir, prefix="export", redact=settings.redact_home)
    audit.record("info", "export.started", folder=folder, account=account, output=output_dir)
    try:
        exporter = _exporter(script, settings)
        if account:
            target = exporter.export_folder_from_account(account, folder, output_dir)
        else:
            target = exporter.export_folder(folder, output_dir)
    except (NotesExportError, OSError) as exc:
        raise _fail(audit, "export.failed", exc) from exc
    audit.record("info", "export.finished", output=target)
    typer.echo(f"Exported '{folder}' to {target}")

    if not (extract and settings.extract_attachments):
        return
    try:
        report = extract_from_directory(target)
    except (NotesExportError, OSError) as exc:
        raise _fail(audit, "extract.failed", exc) from exc
    _echo_summary(report, audit)


@app.command(help="Extract embedded images from an HTML file or a directory tree.")
def extract(
    path: Path = typer.Argument(..., help="HTML document or directory to process."),
) -> None:
    audit = AuditTrail(settings.log_dir, prefix="extract", redact=settings.redact_home)
    try:
        if path.is_file():
            result = extract_from_document(path)
            report = DirectoryExtractionReport(root=path.parent, results=[result])
        else:
            report = extract_from_directory(path)
    except (NotesExportError, OSError) as exc:
        raise _fail(audit, "extract.failed", exc) from exc
    _echo_summary(report, audit)


def main() -> None:  # pragma: no cover - delegated to Typer
    app()


__all__ = ["app", "main"]
