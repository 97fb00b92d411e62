"""File commands: download a message source or an attachment."""

from pathlib import Path
from typing import Optional

import typer

from .shared import console, logger, run_with_client


def _write(content: bytes, out: Path) -> None:
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(content)
    logger.info("cli.file_written", path=str(out), size=len(content))
    console.print(f"[green]Wrote {len(content)} bytes to {out}[/green]")


def download_email(
    message_id: str = typer.Argument(..., help="Message id"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Output path (default: <id>.eml)"),
) -> None:
    """Save the raw .eml source of a message."""
    content = run_with_client(lambda client: client.files.get_email(message_id))
    _write(content, out or Path(f"{message_id}.eml"))


def download_attachment(
    attachment_id: str = typer.Argument(..., help="Attachment id"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Output path (default: <id>)"),
) -> None:
    """Save an attachment payload."""
    content = run_with_client(lambda client: client.files.get_attachment(attachment_id))
    _write(content, out or Path(attachment_id))
