"""Shared CLI helpers: console, logger, client construction, error reporting."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mailosaur_client.client import MailosaurClient
from mailosaur_client.config import default_server
from mailosaur_client.errors import MailosaurError
from mailosaur_client.models import Email
from mailosaur_client.utils.logger import get_logger

T = TypeVar("T")

console = Console()
logger = get_logger("mailosaur_client.cli")


def build_client() -> MailosaurClient:
    """Client configured from MAILOSAUR_* environment variables."""
    return MailosaurClient.from_env()


def resolve_server(server: str | None) -> str:
    effective = (server or default_server()).strip()
    if not effective:
        console.print("[red]Provide a server via --server or set MAILOSAUR_SERVER in .env[/red]")
        raise typer.Exit(1)
    return effective


def run_with_client(operation: Callable[[MailosaurClient], Awaitable[T]]) -> T:
    """Open a client, run ``operation`` on it and map client errors to exit code 1."""
    try:
        client = build_client()
    except ValueError as e:
        console.print(f"Config error: {e}", style="red", markup=False)
        raise typer.Exit(1) from e

    async def _run() -> T:
        async with client:
            return await operation(client)

    try:
        return asyncio.run(_run())
    except MailosaurError as e:
        console.print(f"{type(e).__name__}: {e}", style="red", markup=False)
        if e.details:
            console.print(str(e.details), style="dim", markup=False)
        logger.warning("cli.request_failed", error=str(e), error_type=type(e).__name__)
        raise typer.Exit(1) from e


def summary_table(emails: list[Email], title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Received", style="green")
    table.add_column("From")
    table.add_column("To")
    table.add_column("Subject")
    table.add_column("Attachments", justify="right")
    for email in emails:
        table.add_row(
            email.id,
            email.received.isoformat() if email.received else "",
            escape(", ".join(a.address for a in email.from_)),
            escape(", ".join(a.address for a in email.to)),
            escape(email.subject),
            str(len(email.attachments)),
        )
    return table


def print_email(email: Email) -> None:
    """Print a full message: headers, bodies, links and attachments."""
    console.print(f"\n[bold]{escape(email.subject)}[/bold]  [dim]{email.id}[/dim]")
    console.print(f"  From: {', '.join(f'{a.name} <{a.address}>' for a in email.from_)}", markup=False)
    console.print(f"  To: {', '.join(f'{a.name} <{a.address}>' for a in email.to)}", markup=False)
    if email.received:
        console.print(f"  Received: {email.received.isoformat()}")
    if email.text and email.text.body:
        console.print("\n[bold]Text[/bold]")
        console.print(email.text.body, markup=False)
    if email.html:
        links = ", ".join(link.href for link in email.html.links)
        console.print(f"\n[bold]HTML[/bold] {len(email.html.links)} links, {len(email.html.images)} images")
        if links:
            console.print(f"  {links}", markup=False)
    for attachment in email.attachments:
        console.print(
            f"  [cyan]{attachment.id}[/cyan] {escape(attachment.file_name or '')} "
            f"({attachment.content_type}, {attachment.length} bytes)"
        )
