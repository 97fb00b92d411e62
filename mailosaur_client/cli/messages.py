"""Message commands: list, get, search, wait-for, delete, delete-all."""

from typing import Optional

import typer

from mailosaur_client.client import generate_email_address
from mailosaur_client.config import ClientSettings
from mailosaur_client.utils.logger import bind_context, clear_context

from .shared import console, logger, print_email, resolve_server, run_with_client, summary_table

ServerOption = typer.Option(None, "--server", "-s", help="Server id (defaults to MAILOSAUR_SERVER)")


def _criteria(sent_to: Optional[str], subject: Optional[str], body: Optional[str]) -> dict:
    return {k: v for k, v in {"sentTo": sent_to, "subject": subject, "body": body}.items() if v}


def list_messages(server: Optional[str] = ServerOption) -> None:
    """List message summaries on a server."""
    effective = resolve_server(server)
    emails = run_with_client(lambda client: client.messages.list(effective))
    console.print(summary_table(emails, f"Messages on {effective}"))


def get(message_id: str = typer.Argument(..., help="Message id")) -> None:
    """Show a single message in full."""
    email = run_with_client(lambda client: client.messages.get(message_id))
    print_email(email)


def search(
    server: Optional[str] = ServerOption,
    sent_to: Optional[str] = typer.Option(None, "--sent-to", help="Recipient address"),
    subject: Optional[str] = typer.Option(None, "--subject", help="Subject contains"),
    body: Optional[str] = typer.Option(None, "--body", help="Body contains"),
) -> None:
    """Search message summaries by recipient, subject or body."""
    effective = resolve_server(server)
    criteria = _criteria(sent_to, subject, body)
    emails = run_with_client(lambda client: client.messages.search(effective, criteria))
    console.print(summary_table(emails, f"Search results on {effective}"))


def wait_for(
    server: Optional[str] = ServerOption,
    sent_to: Optional[str] = typer.Option(None, "--sent-to", help="Recipient address"),
    subject: Optional[str] = typer.Option(None, "--subject", help="Subject contains"),
    body: Optional[str] = typer.Option(None, "--body", help="Body contains"),
    timeout: Optional[float] = typer.Option(None, "--timeout", "-t", help="Seconds to wait"),
) -> None:
    """Block until a matching message arrives, then show it."""
    effective = resolve_server(server)
    criteria = _criteria(sent_to, subject, body)
    bind_context(command="wait-for", server=effective)
    try:
        email = run_with_client(lambda client: client.messages.wait_for(effective, criteria, timeout=timeout))
    finally:
        clear_context()
    print_email(email)


def delete(message_id: str = typer.Argument(..., help="Message id")) -> None:
    """Delete one message."""
    run_with_client(lambda client: client.messages.delete(message_id))
    console.print(f"[green]Deleted {message_id}[/green]")


def delete_all(
    server: Optional[str] = ServerOption,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete every message on a server."""
    effective = resolve_server(server)
    if not yes and not typer.confirm(f"Delete all messages on {effective}?"):
        console.print("[dim]Nothing deleted.[/dim]")
        raise typer.Exit(0)
    run_with_client(lambda client: client.messages.delete_all(effective))
    logger.info("cli.delete_all", server=effective)
    console.print(f"[green]All messages on {effective} deleted[/green]")


def address(server: Optional[str] = ServerOption) -> None:
    """Print a disposable address on a server."""
    effective = resolve_server(server)
    try:
        settings = ClientSettings.from_env()
    except ValueError as e:
        console.print(f"Config error: {e}", style="red", markup=False)
        raise typer.Exit(1) from e
    console.print(generate_email_address(effective, settings.smtp_host), markup=False)
