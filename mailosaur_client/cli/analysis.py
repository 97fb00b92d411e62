"""Spam analysis command."""

import typer
from rich.markup import escape
from rich.table import Table

from .shared import console, run_with_client


def spam(message_id: str = typer.Argument(..., help="Message id")) -> None:
    """Show per-rule spam scores for a message."""
    result = run_with_client(lambda client: client.analysis.spam(message_id))

    table = Table(title=f"Spam analysis for {result.email_id}")
    table.add_column("Rule", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Description")
    for rule in result.spam_assassin:
        table.add_row(escape(rule.rule), f"{rule.score:.1f}", escape(rule.description))
    console.print(table)
    console.print(f"Total score: [bold]{result.total_score:.1f}[/bold]")
