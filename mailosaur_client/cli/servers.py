"""Server commands."""

from rich.markup import escape
from rich.table import Table

from .shared import console, run_with_client


def servers() -> None:
    """List servers visible to the API key."""
    items = run_with_client(lambda client: client.servers.list())
    table = Table(title="Servers")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Messages", justify="right")
    for server in items:
        table.add_row(server.id, escape(server.name or ""), str(server.messages))
    console.print(table)
