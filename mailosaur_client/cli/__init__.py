"""CLI commands: one module per resource group."""

from typer import Typer

from mailosaur_client.cli import analysis, files, messages, servers
from mailosaur_client.utils.tracing import init_tracing

init_tracing()

app = Typer(help="Mailosaur email-testing client", no_args_is_help=True)


def register_commands() -> None:
    """Register all CLI commands on the global app."""
    app.command(name="list")(messages.list_messages)
    app.command()(messages.get)
    app.command()(messages.search)
    app.command(name="wait-for")(messages.wait_for)
    app.command()(messages.delete)
    app.command(name="delete-all")(messages.delete_all)
    app.command()(messages.address)
    app.command(name="download-email")(files.download_email)
    app.command(name="download-attachment")(files.download_attachment)
    app.command()(analysis.spam)
    app.command()(servers.servers)


register_commands()
