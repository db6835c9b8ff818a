"""Interactive command shell."""

import click
import structlog

from supportbank.cli.session import CommandSession

logger = structlog.get_logger(__name__)


@click.command("shell")
@click.pass_context
def shell(ctx):
    """Read commands from standard input, one per line.

    Commands:
        Import File <path>   import a .csv, .json or .xml ledger
        List All             show every account's balance
        List <name>          show one account's transactions

    Example:
        printf 'Import File ledger.csv\\nList All\\n' | supportbank shell
    """
    session = CommandSession(log_file=ctx.obj["log_file"])
    logger.debug("shell_started")

    for line in click.get_text_stream("stdin"):
        for output in session.handle(line):
            click.echo(output)

    logger.debug("shell_finished", file_processed=session.file_processed)


def register_commands(cli):
    """Register shell command with main CLI."""
    cli.add_command(shell)
