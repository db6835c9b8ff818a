"""Main CLI entry point."""

import click

from supportbank.logging_config import DEFAULT_LOG_FILE, setup_logging

# Import and register all commands at module level
from supportbank.cli.commands import report, shell


@click.group()
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=DEFAULT_LOG_FILE,
    show_default=True,
    help="Path to the diagnostics log (overrides SUPPORTBANK_LOG_FILE environment variable)",
    envvar="SUPPORTBANK_LOG_FILE",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="DEBUG",
    show_default=True,
    help="Diagnostics log level (overrides SUPPORTBANK_LOG_LEVEL environment variable)",
    envvar="SUPPORTBANK_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, log_file: str, log_level: str):
    """SupportBank - ledger balances from CSV, JSON or XML files.

    Import a transaction ledger and list account balances or the
    transaction history of a single account.
    """
    ctx.ensure_object(dict)

    # Only configure logging when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        setup_logging(log_file=log_file, log_level=log_level)
    ctx.obj["log_file"] = log_file


# Register all commands
shell.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
