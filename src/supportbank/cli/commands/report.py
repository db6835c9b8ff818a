"""One-shot balance and history commands."""

import click

from supportbank.cli.error_handling import handle_domain_error
from supportbank.domain.errors import DomainError, NotFoundError, account_not_found
from supportbank.domain.ledger_import import ImportResult, LedgerImportService
from supportbank.domain.query import LedgerQueryService


def _import(ctx: click.Context, ledger_file: str) -> ImportResult:
    service = LedgerImportService()
    try:
        result = service.import_file(ledger_file)
    except (DomainError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)

    if result.has_errors:
        lines = ", ".join(str(line) for line in result.error_lines)
        click.echo(
            f"Warning: entries on line(s) {lines} had errors, "
            f"check {ctx.obj['log_file']} for details",
            err=True,
        )
    return result


@click.command("balances")
@click.argument("ledger_file", type=click.Path(dir_okay=False))
@click.pass_context
def balances(ctx, ledger_file: str):
    """Show the balance of every account in LEDGER_FILE.

    Examples:
        supportbank balances Transactions2014.csv
        supportbank balances Transactions2013.json
    """
    result = _import(ctx, ledger_file)
    query = LedgerQueryService(result.accounts)

    lines = query.list_all()
    if not lines:
        click.echo("No accounts found.")
        return
    for line in lines:
        click.echo(line)


@click.command("history")
@click.argument("ledger_file", type=click.Path(dir_okay=False))
@click.argument("name", metavar="ACCOUNT_NAME")
@click.pass_context
def history(ctx, ledger_file: str, name: str):
    """Show every transaction of ACCOUNT_NAME in LEDGER_FILE.

    Account names are matched exactly, including case.

    Examples:
        supportbank history Transactions2014.csv "Jon A"
    """
    result = _import(ctx, ledger_file)
    query = LedgerQueryService(result.accounts)

    lines = query.list_one(name)
    if lines is None:
        handle_domain_error(ctx, NotFoundError(account_not_found(name)))
    for line in lines:
        click.echo(line)


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(balances)
    cli.add_command(history)
