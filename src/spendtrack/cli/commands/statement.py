"""Statement and transaction recording commands."""

import click
from spendtrack.cli.error_handling import handle_domain_error, require_user_or_exit
from spendtrack.domain.entities import TransactionType
from spendtrack.domain.errors import DomainError
from spendtrack.domain.ledger import LedgerService
from spendtrack.utils.amount_parser import parse_amount
from spendtrack.utils.date_parser import parse_date


@click.group()
def statement_group():
    """Manage statements."""
    pass


@statement_group.command("create")
@click.argument("card_id", type=int)
@click.option("--date", "statement_date", required=True, help="Statement date (YYYY-MM-DD)")
@click.pass_context
def create_statement(ctx, card_id: int, statement_date: str):
    """Create a statement on one of the current user's cards.

    Examples:
        spendtrack --user user_2abc statement create 1 --date 2024-01-31
    """
    owner = require_user_or_exit(ctx)
    service = LedgerService(ctx.obj["db"])

    try:
        parsed_date = parse_date(statement_date)
    except ValueError as e:
        click.echo(f"Error: Invalid date: {e}", err=True)
        ctx.exit(1)

    try:
        statement_id = service.create_statement(
            user_id=owner.id, card_id=card_id, statement_date=parsed_date
        )
        click.echo(
            f"Created statement for {parsed_date.strftime('%Y-%m')} on card {card_id} "
            f"(ID: {statement_id})"
        )
    except DomainError as e:
        handle_domain_error(ctx, e)


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("add")
@click.argument("statement_id", type=int)
@click.option("--date", "txn_date", required=True, help="Transaction date (YYYY-MM-DD)")
@click.option("--amount", required=True, help="Amount (negative for debits unless --type is given)")
@click.option("--description", required=True, help="Statement line text")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice(["CREDIT", "DEBIT"], case_sensitive=False),
    help="Transaction type (inferred from the amount sign if omitted)",
)
@click.option("--category", help="Category label")
@click.pass_context
def add_transaction(
    ctx,
    statement_id: int,
    txn_date: str,
    amount: str,
    description: str,
    txn_type: str | None,
    category: str | None,
):
    """Add a transaction to a statement.

    Examples:
        spendtrack --user user_2abc transaction add 1 --date 2024-01-05 --amount -42.10 --description "Grocer" --category Groceries
        spendtrack --user user_2abc transaction add 1 --date 2024-01-09 --amount 20 --description "Refund" --type CREDIT
    """
    owner = require_user_or_exit(ctx)
    service = LedgerService(ctx.obj["db"])

    try:
        parsed_date = parse_date(txn_date)
    except ValueError as e:
        click.echo(f"Error: Invalid date: {e}", err=True)
        ctx.exit(1)

    try:
        parsed_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount: {e}", err=True)
        ctx.exit(1)

    try:
        txn_id = service.add_transaction(
            user_id=owner.id,
            statement_id=statement_id,
            date=parsed_date,
            description=description,
            amount=parsed_amount,
            type=TransactionType(txn_type.upper()) if txn_type else None,
            category=category,
        )
        click.echo(f"Added transaction {txn_id} to statement {statement_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register statement and transaction commands with main CLI."""
    cli.add_command(statement_group, name="statement")
    cli.add_command(transaction_group, name="transaction")
