"""Card management commands."""

import click
from spendtrack.cli.error_handling import handle_domain_error, require_user_or_exit
from spendtrack.domain.errors import DomainError
from spendtrack.domain.ledger import LedgerService


@click.group()
def card_group():
    """Manage cards."""
    pass


@card_group.command("create")
@click.argument("name", metavar="CARD_NAME")
@click.option("--color", help="Display color (e.g., '#ef4444')")
@click.pass_context
def create_card(ctx, name: str, color: str | None):
    """Create a card owned by the current user.

    Examples:
        spendtrack --user user_2abc card create "Visa Gold" --color "#f59e0b"
    """
    owner = require_user_or_exit(ctx)
    service = LedgerService(ctx.obj["db"])

    try:
        card_id = service.create_card(user_id=owner.id, name=name, color=color)
        click.echo(f"Created card '{name.strip()}' (ID: {card_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@card_group.command("list")
@click.pass_context
def list_cards(ctx):
    """List the current user's cards."""
    owner = require_user_or_exit(ctx)
    service = LedgerService(ctx.obj["db"])

    cards = service.list_cards(owner.id)
    if not cards:
        click.echo("No cards found.")
        return

    click.echo("\nCards:")
    click.echo("-" * 60)
    for crd in cards:
        click.echo(f"ID: {crd.id:3d} | {crd.name:24s} | {crd.color}")


def register_commands(cli):
    """Register card commands with main CLI."""
    cli.add_command(card_group, name="card")
