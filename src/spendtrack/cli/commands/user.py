"""User management commands."""

import click
from spendtrack.cli.error_handling import handle_domain_error
from spendtrack.domain.errors import DomainError
from spendtrack.domain.ledger import LedgerService


@click.group()
def user_group():
    """Manage users."""
    pass


@user_group.command("create")
@click.argument("subject", metavar="IDENTITY_SUBJECT")
@click.option("--email", help="Contact email")
@click.pass_context
def create_user(ctx, subject: str, email: str | None):
    """Register a user for an identity-provider subject.

    Examples:
        spendtrack user create user_2abc --email me@example.com
    """
    service = LedgerService(ctx.obj["db"])

    try:
        user_id = service.create_user(external_id=subject, email=email)
        click.echo(f"Created user '{subject.strip()}' (ID: {user_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@user_group.command("list")
@click.pass_context
def list_users(ctx):
    """List all users."""
    service = LedgerService(ctx.obj["db"])

    users = service.list_users()
    if not users:
        click.echo("No users found.")
        return

    click.echo("\nUsers:")
    click.echo("-" * 60)
    for usr in users:
        click.echo(f"ID: {usr.id:3d} | {usr.external_id:24s} | {usr.email or ''}")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
