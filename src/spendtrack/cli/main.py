"""Main CLI entry point."""

import logging

import click
from spendtrack.database.factories import create_database, create_sqlite_database

# Import and register all commands at module level
from spendtrack.cli.commands import (
    user,
    card,
    statement,
    dashboard,
)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(log_level: str) -> None:
    """Configure root logging for a CLI run."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides SPENDTRACK_DB_PATH environment variable)",
    envvar="SPENDTRACK_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    envvar="SPENDTRACK_LOG_LEVEL",
    help="Logging verbosity",
)
@click.option(
    "--user",
    "user_subject",
    envvar="SPENDTRACK_USER",
    help="Identity subject of the caller (overrides SPENDTRACK_USER)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str, user_subject: str | None):
    """Spendtrack - Card statement analytics.

    Record cards, statements and transactions, then explore spending
    trends across categories and time.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        if db_path is not None:
            db = create_sqlite_database(database_path=db_path)
        else:
            db = create_database()
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)
        ctx.obj["db"] = db
        ctx.obj["user_subject"] = user_subject


# Register all commands
user.register_commands(cli)
card.register_commands(cli)
statement.register_commands(cli)
dashboard.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
