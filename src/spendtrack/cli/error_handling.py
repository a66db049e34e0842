"""CLI error handling helpers.

Exit codes stand in for the dashboard's HTTP statuses: 2 for an
unresolvable caller (401), 1 for bad input or failed queries (400/500).
"""

import json
import logging
from typing import Any, Callable

import click

from spendtrack.domain.entities import User
from spendtrack.domain.errors import DomainError, StoreUnavailableError, UnauthorizedError
from spendtrack.domain.identity import IdentityService

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_UNAUTHORIZED = 2


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(EXIT_FAILURE)


def handle_unauthorized(ctx: click.Context, error: UnauthorizedError) -> None:
    click.echo(f"Error: {error}", err=True)
    ctx.exit(EXIT_UNAUTHORIZED)


def require_user_or_exit(ctx: click.Context) -> User:
    """Resolve the --user identity, or exit with the unauthorized code."""
    try:
        return IdentityService(ctx.obj["db"]).require_user(ctx.obj.get("user_subject"))
    except UnauthorizedError as e:
        handle_unauthorized(ctx, e)


def _to_jsonable(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(item) for item in value]
    return value


def emit_json(
    ctx: click.Context,
    key: str | None,
    produce: Callable[[User], Any],
    failure_message: str,
) -> None:
    """Resolve the caller, run an analytics call and print its result as JSON.

    Args:
        ctx: Click context holding the database and caller identity
        key: Top-level key to wrap the payload in, or None to print it bare
        produce: Callable receiving the resolved user and returning the result
        failure_message: Message shown when the store or the engine fails
    """
    try:
        user = IdentityService(ctx.obj["db"]).require_user(ctx.obj.get("user_subject"))
        result = produce(user)
    except UnauthorizedError as e:
        handle_unauthorized(ctx, e)
    except DomainError as e:
        handle_domain_error(ctx, e)
    except StoreUnavailableError as e:
        logger.error("%s: %s", failure_message, e)
        click.echo(f"Error: {failure_message}", err=True)
        ctx.exit(EXIT_FAILURE)
    except Exception:
        logger.exception(failure_message)
        click.echo(f"Error: {failure_message}", err=True)
        ctx.exit(EXIT_FAILURE)
    else:
        payload = _to_jsonable(result)
        if key is not None:
            payload = {key: payload}
        click.echo(json.dumps(payload, indent=2))
