"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class UnauthorizedError(DomainError):
    """Caller identity could not be resolved to a known user."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class InvalidFilterError(ValidationError):
    """A caller-supplied filter value is structurally invalid."""

    def __init__(self, field: str, message: str):
        super().__init__(f"Invalid {field}: {message}")
        self.field = field


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class StoreUnavailableError(RuntimeError):
    """The underlying store could not answer a query.

    Not a DomainError: nothing about the caller's input is wrong, and the
    caller owns any retry policy.
    """

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Store unavailable during {operation}{detail}")
        self.operation = operation


def missing_identity() -> str:
    """Return message for a request without a caller identity."""
    return "Unauthorized: no caller identity supplied"


def unknown_identity(external_id: str) -> str:
    """Return message for an identity that maps to no user."""
    return f"Unauthorized: identity '{external_id}' is not a known user"


def user_not_found(user_id: int) -> str:
    """Return message for missing user."""
    return f"User {user_id} not found"


def card_not_found(card_id: int) -> str:
    """Return message for missing card."""
    return f"Card {card_id} not found"


def statement_not_found(statement_id: int) -> str:
    """Return message for missing statement."""
    return f"Statement {statement_id} not found"


def duplicate_user(external_id: str) -> str:
    """Return message for duplicate identity-provider subject."""
    return f"User with identity '{external_id}' already exists"
