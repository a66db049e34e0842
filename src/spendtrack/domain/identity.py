"""Caller identity resolution."""

from typing import Optional

from spendtrack.database.base import Database
from spendtrack.domain.entities import User
from spendtrack.domain.errors import UnauthorizedError, missing_identity, unknown_identity


class IdentityService:
    """Maps identity-provider subjects onto stored users.

    There is no fallback identity: a request without a resolvable subject is
    rejected, never served as some shared default user.
    """

    def __init__(self, db: Database):
        """Initialize identity service.

        Args:
            db: Database instance
        """
        self.db = db

    def require_user(self, external_id: Optional[str]) -> User:
        """Resolve the caller's subject to a user.

        Args:
            external_id: Identity-provider subject of the caller

        Returns:
            The matching user

        Raises:
            UnauthorizedError: If no subject was supplied or it matches no user
        """
        if external_id is None or not external_id.strip():
            raise UnauthorizedError(missing_identity())

        user = self.db.get_user_by_external_id(external_id.strip())
        if user is None:
            raise UnauthorizedError(unknown_identity(external_id.strip()))
        return user
