"""Domain layer for spendtrack application.

Services are imported from their modules (spendtrack.domain.analytics,
spendtrack.domain.ledger, spendtrack.domain.identity) because they depend on
spendtrack.database, which itself imports the entities defined here.
"""

from spendtrack.domain.entities import UNCATEGORIZED, TransactionType
from spendtrack.domain.errors import (
    DomainError,
    InvalidFilterError,
    NotFoundError,
    StoreUnavailableError,
    UnauthorizedError,
)

__all__ = [
    "UNCATEGORIZED",
    "TransactionType",
    "DomainError",
    "InvalidFilterError",
    "NotFoundError",
    "StoreUnavailableError",
    "UnauthorizedError",
]
