"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import modules directly to avoid circular import through domain/__init__.py
from spendtrack.domain.entities import (
    User,
    Card,
    Statement,
    Transaction,
    TransactionType,
)
from spendtrack.domain.filters import TransactionFilter


class Database(ABC):
    """Abstract database interface for spendtrack.

    Every transaction read takes the owning user's ID as a separate argument
    and implementations must scope on Card.user_id for every such query.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # User operations
    @abstractmethod
    def create_user(self, external_id: str, email: Optional[str] = None) -> int:
        """Create a user. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_external_id(self, external_id: str) -> Optional[User]:
        """Get user by identity-provider subject."""
        pass

    @abstractmethod
    def list_users(self) -> list[User]:
        """List all users."""
        pass

    # Card operations
    @abstractmethod
    def create_card(self, user_id: int, name: str, color: str) -> int:
        """Create a card. Returns card ID."""
        pass

    @abstractmethod
    def get_card(self, card_id: int) -> Optional[Card]:
        """Get card by ID."""
        pass

    @abstractmethod
    def list_cards(self, user_id: int) -> list[Card]:
        """List cards owned by a user."""
        pass

    @abstractmethod
    def count_cards(self, user_id: int) -> int:
        """Count cards owned by a user."""
        pass

    # Statement operations
    @abstractmethod
    def create_statement(self, card_id: int, statement_date: date) -> int:
        """Create a statement. Returns statement ID."""
        pass

    @abstractmethod
    def get_statement(self, statement_id: int) -> Optional[Statement]:
        """Get statement by ID."""
        pass

    @abstractmethod
    def count_statements(self, user_id: int) -> int:
        """Count statements on cards owned by a user."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        statement_id: int,
        date: date,
        description: str,
        amount: Decimal,
        type: TransactionType,
        category: Optional[str] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def list_transactions(
        self, user_id: int, transaction_filter: Optional[TransactionFilter] = None
    ) -> list[Transaction]:
        """List a user's transactions, oldest first.

        Args:
            user_id: Owning user ID
            transaction_filter: Optional card, category, date range and type filter
        """
        pass

    @abstractmethod
    def count_transactions(
        self, user_id: int, transaction_filter: Optional[TransactionFilter] = None
    ) -> int:
        """Count a user's transactions matching the filter."""
        pass

    @abstractmethod
    def list_categories(self, user_id: int) -> list[str]:
        """Distinct non-empty category labels used by a user's transactions, sorted."""
        pass
