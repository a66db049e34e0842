"""Ledger domain service for users, cards, statements and transactions."""

from typing import Optional
from datetime import date
from decimal import Decimal

from spendtrack.database.base import Database
from spendtrack.domain.entities import (
    Card,
    Statement,
    Transaction,
    TransactionType,
    User,
)
from spendtrack.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    card_not_found,
    duplicate_user,
    statement_not_found,
    user_not_found,
)
from spendtrack.domain.filters import TransactionFilter

DEFAULT_CARD_COLOR = "#3b82f6"


class LedgerService:
    """Service for recording the rows that analytics read."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_user(self, external_id: str, email: Optional[str] = None) -> int:
        """Create a user for an identity-provider subject.

        Raises:
            ValidationError: If the subject is blank
            ConflictError: If a user with the subject already exists
        """
        external_id = external_id.strip()
        if not external_id:
            raise ValidationError("Identity subject cannot be empty")
        if self.db.get_user_by_external_id(external_id) is not None:
            raise ConflictError(duplicate_user(external_id))
        return self.db.create_user(external_id=external_id, email=email)

    def list_users(self) -> list[User]:
        return self.db.list_users()

    def create_card(self, user_id: int, name: str, color: Optional[str] = None) -> int:
        """Create a card owned by a user.

        Raises:
            NotFoundError: If the user doesn't exist
            ValidationError: If the card name is blank
        """
        if self.db.get_user(user_id) is None:
            raise NotFoundError(user_not_found(user_id))
        name = name.strip()
        if not name:
            raise ValidationError("Card name cannot be empty")
        return self.db.create_card(user_id=user_id, name=name, color=color or DEFAULT_CARD_COLOR)

    def list_cards(self, user_id: int) -> list[Card]:
        return self.db.list_cards(user_id)

    def get_owned_card(self, user_id: int, card_id: int) -> Card:
        """Get a card, treating other users' cards as missing.

        Raises:
            NotFoundError: If the card doesn't exist or belongs to someone else
        """
        card = self.db.get_card(card_id)
        if card is None or card.user_id != user_id:
            raise NotFoundError(card_not_found(card_id))
        return card

    def create_statement(self, user_id: int, card_id: int, statement_date: date) -> int:
        """Create a statement on one of the user's cards.

        Raises:
            NotFoundError: If the card doesn't exist or belongs to someone else
        """
        self.get_owned_card(user_id, card_id)
        return self.db.create_statement(card_id=card_id, statement_date=statement_date)

    def get_owned_statement(self, user_id: int, statement_id: int) -> Statement:
        """Get a statement on one of the user's cards.

        Raises:
            NotFoundError: If the statement doesn't exist or belongs to someone else
        """
        statement = self.db.get_statement(statement_id)
        if statement is None:
            raise NotFoundError(statement_not_found(statement_id))
        card = self.db.get_card(statement.card_id)
        if card is None or card.user_id != user_id:
            raise NotFoundError(statement_not_found(statement_id))
        return statement

    def add_transaction(
        self,
        user_id: int,
        statement_id: int,
        date: date,
        description: str,
        amount: Decimal,
        type: Optional[TransactionType] = None,
        category: Optional[str] = None,
    ) -> int:
        """Add a transaction to a statement.

        The stored sign always agrees with the type: debits negative,
        credits positive. Without an explicit type, the sign of the amount
        decides it.

        Args:
            user_id: Owning user ID
            statement_id: Statement ID
            date: Transaction date
            description: Statement line text
            amount: Transaction amount
            type: Optional CREDIT/DEBIT
            category: Optional category label

        Returns:
            Transaction ID

        Raises:
            NotFoundError: If the statement doesn't exist or belongs to someone else
        """
        self.get_owned_statement(user_id, statement_id)

        if type is None:
            type = TransactionType.DEBIT if amount < 0 else TransactionType.CREDIT
        magnitude = abs(amount)
        signed = -magnitude if type == TransactionType.DEBIT else magnitude

        if category is not None:
            category = category.strip() or None

        return self.db.create_transaction(
            statement_id=statement_id,
            date=date,
            description=description,
            amount=signed,
            type=type,
            category=category,
        )

    def list_transactions(
        self, user_id: int, transaction_filter: Optional[TransactionFilter] = None
    ) -> list[Transaction]:
        return self.db.list_transactions(user_id, transaction_filter)
