"""Mapper functions to convert SQLAlchemy models into domain entities."""

from decimal import Decimal

from spendtrack.domain import entities as domain
from spendtrack.database.models import (
    User as ORMUser,
    Card as ORMCard,
    Statement as ORMStatement,
    Transaction as ORMTransaction,
)


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        external_id=orm_user.external_id,
        email=orm_user.email,
        created_at=orm_user.created_at,
    )


def card_to_domain(orm_card: ORMCard) -> domain.Card:
    """Convert SQLAlchemy Card model to domain Card entity."""
    return domain.Card(
        id=orm_card.id,
        user_id=orm_card.user_id,
        name=orm_card.name,
        color=orm_card.color,
        created_at=orm_card.created_at,
    )


def statement_to_domain(orm_statement: ORMStatement) -> domain.Statement:
    """Convert SQLAlchemy Statement model to domain Statement entity."""
    return domain.Statement(
        id=orm_statement.id,
        card_id=orm_statement.card_id,
        statement_date=orm_statement.statement_date,
        year=orm_statement.year,
        month=orm_statement.month,
        created_at=orm_statement.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        statement_id=orm_transaction.statement_id,
        date=orm_transaction.date,
        description=orm_transaction.description,
        # SQLite hands Numeric back through float; pin it to cents
        amount=Decimal(orm_transaction.amount).quantize(Decimal("0.01")),
        type=domain.TransactionType(orm_transaction.type),
        category=orm_transaction.category,
    )
