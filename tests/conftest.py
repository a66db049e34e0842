"""Shared pytest fixtures for spendtrack tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from spendtrack.database.factories import create_sqlite_database
from spendtrack.domain.analytics import AnalyticsService
from spendtrack.domain.identity import IdentityService
from spendtrack.domain.ledger import LedgerService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def ledger_service(temp_db):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db)


@pytest.fixture
def analytics_service(temp_db):
    """Create an AnalyticsService with a temporary database."""
    return AnalyticsService(temp_db)


@pytest.fixture
def identity_service(temp_db):
    """Create an IdentityService with a temporary database."""
    return IdentityService(temp_db)


@pytest.fixture
def sample_user(ledger_service, temp_db):
    """Create a sample user for testing."""
    user_id = ledger_service.create_user(external_id="user_alice", email="alice@example.com")
    return temp_db.get_user(user_id)


@pytest.fixture
def other_user(ledger_service, temp_db):
    """Create a second user whose data must never leak into sample_user's results."""
    user_id = ledger_service.create_user(external_id="user_bob")
    return temp_db.get_user(user_id)


@pytest.fixture
def sample_card(ledger_service, temp_db, sample_user):
    """Create a sample card owned by sample_user."""
    card_id = ledger_service.create_card(user_id=sample_user.id, name="Visa Gold")
    return temp_db.get_card(card_id)


@pytest.fixture
def add_transaction(ledger_service, sample_user, sample_card):
    """Return a helper that records a transaction, creating monthly statements as needed."""
    statements = {}

    def _add(
        txn_date,
        amount,
        category=None,
        type=None,
        description="Purchase",
        user=None,
        card_id=None,
    ):
        owner = user or sample_user
        card = card_id or sample_card.id
        key = (owner.id, card, txn_date.year, txn_date.month)
        if key not in statements:
            statements[key] = ledger_service.create_statement(
                user_id=owner.id,
                card_id=card,
                statement_date=date(txn_date.year, txn_date.month, 28),
            )
        return ledger_service.add_transaction(
            user_id=owner.id,
            statement_id=statements[key],
            date=txn_date,
            description=description,
            amount=Decimal(amount),
            type=type,
            category=category,
        )

    return _add


@pytest.fixture
def two_month_history(add_transaction):
    """One card, two statements: January nets 100 of spend, February 80."""
    add_transaction(date(2024, 1, 5), "-70.00")
    add_transaction(date(2024, 1, 12), "-50.00")
    add_transaction(date(2024, 1, 20), "20.00", description="Refund")
    add_transaction(date(2024, 2, 3), "-50.00")
    add_transaction(date(2024, 2, 17), "-30.00")


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
