"""Tests for transaction filter construction."""

from datetime import date

import pytest

from spendtrack.domain.entities import UNCATEGORIZED, TransactionType
from spendtrack.domain.errors import InvalidFilterError
from spendtrack.domain.filters import TransactionFilter, build_transaction_filter


def test_empty_filter():
    assert build_transaction_filter() == TransactionFilter()


def test_parses_date_strings():
    transaction_filter = build_transaction_filter(start_date="2024-01-01", end_date="2024-03-31")

    assert transaction_filter.start_date == date(2024, 1, 1)
    assert transaction_filter.end_date == date(2024, 3, 31)


def test_accepts_date_objects():
    transaction_filter = build_transaction_filter(start_date=date(2024, 5, 1))

    assert transaction_filter.start_date == date(2024, 5, 1)


def test_blank_strings_are_ignored():
    transaction_filter = build_transaction_filter(category="  ", start_date="")

    assert transaction_filter.category is None
    assert transaction_filter.start_date is None


def test_malformed_date_names_field():
    with pytest.raises(InvalidFilterError) as exc_info:
        build_transaction_filter(end_date="2024-13-45")

    assert exc_info.value.field == "end_date"
    assert "end_date" in str(exc_info.value)


def test_start_after_end_rejected():
    with pytest.raises(InvalidFilterError) as exc_info:
        build_transaction_filter(start_date="2024-06-01", end_date="2024-01-01")

    assert exc_info.value.field == "start_date"


@pytest.mark.parametrize("card_id", [0, -3])
def test_invalid_card_id_rejected(card_id):
    with pytest.raises(InvalidFilterError) as exc_info:
        build_transaction_filter(card_id=card_id)

    assert exc_info.value.field == "card_id"


def test_type_is_case_insensitive():
    assert build_transaction_filter(type="debit").type == TransactionType.DEBIT


def test_unknown_type_rejected():
    with pytest.raises(InvalidFilterError) as exc_info:
        build_transaction_filter(type="TRANSFER")

    assert exc_info.value.field == "type"


@pytest.mark.parametrize("value", ["5", "2024-02", "15/01/2024", "next tuesday"])
def test_ambiguous_dates_rejected(value):
    with pytest.raises(InvalidFilterError) as exc_info:
        build_transaction_filter(start_date=value)

    assert exc_info.value.field == "start_date"


def test_relative_phrase_accepted():
    transaction_filter = build_transaction_filter(start_date="this year")

    assert transaction_filter.start_date == date(date.today().year, 1, 1)


@pytest.mark.parametrize("value", ["uncategorized", "UNCATEGORIZED", " Uncategorized "])
def test_uncategorized_matched_in_any_case(value):
    assert build_transaction_filter(category=value).category == UNCATEGORIZED


def test_other_categories_keep_their_case():
    assert build_transaction_filter(category="groceries").category == "groceries"
