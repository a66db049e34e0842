"""Tests for year-over-year month grids."""

from datetime import date
from decimal import Decimal

import pytest

from spendtrack.domain.errors import InvalidFilterError, UnauthorizedError


def _trend(trends, category):
    for trend in trends:
        if trend.category == category:
            return trend
    return None


def test_year_over_year_empty_without_transactions(analytics_service, sample_user):
    assert analytics_service.year_over_year(sample_user.id) == []


def test_single_month_category_gets_one_zero_filled_year(
    analytics_service, sample_user, add_transaction
):
    add_transaction(date(2024, 3, 15), "-250.00", category="Travel")

    trends = analytics_service.year_over_year(sample_user.id)

    assert len(trends) == 1
    assert trends[0].category == "Travel"
    assert [series.year for series in trends[0].years] == [2024]
    months = trends[0].years[0].months
    assert len(months) == 12
    assert months[2] == Decimal("250.00")
    assert [m for i, m in enumerate(months) if i != 2] == [Decimal("0.00")] * 11


def test_every_category_carries_the_same_years(analytics_service, sample_user, add_transaction):
    add_transaction(date(2022, 6, 1), "-10.00", category="Groceries")
    add_transaction(date(2024, 6, 1), "-20.00", category="Groceries")
    add_transaction(date(2023, 1, 1), "-5.00", category="Books")

    trends = analytics_service.year_over_year(sample_user.id)

    for trend in trends:
        assert [series.year for series in trend.years] == [2022, 2023, 2024]
        for series in trend.years:
            assert len(series.months) == 12

    books = _trend(trends, "Books")
    assert books.years[0].total == Decimal("0.00")
    assert books.years[1].months[0] == Decimal("5.00")
    assert books.years[2].total == Decimal("0.00")


def test_same_calendar_month_aligns_across_years(analytics_service, sample_user, add_transaction):
    add_transaction(date(2023, 12, 24), "-300.00", category="Gifts")
    add_transaction(date(2024, 12, 20), "-200.00", category="Gifts")
    add_transaction(date(2024, 12, 28), "50.00", category="Gifts")

    gifts = analytics_service.year_over_year(sample_user.id)[0]

    assert gifts.years[0].months[11] == Decimal("300.00")
    assert gifts.years[1].months[11] == Decimal("150.00")


def test_year_argument_compares_with_previous_year(analytics_service, sample_user, add_transaction):
    add_transaction(date(2021, 5, 1), "-99.00", category="Groceries")
    add_transaction(date(2024, 5, 1), "-40.00", category="Groceries")

    trends = analytics_service.year_over_year(sample_user.id, year=2024)

    assert [series.year for series in trends[0].years] == [2023, 2024]
    assert trends[0].years[0].total == Decimal("0.00")
    assert trends[0].years[1].months[4] == Decimal("40.00")


def test_categories_without_rows_in_range_are_excluded(
    analytics_service, sample_user, add_transaction
):
    add_transaction(date(2020, 5, 1), "-99.00", category="Old Hobby")
    add_transaction(date(2024, 5, 1), "-40.00", category="Groceries")

    trends = analytics_service.year_over_year(sample_user.id, year=2024)

    assert [t.category for t in trends] == ["Groceries"]


def test_category_filter(analytics_service, sample_user, add_transaction):
    add_transaction(date(2024, 5, 1), "-40.00", category="Groceries")
    add_transaction(date(2024, 5, 2), "-10.00", category="Coffee")

    trends = analytics_service.year_over_year(sample_user.id, category="Coffee")

    assert [t.category for t in trends] == ["Coffee"]


def test_invalid_year_rejected(analytics_service, sample_user):
    with pytest.raises(InvalidFilterError) as exc_info:
        analytics_service.year_over_year(sample_user.id, year=0)
    assert exc_info.value.field == "year"


def test_year_over_year_requires_user(analytics_service):
    with pytest.raises(UnauthorizedError):
        analytics_service.year_over_year(None)


def test_to_dict_renders_twelve_months(analytics_service, sample_user, add_transaction):
    add_transaction(date(2024, 3, 15), "-250.00", category="Travel")

    payload = analytics_service.year_over_year(sample_user.id)[0].to_dict()

    assert payload["category"] == "Travel"
    assert payload["years"][0]["year"] == 2024
    assert payload["years"][0]["months"][2] == "250.00"
    assert len(payload["years"][0]["months"]) == 12
