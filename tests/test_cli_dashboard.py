"""Tests for the dashboard analytics commands."""

import json
from datetime import date

import pytest
from sqlalchemy import text

from spendtrack.cli.main import cli


def _dashboard(cli_runner, temp_db, *args, user="user_alice"):
    base = ["--db-path", temp_db.database_path]
    if user is not None:
        base += ["--user", user]
    return cli_runner.invoke(cli, base + ["dashboard"] + list(args))


def test_summary_json(cli_runner, temp_db, sample_user, two_month_history):
    result = _dashboard(cli_runner, temp_db, "summary")

    assert result.exit_code == 0
    payload = json.loads(result.output)["summary"]
    assert payload["current_period"] == "2024-02"
    assert payload["current_total"] == "80.00"
    assert payload["prior_total"] == "100.00"
    assert payload["percent_change"] == pytest.approx(-20.0)
    assert payload["card_count"] == 1
    assert payload["statement_count"] == 2


def test_summary_null_percent_change_for_first_month(
    cli_runner, temp_db, sample_user, add_transaction
):
    add_transaction(date(2024, 3, 1), "-10.00")

    result = _dashboard(cli_runner, temp_db, "summary")

    assert result.exit_code == 0
    assert json.loads(result.output)["summary"]["percent_change"] is None


def test_analytics_json(cli_runner, temp_db, sample_user, two_month_history):
    result = _dashboard(cli_runner, temp_db, "analytics")

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["category_trends"][0]["category"] == "Uncategorized"
    assert [p["total"] for p in payload["category_trends"][0]["periods"]] == ["100.00", "80.00"]
    assert payload["summary"]["transaction_count"] == 5


def test_analytics_invalid_date_filter(cli_runner, temp_db, sample_user):
    result = _dashboard(cli_runner, temp_db, "analytics", "--start-date", "2024-99-99")

    assert result.exit_code == 1
    assert "Invalid start_date" in result.output


def test_analytics_reversed_range(cli_runner, temp_db, sample_user):
    result = _dashboard(
        cli_runner, temp_db, "analytics", "--start-date", "2024-05-01", "--end-date", "2024-01-01"
    )

    assert result.exit_code == 1
    assert "Invalid start_date" in result.output


def test_rolling_average_json(cli_runner, temp_db, sample_user, two_month_history):
    result = _dashboard(cli_runner, temp_db, "rolling-average", "--window", "2")

    assert result.exit_code == 0
    data = json.loads(result.output)["data"]
    assert [point["rolling_average"] for point in data] == ["100.00", "90.00"]


def test_rolling_average_invalid_window(cli_runner, temp_db, sample_user):
    result = _dashboard(cli_runner, temp_db, "rolling-average", "--window", "0")

    assert result.exit_code == 1
    assert "Invalid window" in result.output


def test_year_over_year_json(cli_runner, temp_db, sample_user, two_month_history):
    result = _dashboard(cli_runner, temp_db, "year-over-year")

    assert result.exit_code == 0
    trends = json.loads(result.output)["category_trends"]
    assert trends[0]["years"][0]["year"] == 2024
    assert trends[0]["years"][0]["months"][:3] == ["100.00", "80.00", "0.00"]


def test_categories_json(cli_runner, temp_db, sample_user, add_transaction):
    add_transaction(date(2024, 1, 1), "-1.00", category="Travel")
    add_transaction(date(2024, 1, 2), "-1.00", category="Books")

    result = _dashboard(cli_runner, temp_db, "categories")

    assert result.exit_code == 0
    assert json.loads(result.output) == {"categories": ["Books", "Travel"]}


def test_stats_json(cli_runner, temp_db, sample_user, two_month_history):
    result = _dashboard(cli_runner, temp_db, "stats", "--end-date", "2024-01-31")

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["total_transactions"] == 3
    assert payload["total_debit"] == "120.00"
    assert payload["total_credit"] == "20.00"


def test_quarter_over_quarter_json(cli_runner, temp_db, sample_user, two_month_history):
    result = _dashboard(cli_runner, temp_db, "quarter-over-quarter")

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["current"]["label"] == "2024-Q1"
    assert payload["previous"]["total"] == "0.00"
    assert payload["percent_change"] is None


def test_missing_user_is_unauthorized(cli_runner, temp_db, sample_user, monkeypatch):
    monkeypatch.delenv("SPENDTRACK_USER", raising=False)

    result = _dashboard(cli_runner, temp_db, "summary", user=None)

    assert result.exit_code == 2
    assert "Unauthorized" in result.output


def test_unknown_user_is_unauthorized(cli_runner, temp_db, sample_user):
    result = _dashboard(cli_runner, temp_db, "analytics", user="user_mallory")

    assert result.exit_code == 2
    assert "Unauthorized" in result.output


def test_user_from_environment(cli_runner, temp_db, sample_user, two_month_history, monkeypatch):
    monkeypatch.setenv("SPENDTRACK_USER", "user_alice")

    result = _dashboard(cli_runner, temp_db, "summary", user=None)

    assert result.exit_code == 0


def test_other_user_sees_nothing(cli_runner, temp_db, sample_user, other_user, two_month_history):
    result = _dashboard(cli_runner, temp_db, "summary", user="user_bob")

    assert result.exit_code == 0
    payload = json.loads(result.output)["summary"]
    assert payload["transaction_count"] == 0
    assert payload["current_period"] is None


def test_store_failure_reports_generic_message(
    cli_runner, temp_db, sample_user, two_month_history
):
    engine = temp_db.session_factory.kw["bind"]
    with engine.begin() as connection:
        connection.execute(text("DROP TABLE transactions"))

    result = _dashboard(cli_runner, temp_db, "summary")

    assert result.exit_code == 1
    assert "Failed to fetch dashboard summary" in result.output


def test_invalid_rolling_window_env(cli_runner, temp_db, sample_user, monkeypatch):
    monkeypatch.setenv("SPENDTRACK_ROLLING_WINDOW", "zero")

    result = _dashboard(cli_runner, temp_db, "rolling-average")

    assert result.exit_code == 1
    assert "SPENDTRACK_ROLLING_WINDOW" in result.output
