"""Tests for analytics configuration."""

import pytest

from spendtrack.config import AnalyticsConfig
from spendtrack.domain.errors import InvalidFilterError


def test_defaults_when_environment_is_empty():
    config = AnalyticsConfig.from_env({})

    assert config == AnalyticsConfig(rolling_window=3, top_categories=5, max_workers=2)


def test_reads_environment_values():
    config = AnalyticsConfig.from_env(
        {
            "SPENDTRACK_ROLLING_WINDOW": "6",
            "SPENDTRACK_TOP_CATEGORIES": "10",
            "SPENDTRACK_MAX_WORKERS": "4",
        }
    )

    assert config.rolling_window == 6
    assert config.top_categories == 10
    assert config.max_workers == 4


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("SPENDTRACK_ROLLING_WINDOW", "12")

    assert AnalyticsConfig.from_env().rolling_window == 12


@pytest.mark.parametrize("value", ["abc", "0", "-2"])
def test_invalid_values_name_the_variable(value):
    with pytest.raises(InvalidFilterError) as exc_info:
        AnalyticsConfig.from_env({"SPENDTRACK_ROLLING_WINDOW": value})

    assert exc_info.value.field == "SPENDTRACK_ROLLING_WINDOW"
