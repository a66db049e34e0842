"""Domain model entities for spendtrack.

These are pure data classes representing stored rows and analytics results,
independent of the database schema. Result types expose ``to_dict`` so the
boundary layer can serialize them without knowing their internals.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


UNCATEGORIZED = "Uncategorized"


class TransactionType(str, Enum):
    """Direction of money movement on a statement line."""

    CREDIT = "CREDIT"
    DEBIT = "DEBIT"


class TrendDirection(str, Enum):
    """Movement of the latest period relative to the one before it."""

    UP = "up"
    DOWN = "down"
    FLAT = "flat"


def _money(value: Decimal) -> str:
    return str(value)


@dataclass(frozen=True)
class User:
    """User domain entity."""

    id: int
    external_id: str
    email: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Card:
    """Card domain entity."""

    id: int
    user_id: int
    name: str
    color: str
    created_at: datetime


@dataclass(frozen=True)
class Statement:
    """Statement domain entity, anchored on its billing period."""

    id: int
    card_id: int
    statement_date: date
    year: int
    month: int
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: int
    statement_id: int
    date: date
    description: str
    amount: Decimal
    type: TransactionType
    category: Optional[str]

    @property
    def category_label(self) -> str:
        """Category name, with missing labels grouped under Uncategorized."""
        if self.category is None or not self.category.strip():
            return UNCATEGORIZED
        if self.category.strip().casefold() == UNCATEGORIZED.casefold():
            return UNCATEGORIZED
        return self.category

    @property
    def net_amount(self) -> Decimal:
        """Spend contribution: debit magnitude positive, credit magnitude negative."""
        magnitude = abs(self.amount)
        if self.type == TransactionType.CREDIT:
            return -magnitude
        return magnitude


@dataclass(frozen=True)
class PeriodTotal:
    """Net spend for one period of a series."""

    period_key: str
    total: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {"period_key": self.period_key, "total": _money(self.total)}


@dataclass(frozen=True)
class CategoryTrend:
    """Gap-filled monthly series for one category."""

    category: str
    periods: tuple[PeriodTotal, ...]
    trend_direction: TrendDirection
    trend_magnitude: Decimal
    trend_percent: Optional[float]
    total: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "periods": [period.to_dict() for period in self.periods],
            "trend_direction": self.trend_direction.value,
            "trend_magnitude": _money(self.trend_magnitude),
            "trend_percent": self.trend_percent,
            "total": _money(self.total),
        }


@dataclass(frozen=True)
class RollingAveragePoint:
    """Raw and smoothed totals for one period."""

    period_key: str
    raw_total: Decimal
    rolling_average: Decimal
    window_size: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "period_key": self.period_key,
            "raw_total": _money(self.raw_total),
            "rolling_average": _money(self.rolling_average),
            "window_size": self.window_size,
        }


@dataclass(frozen=True)
class YearSeries:
    """Twelve month totals (January first) for one year."""

    year: int
    months: tuple[Decimal, ...]
    total: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "year": self.year,
            "months": [_money(amount) for amount in self.months],
            "total": _money(self.total),
        }


@dataclass(frozen=True)
class YearOverYearTrend:
    """Year-aligned month grids for one category."""

    category: str
    years: tuple[YearSeries, ...]

    @property
    def total(self) -> Decimal:
        return sum((series.total for series in self.years), Decimal("0.00"))

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "years": [series.to_dict() for series in self.years],
        }


@dataclass(frozen=True)
class CategorySpend:
    """Net spend and transaction count for a category."""

    category: str
    total: Decimal
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"category": self.category, "total": _money(self.total), "count": self.count}


@dataclass(frozen=True)
class DashboardSummary:
    """Snapshot comparing the current period with the one before it."""

    current_period: Optional[str]
    prior_period: Optional[str]
    current_total: Decimal
    prior_total: Decimal
    percent_change: Optional[float]
    top_categories: tuple[CategorySpend, ...]
    transaction_count: int
    current_period_transaction_count: int
    card_count: int
    statement_count: int

    @property
    def is_empty(self) -> bool:
        return self.transaction_count == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "current_period": self.current_period,
            "prior_period": self.prior_period,
            "current_total": _money(self.current_total),
            "prior_total": _money(self.prior_total),
            "percent_change": self.percent_change,
            "top_categories": [item.to_dict() for item in self.top_categories],
            "transaction_count": self.transaction_count,
            "current_period_transaction_count": self.current_period_transaction_count,
            "card_count": self.card_count,
            "statement_count": self.statement_count,
        }


@dataclass(frozen=True)
class DashboardAnalytics:
    """Category trends and summary fetched together for the dashboard."""

    category_trends: tuple[CategoryTrend, ...]
    summary: DashboardSummary

    def to_dict(self) -> dict[str, Any]:
        return {
            "category_trends": [trend.to_dict() for trend in self.category_trends],
            "summary": self.summary.to_dict(),
        }


@dataclass(frozen=True)
class QuarterSeries:
    """Weekly totals for one calendar quarter."""

    label: str
    start_date: date
    end_date: date
    weeks: tuple[PeriodTotal, ...]
    total: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "weeks": [week.to_dict() for week in self.weeks],
            "total": _money(self.total),
        }


@dataclass(frozen=True)
class QuarterComparison:
    """Current quarter against the preceding quarter, week by week."""

    category: Optional[str]
    current: Optional[QuarterSeries]
    previous: Optional[QuarterSeries]
    percent_change: Optional[float]

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "current": self.current.to_dict() if self.current else None,
            "previous": self.previous.to_dict() if self.previous else None,
            "percent_change": self.percent_change,
        }


@dataclass(frozen=True)
class TransactionStats:
    """Totals over a filtered set of transactions."""

    total_transactions: int
    total_debit: Decimal
    total_credit: Decimal
    net_amount: Decimal
    average_amount: Decimal
    top_categories: tuple[CategorySpend, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_transactions": self.total_transactions,
            "total_debit": _money(self.total_debit),
            "total_credit": _money(self.total_credit),
            "net_amount": _money(self.net_amount),
            "average_amount": _money(self.average_amount),
            "top_categories": [item.to_dict() for item in self.top_categories],
        }
