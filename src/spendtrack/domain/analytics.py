"""Dashboard analytics domain service.

All operations are read-only and stateless: they query the injected store,
then transform the rows in memory. Money is net spend (debit magnitudes
minus credit magnitudes), never clamped, so a negative total means the
period was a net inflow.
"""

import logging
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import MAXYEAR, MINYEAR, date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Optional, Sequence, Union

from spendtrack.config import AnalyticsConfig
from spendtrack.database.base import Database
from spendtrack.domain.entities import (
    CategorySpend,
    CategoryTrend,
    DashboardAnalytics,
    DashboardSummary,
    PeriodTotal,
    QuarterComparison,
    QuarterSeries,
    RollingAveragePoint,
    Transaction,
    TransactionStats,
    TransactionType,
    TrendDirection,
    YearOverYearTrend,
    YearSeries,
)
from spendtrack.domain.errors import InvalidFilterError, UnauthorizedError, missing_identity
from spendtrack.domain.filters import TransactionFilter, build_transaction_filter, coerce_date
from spendtrack.domain.periods import (
    month_grid,
    month_key,
    previous_month_key,
    quarter_bounds,
    quarter_label,
    week_start,
    week_starts,
)

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")
STATS_TOP_CATEGORIES = 10


def to_cents(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def net_total(transactions: Sequence[Transaction]) -> Decimal:
    """Net spend of a set of transactions."""
    return to_cents(sum((txn.net_amount for txn in transactions), ZERO))


def percent_change(current: Decimal, prior: Decimal) -> Optional[float]:
    """Percent change from prior to current, None when prior is zero."""
    if prior == 0:
        return None
    return float((current - prior) / abs(prior) * 100)


class AnalyticsService:
    """Service computing dashboard aggregates for one user at a time."""

    def __init__(self, db: Database, config: Optional[AnalyticsConfig] = None):
        """Initialize analytics service.

        Args:
            db: Database instance
            config: Optional analytics defaults; built-in defaults when omitted
        """
        self.db = db
        self.config = config or AnalyticsConfig()

    # Operations

    def category_trends(
        self, user_id: Optional[int], transaction_filter: Optional[TransactionFilter] = None
    ) -> list[CategoryTrend]:
        """Monthly net spend per category with a latest-vs-prior trend.

        Args:
            user_id: Caller's user ID
            transaction_filter: Optional card, category and date range filter

        Returns:
            CategoryTrend list, largest total first; empty when the user has no rows

        Raises:
            UnauthorizedError: If no user ID was supplied
        """
        user_id = self._require_user_id(user_id)
        transactions = self._transactions(user_id, transaction_filter)
        return self.build_category_trends(transactions)

    def rolling_average(
        self,
        user_id: Optional[int],
        category: Optional[str] = None,
        window: Optional[int] = None,
        card_id: Optional[int] = None,
    ) -> list[RollingAveragePoint]:
        """Trailing average of monthly net spend.

        Args:
            user_id: Caller's user ID
            category: Optional category label to restrict to
            window: Window size in months; the configured default when omitted
            card_id: Optional card to restrict to

        Returns:
            One point per month of the raw series; empty when nothing qualifies

        Raises:
            UnauthorizedError: If no user ID was supplied
            InvalidFilterError: If the window is smaller than one month
        """
        user_id = self._require_user_id(user_id)
        window = self.config.rolling_window if window is None else window
        if window < 1:
            raise InvalidFilterError("window", f"must be at least 1, got {window}")

        transaction_filter = build_transaction_filter(card_id=card_id, category=category)
        transactions = self._transactions(user_id, transaction_filter)
        return self.build_rolling_average(transactions, window)

    def year_over_year(
        self,
        user_id: Optional[int],
        category: Optional[str] = None,
        year: Optional[int] = None,
    ) -> list[YearOverYearTrend]:
        """Per-category month grids aligned across years.

        Args:
            user_id: Caller's user ID
            category: Optional category label to restrict to
            year: Optional year to compare against the year before it

        Returns:
            YearOverYearTrend list; categories without rows are left out

        Raises:
            UnauthorizedError: If no user ID was supplied
            InvalidFilterError: If the year is outside the calendar range
        """
        user_id = self._require_user_id(user_id)

        year_range = None
        start_date = end_date = None
        if year is not None:
            if not MINYEAR < year <= MAXYEAR:
                raise InvalidFilterError("year", f"{year} is out of range")
            year_range = range(year - 1, year + 1)
            start_date = date(year - 1, 1, 1)
            end_date = date(year, 12, 31)

        transaction_filter = build_transaction_filter(
            category=category, start_date=start_date, end_date=end_date
        )
        transactions = self._transactions(user_id, transaction_filter)
        return self.build_year_over_year(transactions, year_range)

    def dashboard_summary(
        self,
        user_id: Optional[int],
        as_of: Union[date, str, None] = None,
        top_n: Optional[int] = None,
    ) -> DashboardSummary:
        """Current period against prior period, with top categories and counts.

        Args:
            user_id: Caller's user ID
            as_of: Any date in the current period; the latest month with
                transactions when omitted
            top_n: Number of top categories; the configured default when omitted

        Returns:
            DashboardSummary

        Raises:
            UnauthorizedError: If no user ID was supplied
            InvalidFilterError: If as_of is unparseable or in the first or last
                calendar year, or top_n is below one
        """
        user_id = self._require_user_id(user_id)
        as_of_date = self._anchor_date(as_of)
        top_n = self.config.top_categories if top_n is None else top_n
        if top_n < 1:
            raise InvalidFilterError("top_n", f"must be at least 1, got {top_n}")

        results = self._fan_out(
            {
                "transactions": lambda: self._transactions(user_id),
                "card_count": lambda: self.db.count_cards(user_id),
                "statement_count": lambda: self.db.count_statements(user_id),
            }
        )
        return self.build_dashboard_summary(
            results["transactions"],
            card_count=results["card_count"],
            statement_count=results["statement_count"],
            as_of=as_of_date,
            top_n=top_n,
        )

    def dashboard_analytics(
        self, user_id: Optional[int], transaction_filter: Optional[TransactionFilter] = None
    ) -> DashboardAnalytics:
        """Category trends and dashboard summary, queried concurrently."""
        user_id = self._require_user_id(user_id)
        results = self._fan_out(
            {
                "category_trends": lambda: self.category_trends(user_id, transaction_filter),
                "summary": lambda: self.dashboard_summary(user_id),
            }
        )
        return DashboardAnalytics(
            category_trends=tuple(results["category_trends"]),
            summary=results["summary"],
        )

    def list_categories(self, user_id: Optional[int]) -> list[str]:
        """Distinct category labels the user has assigned, sorted."""
        user_id = self._require_user_id(user_id)
        return self.db.list_categories(user_id)

    def quarter_over_quarter(
        self,
        user_id: Optional[int],
        category: Optional[str] = None,
        as_of: Union[date, str, None] = None,
    ) -> QuarterComparison:
        """Weekly net spend for the current quarter and the one before it.

        The current quarter contains as_of, or the latest transaction date
        when as_of is omitted.
        """
        user_id = self._require_user_id(user_id)
        as_of_date = self._anchor_date(as_of)
        transaction_filter = build_transaction_filter(category=category)
        transactions = self._transactions(user_id, transaction_filter)
        return self.build_quarter_comparison(transactions, category, as_of_date)

    def transaction_stats(
        self, user_id: Optional[int], transaction_filter: Optional[TransactionFilter] = None
    ) -> TransactionStats:
        """Debit, credit and net totals with the top categories."""
        user_id = self._require_user_id(user_id)
        transactions = self._transactions(user_id, transaction_filter)
        return self.build_transaction_stats(transactions)

    # Pure transforms

    def build_category_trends(self, transactions: Sequence[Transaction]) -> list[CategoryTrend]:
        """Build gap-filled category series over a shared month grid."""
        grid = month_grid([txn.date for txn in transactions])
        if not grid:
            return []

        totals: dict[str, dict[str, Decimal]] = defaultdict(lambda: defaultdict(lambda: ZERO))
        for txn in transactions:
            totals[txn.category_label][month_key(txn.date)] += txn.net_amount

        trends = []
        for category, by_period in totals.items():
            periods = tuple(
                PeriodTotal(period_key=key, total=to_cents(by_period.get(key, ZERO)))
                for key in grid
            )
            direction, magnitude, trend_percent = self.compare_latest_periods(periods)
            trends.append(
                CategoryTrend(
                    category=category,
                    periods=periods,
                    trend_direction=direction,
                    trend_magnitude=magnitude,
                    trend_percent=trend_percent,
                    total=to_cents(sum((period.total for period in periods), ZERO)),
                )
            )

        return sorted(trends, key=lambda trend: (-trend.total, trend.category))

    def compare_latest_periods(
        self, periods: Sequence[PeriodTotal]
    ) -> tuple[TrendDirection, Decimal, Optional[float]]:
        """Direction, delta and percent change of the last period against the one before."""
        if len(periods) < 2:
            return TrendDirection.FLAT, ZERO, None

        latest = periods[-1].total
        prior = periods[-2].total
        delta = latest - prior
        if delta > 0:
            direction = TrendDirection.UP
        elif delta < 0:
            direction = TrendDirection.DOWN
        else:
            direction = TrendDirection.FLAT
        return direction, to_cents(delta), percent_change(latest, prior)

    def build_rolling_average(
        self, transactions: Sequence[Transaction], window: int
    ) -> list[RollingAveragePoint]:
        """Shrinking-window trailing average over the contiguous month grid.

        Early periods average whatever months exist so far, so the output is
        exactly as long as the raw series.
        """
        grid = month_grid([txn.date for txn in transactions])
        raw: dict[str, Decimal] = defaultdict(lambda: ZERO)
        for txn in transactions:
            raw[month_key(txn.date)] += txn.net_amount
        raw_totals = [to_cents(raw.get(key, ZERO)) for key in grid]

        points = []
        for index, key in enumerate(grid):
            window_totals = raw_totals[max(0, index - window + 1) : index + 1]
            average = sum(window_totals, ZERO) / len(window_totals)
            points.append(
                RollingAveragePoint(
                    period_key=key,
                    raw_total=raw_totals[index],
                    rolling_average=to_cents(average),
                    window_size=len(window_totals),
                )
            )
        return points

    def build_year_over_year(
        self, transactions: Sequence[Transaction], year_range: Optional[range] = None
    ) -> list[YearOverYearTrend]:
        """Zero-filled twelve-month grids per category and year.

        Every included category carries the same years, either year_range or
        the span of years observed in the rows.
        """
        if not transactions:
            return []
        if year_range is None:
            years = [txn.date.year for txn in transactions]
            year_range = range(min(years), max(years) + 1)

        grid: dict[str, dict[int, list[Decimal]]] = defaultdict(
            lambda: defaultdict(lambda: [ZERO] * 12)
        )
        for txn in transactions:
            grid[txn.category_label][txn.date.year][txn.date.month - 1] += txn.net_amount

        trends = []
        for category, by_year in grid.items():
            series = []
            for year in year_range:
                months = tuple(to_cents(amount) for amount in by_year.get(year, [ZERO] * 12))
                series.append(
                    YearSeries(year=year, months=months, total=to_cents(sum(months, ZERO)))
                )
            trends.append(YearOverYearTrend(category=category, years=tuple(series)))

        return sorted(trends, key=lambda trend: (-trend.total, trend.category))

    def build_dashboard_summary(
        self,
        transactions: Sequence[Transaction],
        card_count: int,
        statement_count: int,
        as_of: Optional[date] = None,
        top_n: Optional[int] = None,
    ) -> DashboardSummary:
        """Summarize the current period against the calendar month before it."""
        top_n = self.config.top_categories if top_n is None else top_n
        if not transactions:
            return DashboardSummary(
                current_period=None,
                prior_period=None,
                current_total=ZERO,
                prior_total=ZERO,
                percent_change=None,
                top_categories=(),
                transaction_count=0,
                current_period_transaction_count=0,
                card_count=card_count,
                statement_count=statement_count,
            )

        anchor = as_of if as_of is not None else max(txn.date for txn in transactions)
        current_key = month_key(anchor)
        prior_key = previous_month_key(current_key)

        current_rows = [txn for txn in transactions if month_key(txn.date) == current_key]
        prior_rows = [txn for txn in transactions if month_key(txn.date) == prior_key]
        current_total = net_total(current_rows)
        prior_total = net_total(prior_rows)

        return DashboardSummary(
            current_period=current_key,
            prior_period=prior_key,
            current_total=current_total,
            prior_total=prior_total,
            percent_change=percent_change(current_total, prior_total),
            top_categories=self.top_categories(current_rows, top_n),
            transaction_count=len(transactions),
            current_period_transaction_count=len(current_rows),
            card_count=card_count,
            statement_count=statement_count,
        )

    def top_categories(
        self, transactions: Sequence[Transaction], limit: int
    ) -> tuple[CategorySpend, ...]:
        """Categories ranked by net spend, ties broken by name."""
        totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
        counts: dict[str, int] = defaultdict(int)
        for txn in transactions:
            totals[txn.category_label] += txn.net_amount
            counts[txn.category_label] += 1

        ranked = sorted(totals, key=lambda category: (-totals[category], category))
        return tuple(
            CategorySpend(category=category, total=to_cents(totals[category]), count=counts[category])
            for category in ranked[:limit]
        )

    def build_quarter_comparison(
        self,
        transactions: Sequence[Transaction],
        category: Optional[str] = None,
        as_of: Optional[date] = None,
    ) -> QuarterComparison:
        """Compare weekly series of the anchor quarter and the preceding one."""
        if as_of is None:
            if not transactions:
                return QuarterComparison(
                    category=category, current=None, previous=None, percent_change=None
                )
            as_of = max(txn.date for txn in transactions)

        current_start, current_end = quarter_bounds(as_of)
        previous_start, previous_end = quarter_bounds(current_start - timedelta(days=1))
        current = self.build_quarter_series(transactions, current_start, current_end)
        previous = self.build_quarter_series(transactions, previous_start, previous_end)

        return QuarterComparison(
            category=category,
            current=current,
            previous=previous,
            percent_change=percent_change(current.total, previous.total),
        )

    def build_quarter_series(
        self, transactions: Sequence[Transaction], start: date, end: date
    ) -> QuarterSeries:
        """Monday-keyed weekly totals for transactions dated within [start, end]."""
        weekly: dict[date, Decimal] = defaultdict(lambda: ZERO)
        in_range = [txn for txn in transactions if start <= txn.date <= end]
        for txn in in_range:
            weekly[week_start(txn.date)] += txn.net_amount

        weeks = tuple(
            PeriodTotal(period_key=monday.isoformat(), total=to_cents(weekly.get(monday, ZERO)))
            for monday in week_starts(start, end)
        )
        return QuarterSeries(
            label=quarter_label(start),
            start_date=start,
            end_date=end,
            weeks=weeks,
            total=net_total(in_range),
        )

    def build_transaction_stats(self, transactions: Sequence[Transaction]) -> TransactionStats:
        """Totals for a set of transactions; net is credits minus debits."""
        total_debit = to_cents(
            sum((abs(txn.amount) for txn in transactions if txn.type == TransactionType.DEBIT), ZERO)
        )
        total_credit = to_cents(
            sum((abs(txn.amount) for txn in transactions if txn.type == TransactionType.CREDIT), ZERO)
        )
        average = ZERO
        if transactions:
            average = to_cents(sum((txn.amount for txn in transactions), ZERO) / len(transactions))

        return TransactionStats(
            total_transactions=len(transactions),
            total_debit=total_debit,
            total_credit=total_credit,
            net_amount=total_credit - total_debit,
            average_amount=average,
            top_categories=self.top_categories(transactions, STATS_TOP_CATEGORIES),
        )

    # Helpers

    def _require_user_id(self, user_id: Optional[int]) -> int:
        if user_id is None:
            raise UnauthorizedError(missing_identity())
        return user_id

    def _anchor_date(self, as_of: Union[date, str, None]) -> Optional[date]:
        """Coerce an as_of value, leaving room for the preceding period."""
        as_of_date = coerce_date("as_of", as_of)
        if as_of_date is not None and not MINYEAR < as_of_date.year < MAXYEAR:
            raise InvalidFilterError("as_of", f"{as_of_date.isoformat()} is out of range")
        return as_of_date

    def _transactions(
        self, user_id: int, transaction_filter: Optional[TransactionFilter] = None
    ) -> list[Transaction]:
        transactions = self.db.list_transactions(user_id, transaction_filter)
        logger.debug(
            "Loaded %d transactions for user %s (filter=%s)",
            len(transactions),
            user_id,
            transaction_filter,
        )
        return transactions

    def _fan_out(self, calls: dict[str, Callable[[], Any]]) -> dict[str, Any]:
        """Run independent reads concurrently and join their results.

        The first failure cancels whatever has not started yet and is re-raised.
        """
        results: dict[str, Any] = {}
        workers = max(1, min(self.config.max_workers, len(calls)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            future_to_name = {executor.submit(call): name for name, call in calls.items()}
            try:
                for future in as_completed(future_to_name):
                    results[future_to_name[future]] = future.result()
            except Exception:
                for future in future_to_name:
                    future.cancel()
                raise
        return results
