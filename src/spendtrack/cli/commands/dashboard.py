"""Dashboard analytics commands.

Each command prints the JSON payload the dashboard widgets consume.
"""

import click
from spendtrack.cli.error_handling import emit_json
from spendtrack.config import AnalyticsConfig
from spendtrack.domain.analytics import AnalyticsService
from spendtrack.domain.filters import build_transaction_filter


def _service(ctx) -> AnalyticsService:
    return AnalyticsService(ctx.obj["db"], AnalyticsConfig.from_env())


@click.group()
def dashboard_group():
    """Show dashboard analytics as JSON."""
    pass


@dashboard_group.command("analytics")
@click.option("--card", "card_id", type=int, help="Restrict trends to one card")
@click.option("--category", help="Restrict trends to one category")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.pass_context
def analytics(ctx, card_id, category, start_date, end_date):
    """Category trends together with the dashboard summary."""

    def produce(user):
        transaction_filter = build_transaction_filter(
            card_id=card_id, category=category, start_date=start_date, end_date=end_date
        )
        return _service(ctx).dashboard_analytics(user.id, transaction_filter)

    emit_json(ctx, None, produce, "Failed to fetch dashboard analytics")


@dashboard_group.command("categories")
@click.pass_context
def categories(ctx):
    """Distinct categories used by the current user."""
    emit_json(
        ctx,
        "categories",
        lambda user: _service(ctx).list_categories(user.id),
        "Failed to fetch categories",
    )


@dashboard_group.command("rolling-average")
@click.option("--category", help="Restrict to one category")
@click.option("--card", "card_id", type=int, help="Restrict to one card")
@click.option("--window", type=int, help="Window size in months (default: SPENDTRACK_ROLLING_WINDOW or 3)")
@click.pass_context
def rolling_average(ctx, category, card_id, window):
    """Monthly totals with a trailing rolling average."""
    emit_json(
        ctx,
        "data",
        lambda user: _service(ctx).rolling_average(
            user.id, category=category, window=window, card_id=card_id
        ),
        "Failed to fetch rolling average data",
    )


@dashboard_group.command("year-over-year")
@click.option("--category", help="Restrict to one category")
@click.option("--year", type=int, help="Compare this year with the one before it")
@click.pass_context
def year_over_year(ctx, category, year):
    """Per-category month grids aligned across years."""
    emit_json(
        ctx,
        "category_trends",
        lambda user: _service(ctx).year_over_year(user.id, category=category, year=year),
        "Failed to fetch year-over-year analytics",
    )


@dashboard_group.command("summary")
@click.option("--as-of", help="Any date in the current period (default: latest month with data)")
@click.option("--top", "top_n", type=int, help="Number of top categories")
@click.pass_context
def summary(ctx, as_of, top_n):
    """Current period against the prior period."""
    emit_json(
        ctx,
        "summary",
        lambda user: _service(ctx).dashboard_summary(user.id, as_of=as_of, top_n=top_n),
        "Failed to fetch dashboard summary",
    )


@dashboard_group.command("quarter-over-quarter")
@click.option("--category", help="Restrict to one category")
@click.option("--as-of", help="Any date in the current quarter (default: latest transaction)")
@click.pass_context
def quarter_over_quarter(ctx, category, as_of):
    """Weekly spend for the current quarter and the previous one."""
    emit_json(
        ctx,
        None,
        lambda user: _service(ctx).quarter_over_quarter(user.id, category=category, as_of=as_of),
        "Failed to fetch quarter-over-quarter analytics",
    )


@dashboard_group.command("stats")
@click.option("--card", "card_id", type=int, help="Restrict to one card")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.pass_context
def stats(ctx, card_id, start_date, end_date):
    """Debit, credit and net totals with top categories."""

    def produce(user):
        transaction_filter = build_transaction_filter(
            card_id=card_id, start_date=start_date, end_date=end_date
        )
        return _service(ctx).transaction_stats(user.id, transaction_filter)

    emit_json(ctx, None, produce, "Failed to fetch transaction stats")


def register_commands(cli):
    """Register dashboard commands with main CLI."""
    cli.add_command(dashboard_group, name="dashboard")
