"""Analytics configuration read from the environment."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from spendtrack.domain.errors import InvalidFilterError

DEFAULT_ROLLING_WINDOW = 3
DEFAULT_TOP_CATEGORIES = 5
DEFAULT_MAX_WORKERS = 2


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise InvalidFilterError(name, f"'{raw}' is not an integer") from e
    if value < 1:
        raise InvalidFilterError(name, f"must be at least 1, got {value}")
    return value


@dataclass(frozen=True)
class AnalyticsConfig:
    """Tunable defaults for the analytics service.

    Attributes:
        rolling_window: Trailing window size for rolling averages
        top_categories: Number of categories in the dashboard summary
        max_workers: Thread count for fan-out of independent queries
    """

    rolling_window: int = DEFAULT_ROLLING_WINDOW
    top_categories: int = DEFAULT_TOP_CATEGORIES
    max_workers: int = DEFAULT_MAX_WORKERS

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "AnalyticsConfig":
        """Build configuration from SPENDTRACK_* environment variables.

        Raises:
            InvalidFilterError: If a variable is set to a non-positive or non-integer value
        """
        if env is None:
            env = os.environ
        return cls(
            rolling_window=_positive_int(env, "SPENDTRACK_ROLLING_WINDOW", DEFAULT_ROLLING_WINDOW),
            top_categories=_positive_int(env, "SPENDTRACK_TOP_CATEGORIES", DEFAULT_TOP_CATEGORIES),
            max_workers=_positive_int(env, "SPENDTRACK_MAX_WORKERS", DEFAULT_MAX_WORKERS),
        )
