"""Transaction filter construction and validation."""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from spendtrack.domain.entities import UNCATEGORIZED, TransactionType
from spendtrack.domain.errors import InvalidFilterError
from spendtrack.utils.date_parser import parse_date

DateInput = Union[date, str, None]


@dataclass(frozen=True)
class TransactionFilter:
    """Optional narrowing applied on top of the owner predicate.

    The owner is never part of the filter; stores always receive the user id
    separately so no filter value can widen a query beyond one user.
    """

    card_id: Optional[int] = None
    category: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    type: Optional[TransactionType] = None


def coerce_date(field: str, value: DateInput) -> Optional[date]:
    if value is None or isinstance(value, date):
        return value
    if not value.strip():
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        raise InvalidFilterError(field, str(e)) from e


def build_transaction_filter(
    card_id: Optional[int] = None,
    category: Optional[str] = None,
    start_date: DateInput = None,
    end_date: DateInput = None,
    type: Union[TransactionType, str, None] = None,
) -> TransactionFilter:
    """Build a validated transaction filter from caller input.

    Args:
        card_id: Optional card ID
        category: Optional category label. Labels match exactly, except
            "Uncategorized" in any case, which matches rows without one
        start_date: Optional inclusive start, as a date, a YYYY-MM-DD string or a relative phrase
        end_date: Optional inclusive end, as a date, a YYYY-MM-DD string or a relative phrase
        type: Optional CREDIT/DEBIT restriction

    Returns:
        TransactionFilter

    Raises:
        InvalidFilterError: If any field is malformed, naming the field
    """
    if card_id is not None and (isinstance(card_id, bool) or card_id < 1):
        raise InvalidFilterError("card_id", f"'{card_id}' is not a valid card ID")

    if category is not None:
        category = category.strip() or None
    if category is not None and category.casefold() == UNCATEGORIZED.casefold():
        category = UNCATEGORIZED

    start = coerce_date("start_date", start_date)
    end = coerce_date("end_date", end_date)
    if start is not None and end is not None and start > end:
        raise InvalidFilterError(
            "start_date", f"{start.isoformat()} is after end date {end.isoformat()}"
        )

    txn_type = None
    if type is not None:
        try:
            txn_type = TransactionType(type.upper() if isinstance(type, str) else type)
        except ValueError as e:
            raise InvalidFilterError("type", f"'{type}' is not CREDIT or DEBIT") from e

    return TransactionFilter(
        card_id=card_id,
        category=category,
        start_date=start,
        end_date=end,
        type=txn_type,
    )
