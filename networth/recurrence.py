from typing import Callable, Optional

from networth.domain import MONTHLY, Transaction

YearMonth = tuple[int, int]


def month_of(date: str) -> Optional[YearMonth]:
    """Project an ISO date ("2024-03-15") onto its (year, month) pair."""
    if not isinstance(date, str) or len(date) < 7 or date[4] != "-":
        return None
    try:
        year, month = int(date[:4]), int(date[5:7])
    except ValueError:
        return None
    if not 1 <= month <= 12:
        return None
    return year, month


def year_of(date: str) -> Optional[int]:
    ym = month_of(date)
    return ym[0] if ym else None


def is_recurring_monthly(t: Transaction) -> bool:
    return bool(t.is_recurring) and t.frequency == MONTHLY


def is_active_in_month(t: Transaction, year: int, month: int) -> bool:
    target = (year, month)
    start = month_of(t.date)
    if start is None:
        return False

    if not is_recurring_monthly(t):
        return start == target

    if not t.end_date:
        return start <= target

    # a malformed end date never matches, an inverted range matches nothing
    end = month_of(t.end_date)
    if end is None:
        return False
    return start <= target <= end


def active_in_month(year: int, month: int) -> Callable[[Transaction], bool]:
    def _filter(t: Transaction) -> bool:
        return is_active_in_month(t, year, month)

    return _filter


def by_category(category: str) -> Callable[[Transaction], bool]:
    def _filter(t: Transaction) -> bool:
        return t.category == category

    return _filter
