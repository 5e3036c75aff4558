from dataclasses import dataclass
from datetime import date as date_cls
from typing import Iterable, Optional

from networth.domain import Asset, Transaction
from networth.lazy import iter_transactions, recent_transactions
from networth.recurrence import active_in_month, year_of
from networth.transforms import to_number, total_net_worth

Breakdown = tuple[tuple[str, float], ...]


@dataclass(frozen=True)
class MonthlyOverview:
    year: int
    month: int
    income: tuple[Transaction, ...]
    expenses: tuple[Transaction, ...]
    total_income: float
    total_expenses: float
    balance: float
    by_category: Breakdown
    by_type: Breakdown


@dataclass(frozen=True)
class DashboardSummary:
    total_net_worth: float
    month: MonthlyOverview
    recent: tuple[Transaction, ...]


def amount_of(t: Transaction) -> float:
    # non-numeric amounts count as zero
    return to_number(t.amount) or 0.0


def total_amount(records: Iterable[Transaction]) -> float:
    return sum(map(amount_of, records), 0.0)


def sort_by_date_desc(records: Iterable[Transaction]) -> tuple[Transaction, ...]:
    return tuple(sorted(records, key=lambda t: t.date or "", reverse=True))


def _breakdown(records: Iterable[Transaction], key) -> Breakdown:
    totals: dict[str, float] = {}
    for t in records:
        k = key(t)
        totals[k] = totals.get(k, 0.0) + amount_of(t)
    # stable sort: ties keep first-occurrence order
    return tuple(sorted(totals.items(), key=lambda item: item[1], reverse=True))


def expenses_by_category(expenses: Iterable[Transaction]) -> Breakdown:
    return _breakdown(expenses, lambda t: t.category or "")


def expenses_by_type(expenses: Iterable[Transaction]) -> Breakdown:
    return _breakdown(expenses, lambda t: t.expense_type)


def monthly_overview(
    income: Iterable[Transaction], expenses: Iterable[Transaction], year: int, month: int
) -> MonthlyOverview:
    pred = active_in_month(year, month)
    active_income = sort_by_date_desc(iter_transactions(income, pred))
    active_expenses = sort_by_date_desc(iter_transactions(expenses, pred))

    total_income = total_amount(active_income)
    total_expenses = total_amount(active_expenses)

    return MonthlyOverview(
        year=year,
        month=month,
        income=active_income,
        expenses=active_expenses,
        total_income=total_income,
        total_expenses=total_expenses,
        balance=total_income - total_expenses,
        by_category=expenses_by_category(active_expenses),
        by_type=expenses_by_type(active_expenses),
    )


def available_years(
    income: Iterable[Transaction], expenses: Iterable[Transaction], today: Optional[date_cls] = None
) -> tuple[int, ...]:
    current = (today or date_cls.today()).year
    years = {current - 1, current, current + 1}
    for t in (*income, *expenses):
        for d in (t.date, t.end_date):
            y = year_of(d)
            if y is not None:
                years.add(y)
    return tuple(sorted(years, reverse=True))


def dashboard_summary(
    assets: Iterable[Asset],
    income: Iterable[Transaction],
    expenses: Iterable[Transaction],
    today: Optional[date_cls] = None,
    recent: int = 5,
) -> DashboardSummary:
    today = today or date_cls.today()
    income, expenses = tuple(income), tuple(expenses)
    return DashboardSummary(
        total_net_worth=total_net_worth(assets),
        month=monthly_overview(income, expenses, today.year, today.month),
        recent=tuple(recent_transactions(income, expenses, recent)),
    )
