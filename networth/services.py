import logging
from typing import Any, Callable, Dict, Iterable, Sequence

from networth.aggregation import monthly_overview
from networth.domain import Transaction
from networth.recurrence import is_recurring_monthly, month_of
from networth.transforms import to_number

logger = logging.getLogger(__name__)

Validator = Callable[[int, int, Sequence[Transaction], Sequence[Transaction]], Sequence[str]]
Calculator = Callable[..., Dict[str, Any]]


class MonthlyReportService:
    """Facade for the monthly income/expense report using injected validators and calculators.

    validators: functions taking (year, month, income, expenses) -> Sequence[str]
    calculators: functions taking (year, month, income, expenses, acc) -> dict (partial results)
    """

    def __init__(self, validators: Sequence[Validator], calculators: Sequence[Calculator]):
        self.validators = validators
        self.calculators = calculators

    def monthly_report(
        self, year: int, month: int, income: Iterable[Transaction], expenses: Iterable[Transaction]
    ) -> Dict[str, Any]:
        """Run validators and calculators and return an aggregated report with intermediate steps."""
        income, expenses = tuple(income), tuple(expenses)
        report = {
            "period": f"{year:04d}-{month:02d}",
            "validation": [],
            "steps": [],
            "result": {},
        }

        # a broken validator is reported, never fatal
        for v in self.validators:
            name = getattr(v, "__name__", str(v))
            try:
                msgs = list(v(year, month, income, expenses))
            except Exception as e:
                logger.warning("Validator %s failed: %s", name, e)
                msgs = [f"validator_error: {e}"]
            report["validation"].append({"validator": name, "messages": msgs})

        acc: Dict[str, Any] = {}
        for calc in self.calculators:
            out = calc(year, month, income, expenses, acc)
            report["steps"].append({"calculator": getattr(calc, "__name__", str(calc)), "output": out})
            if isinstance(out, dict):
                acc.update(out)

        report["result"] = acc
        return report


def flag_inverted_ranges(year, month, income, expenses) -> list[str]:
    msgs = []
    for t in (*income, *expenses):
        start, end = month_of(t.date), month_of(t.end_date)
        if is_recurring_monthly(t) and start and end and end < start:
            msgs.append(f"{t.id} ({t.description}): end date {t.end_date} precedes start {t.date}, never active")
    return msgs


def flag_non_numeric_amounts(year, month, income, expenses) -> list[str]:
    return [
        f"{t.id} ({t.description}): amount {t.amount!r} is not a number, counted as 0"
        for t in (*income, *expenses)
        if to_number(t.amount) is None
    ]


def calc_overview(year, month, income, expenses, acc=None) -> Dict[str, Any]:
    overview = monthly_overview(income, expenses, year, month)
    return {
        "income": overview.income,
        "expenses": overview.expenses,
        "total_income": overview.total_income,
        "total_expenses": overview.total_expenses,
        "balance": overview.balance,
        "overview": overview,
    }


def calc_breakdowns(year, month, income, expenses, acc=None) -> Dict[str, Any]:
    overview = (acc or {}).get("overview") or monthly_overview(income, expenses, year, month)
    return {
        "by_category": dict(overview.by_category),
        "by_type": dict(overview.by_type),
    }


def calc_savings_rate(year, month, income, expenses, acc=None) -> Dict[str, Any]:
    acc = acc or {}
    total_income = acc.get("total_income", 0.0)
    if not total_income:
        return {"savings_rate": None}
    return {"savings_rate": acc.get("balance", 0.0) / total_income}


def default_report_service() -> MonthlyReportService:
    return MonthlyReportService(
        validators=[flag_inverted_ranges, flag_non_numeric_amounts],
        calculators=[calc_overview, calc_breakdowns, calc_savings_rate],
    )
