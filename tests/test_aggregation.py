from datetime import date

from networth.aggregation import (
    available_years,
    dashboard_summary,
    expenses_by_category,
    monthly_overview,
    sort_by_date_desc,
    total_amount,
)
from networth.domain import Transaction
from networth.transforms import create_asset, create_transaction


def income(id, amount, date, recurring=False, end_date=""):
    return create_transaction(id, amount, id, date, recurring, "Monthly" if recurring else "", end_date, timestamp="t0")


def expense(id, amount, date, category, recurring=False, end_date=""):
    return create_transaction(
        id, amount, id, date, recurring, "Monthly" if recurring else "", end_date, category=category, timestamp="t0"
    )


def make_sample():
    inc = (
        income("salary", 3000, "2024-01-25", recurring=True),
        income("bonus", 500, "2024-03-10"),
        income("old-job", 2000, "2023-01-25", recurring=True, end_date="2023-12-31"),
    )
    exp = (
        expense("rent", 1000, "2024-01-01", "Shared", recurring=True),
        expense("gym", 40.5, "2024-02-03", "Personal", recurring=True, end_date="2024-06-30"),
        expense("trip", 300, "2024-03-20", "Personal"),
        expense("groceries", 150.25, "2024-03-05", "Shared"),
        expense("april-only", 99, "2024-04-01", "Personal"),
    )
    return inc, exp


def test_monthly_overview_filters_and_totals():
    inc, exp = make_sample()
    overview = monthly_overview(inc, exp, 2024, 3)

    assert [t.id for t in overview.income] == ["bonus", "salary"]
    assert [t.id for t in overview.expenses] == ["trip", "groceries", "gym", "rent"]
    assert overview.total_income == 3500.0
    assert overview.total_expenses == 1490.75
    assert overview.balance == 2009.25


def test_breakdowns_sorted_by_amount():
    inc, exp = make_sample()
    overview = monthly_overview(inc, exp, 2024, 3)

    assert overview.by_category == (("Shared", 1150.25), ("Personal", 340.5))
    assert overview.by_type == (("Recurring", 1040.5), ("One-Off", 450.25))


def test_breakdowns_sum_to_total():
    inc, exp = make_sample()
    for month in range(1, 13):
        overview = monthly_overview(inc, exp, 2024, month)
        assert sum(v for _, v in overview.by_category) == overview.total_expenses
        assert sum(v for _, v in overview.by_type) == overview.total_expenses


def test_breakdown_ties_keep_first_occurrence():
    exp = (
        expense("a", 10, "2024-01-01", "Shared"),
        expense("b", 10, "2024-01-02", "Personal"),
    )
    assert expenses_by_category(exp) == (("Shared", 10.0), ("Personal", 10.0))


def test_empty_month():
    inc, exp = make_sample()
    overview = monthly_overview(inc, exp, 2022, 6)
    assert overview.income == ()
    assert overview.expenses == ()
    assert overview.balance == 0.0
    assert overview.by_category == ()


def test_non_numeric_amount_counts_as_zero():
    bad = Transaction(id="bad", amount=None, description="?", date="2024-03-01", category="Personal")
    good = expense("ok", 20, "2024-03-02", "Personal")
    overview = monthly_overview((), (bad, good), 2024, 3)
    assert len(overview.expenses) == 2
    assert overview.total_expenses == 20.0
    assert overview.by_category == (("Personal", 20.0),)


def test_inputs_are_not_mutated():
    inc, exp = make_sample()
    before = (inc, exp)
    monthly_overview(inc, exp, 2024, 3)
    assert (inc, exp) == before


def test_sort_by_date_desc_is_stable():
    a = expense("a", 1, "2024-01-01", "Shared")
    b = expense("b", 1, "2024-01-01", "Shared")
    c = expense("c", 1, "2024-02-01", "Shared")
    assert [t.id for t in sort_by_date_desc((a, b, c))] == ["c", "a", "b"]


def test_available_years():
    inc, exp = make_sample()
    extra = expense("loan", 10, "2019-05-01", "Shared", recurring=True, end_date="2030-01-01")
    years = available_years(inc, exp + (extra,), today=date(2025, 6, 1))
    assert years == (2030, 2026, 2025, 2024, 2023, 2019)


def test_available_years_without_records():
    assert available_years((), (), today=date(2025, 1, 1)) == (2026, 2025, 2024)


def test_dashboard_summary():
    inc, exp = make_sample()
    assets = (
        create_asset("a1", "Cash", "Cash", 1000, "2024-01-01"),
        create_asset("a2", "Fund", "Investment", 2500.5, "2024-01-01"),
    )
    summary = dashboard_summary(assets, inc, exp, today=date(2024, 3, 15))

    assert summary.total_net_worth == 3500.5
    assert summary.month.total_income == 3500.0
    assert summary.month.total_expenses == total_amount(summary.month.expenses)
    assert [t.id for t in summary.recent] == ["april-only", "trip", "bonus", "groceries", "gym"]
