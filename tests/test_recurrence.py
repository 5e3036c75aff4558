from networth.domain import Transaction
from networth.recurrence import active_in_month, by_category, is_active_in_month, month_of, year_of


def tx(date, end_date="", recurring=True, frequency="Monthly", category=None):
    return Transaction(
        id="t",
        amount=10.0,
        description="x",
        date=date,
        is_recurring=recurring,
        frequency=frequency,
        end_date=end_date,
        category=category,
    )


def test_month_of():
    assert month_of("2024-03-15") == (2024, 3)
    assert month_of("2024-3-15") is None
    assert month_of("") is None
    assert month_of(None) is None
    assert month_of("2024-13-01") is None
    assert year_of("1999-12-31") == 1999


def test_recurring_with_end_date():
    t = tx("2024-03-15", "2024-05-10")
    assert is_active_in_month(t, 2024, 3)
    assert is_active_in_month(t, 2024, 4)
    assert is_active_in_month(t, 2024, 5)
    assert not is_active_in_month(t, 2024, 2)
    assert not is_active_in_month(t, 2024, 6)


def test_recurring_open_ended_crosses_years():
    t = tx("2023-11-30")
    assert not is_active_in_month(t, 2023, 10)
    assert is_active_in_month(t, 2023, 11)
    assert is_active_in_month(t, 2024, 1)
    assert is_active_in_month(t, 2030, 7)


def test_year_comparison_comes_first():
    t = tx("2023-06-01", "2024-02-01")
    assert is_active_in_month(t, 2023, 12)
    assert is_active_in_month(t, 2024, 1)
    assert not is_active_in_month(t, 2024, 3)
    assert not is_active_in_month(t, 2022, 12)


def test_one_off_matches_only_its_month():
    t = tx("2024-03-15", recurring=False, frequency="")
    assert is_active_in_month(t, 2024, 3)
    assert not is_active_in_month(t, 2024, 4)
    assert not is_active_in_month(t, 2023, 3)


def test_recurring_without_monthly_frequency_is_one_off():
    t = tx("2024-03-15", frequency="Weekly")
    assert is_active_in_month(t, 2024, 3)
    assert not is_active_in_month(t, 2024, 4)


def test_inverted_range_is_never_active():
    t = tx("2024-05-01", "2024-03-01")
    assert not any(is_active_in_month(t, 2024, m) for m in range(1, 13))


def test_malformed_dates_never_crash():
    assert not is_active_in_month(tx("garbage"), 2024, 1)
    assert not is_active_in_month(tx(""), 2024, 1)
    assert not is_active_in_month(tx("2024-01-01", "not-a-date"), 2024, 1)


def test_filter_factories():
    trans = [
        tx("2024-01-01", category="Personal"),
        tx("2024-05-01", category="Shared"),
        tx("2024-02-10", recurring=False, frequency="", category="Personal"),
    ]
    assert len(list(filter(active_in_month(2024, 2), trans))) == 2
    assert len(list(filter(by_category("Personal"), trans))) == 2
