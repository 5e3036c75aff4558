from itertools import islice

from networth.domain import Transaction
from networth.lazy import iter_transactions, recent_transactions
from networth.transforms import create_transaction


def make_sample():
    income = (
        create_transaction("i1", 3000, "Salary", "2025-01-25", True, "Monthly"),
        create_transaction("i2", 200, "Refund", "2025-03-02"),
    )
    expenses = (
        create_transaction("e1", 1000, "Rent", "2025-01-01", True, "Monthly", category="Shared"),
        create_transaction("e2", 80, "Dinner", "2025-03-10", category="Personal"),
        create_transaction("e3", 30, "Taxi", "2025-02-11", category="Personal"),
    )
    return income, expenses


def test_iter_transactions_filters():
    _, expenses = make_sample()
    result = list(iter_transactions(expenses, lambda t: t.category == "Personal"))
    assert [t.id for t in result] == ["e2", "e3"]


def test_iter_transactions_is_lazy_stop_early():
    _, expenses = make_sample()
    calls = {"n": 0}

    def pred(t: Transaction) -> bool:
        calls["n"] += 1
        return True

    first = list(islice(iter_transactions(expenses, pred), 1))
    assert len(first) == 1
    assert calls["n"] < len(expenses)


def test_recent_transactions_merges_both_sides():
    income, expenses = make_sample()
    result = [t.id for t in recent_transactions(income, expenses, 3)]
    assert result == ["e2", "i2", "e3"]


def test_recent_transactions_k_bounds():
    income, expenses = make_sample()
    assert len(list(recent_transactions(income, expenses, 10))) == 5
    assert list(recent_transactions(income, expenses, 0)) == []
    assert list(recent_transactions(income, expenses, -1)) == []
