from itertools import chain, islice
from typing import Callable, Iterable, Iterator

from networth.domain import Transaction


def iter_transactions(
    trans: Iterable[Transaction], pred: Callable[[Transaction], bool]
) -> Iterator[Transaction]:
    for t in trans:
        if pred(t):
            yield t


def recent_transactions(
    income: Iterable[Transaction], expenses: Iterable[Transaction], k: int
) -> Iterator[Transaction]:
    ordered = sorted(chain(income, expenses), key=lambda t: t.date or "", reverse=True)
    yield from islice(ordered, max(0, k))
