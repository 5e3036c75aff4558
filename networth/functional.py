from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, TypeVar

from networth.domain import ASSET_TYPES, EXPENSE_CATEGORIES, FREQUENCIES, Asset, Transaction
from networth.recurrence import month_of
from networth.transforms import to_number

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')

MAX_PROJECTION_YEARS = 50


class Maybe(Generic[T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    def is_some(self) -> bool:
        return isinstance(self, Some)

    def is_none(self) -> bool:
        return not self.is_some()


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Some(f(self._value))

    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Nothing()

    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        return Nothing()

    def get_or_else(self, default: T) -> T:
        return default

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


class Either(Generic[E, T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def get_error(self) -> E:
        pass

    def is_right(self) -> bool:
        return isinstance(self, Right)

    def is_left(self) -> bool:
        return not self.is_right()


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Right(f(self._value))

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def get_error(self) -> E:
        raise ValueError("Cannot get error from Right")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return self

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return self

    def get_or_else(self, default: T) -> T:
        return default

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


def _error(code: str, message: str, **details: Any) -> Left:
    return Left({"error": code, "message": message, **details})


def safe_asset(assets: tuple[Asset, ...], asset_id: str) -> Maybe[Asset]:
    for a in assets:
        if a.id == asset_id:
            return Some(a)
    return Nothing()


def validate_asset(asset: Asset) -> Either[dict, Asset]:
    if not asset.name.strip():
        return _error("missing_name", "Asset name is required", asset_id=asset.id)

    if asset.type not in ASSET_TYPES:
        return _error(
            "invalid_asset_type",
            f"Asset type {asset.type!r} is not one of {', '.join(ASSET_TYPES)}",
            type=asset.type,
        )

    initial = to_number(asset.initial_value)
    if initial is None or initial < 0:
        return _error(
            "invalid_initial_value",
            "Initial value must be a non-negative number",
            initial_value=asset.initial_value,
        )

    if not asset.value_history:
        return _error("empty_value_history", f"Asset {asset.name} has no valuation", asset_id=asset.id)

    return Right(asset)


def validate_transaction(t: Transaction) -> Either[dict, Transaction]:
    amount = to_number(t.amount)
    if amount is None or amount <= 0:
        return _error("invalid_amount", "Amount must be a positive number", amount=t.amount)

    if not t.description.strip():
        return _error("missing_description", "Description is required", transaction_id=t.id)

    if month_of(t.date) is None:
        return _error("invalid_date", f"Date {t.date!r} is not an ISO calendar date", date=t.date)

    if t.is_expense and t.category not in EXPENSE_CATEGORIES:
        return _error(
            "invalid_category",
            f"Expense category {t.category!r} is not one of {', '.join(EXPENSE_CATEGORIES)}",
            category=t.category,
        )

    if t.is_recurring and t.frequency not in FREQUENCIES:
        return _error("invalid_frequency", f"Unsupported frequency {t.frequency!r}", frequency=t.frequency)

    if t.end_date:
        if month_of(t.end_date) is None:
            return _error("invalid_end_date", f"End date {t.end_date!r} is not an ISO calendar date", end_date=t.end_date)
        if t.end_date < t.date:
            return _error(
                "end_before_start",
                f"End date {t.end_date} is earlier than start date {t.date}",
                date=t.date,
                end_date=t.end_date,
            )

    return Right(t)


def validate_projection(years: int, annual_rate: float, monthly_contribution: float) -> Either[dict, tuple]:
    if not isinstance(years, int) or not 1 <= years <= MAX_PROJECTION_YEARS:
        return _error("invalid_horizon", f"Projection horizon must be 1..{MAX_PROJECTION_YEARS} years", years=years)
    rate = to_number(annual_rate)
    if rate is None or rate < 0:
        return _error("invalid_growth_rate", "Growth rate must be a non-negative number", annual_rate=annual_rate)
    contribution = to_number(monthly_contribution)
    if contribution is None or contribution < 0:
        return _error(
            "invalid_contribution",
            "Monthly contribution must be a non-negative number",
            monthly_contribution=monthly_contribution,
        )
    return Right((years, rate, contribution))
