from dataclasses import dataclass
from datetime import date as date_cls
from typing import Optional

ASSET_TYPES = ("Cash", "Investment", "Real Estate", "Vehicle", "Other")
EXPENSE_CATEGORIES = ("Personal", "Shared")

MONTHLY = "Monthly"
FREQUENCIES = (MONTHLY,)

INITIAL_ENTRY = "Initial Entry"
UPDATE = "Update"

RECURRING = "Recurring"
ONE_OFF = "One-Off"

CONTRIBUTION = "contribution"


def is_iso_date(value) -> bool:
    """True only for a real calendar date written as YYYY-MM-DD."""
    if not isinstance(value, str) or len(value) != 10 or value[4] != "-" or value[7] != "-":
        return False
    try:
        date_cls.fromisoformat(value)
    except ValueError:
        return False
    return True


@dataclass(frozen=True)
class ValuationPoint:
    value: Optional[float]
    date: str                   # "2024-01-31"
    type: Optional[str] = None  # "contribution" when created by a contribution


@dataclass(frozen=True)
class Contribution:
    amount: Optional[float]
    date: str


@dataclass(frozen=True)
class Asset:
    id: str
    name: str
    type: str
    initial_value: Optional[float]
    contributions: tuple[Contribution, ...] = ()
    value_history: tuple[ValuationPoint, ...] = ()

    @property
    def current_value(self) -> float:
        # latest by date, ties go to the later insertion
        latest = None
        for p in self.value_history:
            if not isinstance(p.value, (int, float)) or isinstance(p.value, bool) or not is_iso_date(p.date):
                continue
            if latest is None or p.date >= latest.date:
                latest = p
        return float(latest.value) if latest is not None else 0.0

    @property
    def total_contributions(self) -> float:
        return sum(
            c.amount for c in self.contributions if isinstance(c.amount, (int, float))
        )

    @property
    def interest_movement(self) -> float:
        initial = self.initial_value if isinstance(self.initial_value, (int, float)) else 0.0
        return self.current_value - initial - self.total_contributions


# One entry of a transaction's append-only change log
@dataclass(frozen=True)
class TransactionSnapshot:
    amount: Optional[float]
    description: str
    date: str
    is_recurring: bool
    frequency: str
    end_date: str
    timestamp: str
    change_type: str              # "Initial Entry" or "Update"
    category: Optional[str] = None


@dataclass(frozen=True)
class Transaction:
    id: str
    amount: Optional[float]       # always positive, direction comes from the collection
    description: str
    date: str                     # start date
    is_recurring: bool = False
    frequency: str = ""           # "Monthly" for recurring records
    end_date: str = ""            # "" means open-ended
    category: Optional[str] = None  # None for income, "Personal"/"Shared" for expenses
    history: tuple[TransactionSnapshot, ...] = ()

    @property
    def is_expense(self) -> bool:
        return self.category is not None

    @property
    def expense_type(self) -> str:
        return RECURRING if self.is_recurring else ONE_OFF
