import json
import logging
import math
from dataclasses import replace
from datetime import date as date_cls, datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from functools import reduce
from typing import Any, Iterable, Optional, Tuple, TypeVar

from networth.domain import (
    CONTRIBUTION,
    INITIAL_ENTRY,
    UPDATE,
    Asset,
    Contribution,
    Transaction,
    TransactionSnapshot,
    ValuationPoint,
)

logger = logging.getLogger(__name__)

R = TypeVar("R", Asset, Transaction)


def to_number(x: Any) -> Optional[float]:
    """Return ``x`` as a float, or None when it is missing or not a finite number."""
    if x is None or isinstance(x, bool):
        return None
    try:
        value = float(x)
    except (TypeError, ValueError):
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def round_money(x: float) -> float:
    # half-up on the exact binary value, same digits as JS toFixed(2)
    return float(Decimal(x).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _as_tuple(x: Any) -> tuple:
    if isinstance(x, (list, tuple)):
        return tuple(x)
    return ()


def _as_date(x: Any) -> str:
    return x if isinstance(x, str) else ""


def _parse_point(raw: Any) -> Optional[ValuationPoint]:
    if not isinstance(raw, dict):
        logger.debug("Skipping malformed valuation point %r", raw)
        return None
    return ValuationPoint(
        value=to_number(raw.get("value")),
        date=_as_date(raw.get("date")),
        type=raw.get("type"),
    )


def _parse_contribution(raw: Any) -> Optional[Contribution]:
    if not isinstance(raw, dict):
        logger.debug("Skipping malformed contribution %r", raw)
        return None
    return Contribution(amount=to_number(raw.get("amount")), date=_as_date(raw.get("date")))


def _parse_snapshot(raw: Any) -> Optional[TransactionSnapshot]:
    if not isinstance(raw, dict):
        logger.debug("Skipping malformed history entry %r", raw)
        return None
    return TransactionSnapshot(
        amount=to_number(raw.get("amount")),
        description=raw.get("description") or "",
        date=_as_date(raw.get("date")),
        is_recurring=raw.get("isRecurring") is True,
        frequency=raw.get("frequency") or "",
        end_date=_as_date(raw.get("endDate")),
        timestamp=raw.get("timestamp") or "",
        change_type=raw.get("changeType") or "",
        category=raw.get("category"),
    )


def parse_asset(raw: dict) -> Asset:
    points = tuple(
        p for p in map(_parse_point, _as_tuple(raw.get("valueHistory"))) if p is not None
    )
    contributions = tuple(
        c for c in map(_parse_contribution, _as_tuple(raw.get("contributions"))) if c is not None
    )
    return Asset(
        id=str(raw.get("id", "")),
        name=raw.get("name") or "",
        type=raw.get("type") or "",
        initial_value=to_number(raw.get("initialValue")),
        contributions=contributions,
        value_history=points,
    )


def parse_transaction(raw: dict) -> Transaction:
    history = tuple(
        h for h in map(_parse_snapshot, _as_tuple(raw.get("history"))) if h is not None
    )
    return Transaction(
        id=str(raw.get("id", "")),
        amount=to_number(raw.get("amount")),
        description=raw.get("description") or "",
        date=_as_date(raw.get("date")),
        is_recurring=raw.get("isRecurring") is True,
        frequency=raw.get("frequency") or "",
        end_date=_as_date(raw.get("endDate")),
        category=raw.get("category"),
        history=history,
    )


def load_seed(
    path: str,
) -> Tuple[
    Tuple[Asset, ...],
    Tuple[Transaction, ...],
    Tuple[Transaction, ...],
]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    assets = tuple(parse_asset(a) for a in data.get("assets", []) if isinstance(a, dict))
    income = tuple(parse_transaction(i) for i in data.get("income", []) if isinstance(i, dict))
    expenses = tuple(parse_transaction(e) for e in data.get("expenses", []) if isinstance(e, dict))
    logger.info(
        "Loaded %d assets, %d income and %d expense records from %s",
        len(assets), len(income), len(expenses), path,
    )
    return assets, income, expenses


def _today() -> str:
    return date_cls.today().isoformat()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# --- asset lifecycle

def create_asset(
    asset_id: str, name: str, asset_type: str, initial_value: float, initial_date: str
) -> Asset:
    value = to_number(initial_value)
    return Asset(
        id=asset_id,
        name=name,
        type=asset_type,
        initial_value=value,
        contributions=(),
        value_history=(ValuationPoint(value=value, date=initial_date),),
    )


def update_asset_value(asset: Asset, new_value: float, on_date: Optional[str] = None) -> Asset:
    point = ValuationPoint(value=to_number(new_value), date=on_date or _today())
    return replace(asset, value_history=asset.value_history + (point,))


def add_contribution(asset: Asset, amount: float, on_date: Optional[str] = None) -> Asset:
    amount = to_number(amount) or 0.0
    when = on_date or _today()
    point = ValuationPoint(value=asset.current_value + amount, date=when, type=CONTRIBUTION)
    return replace(
        asset,
        contributions=asset.contributions + (Contribution(amount=amount, date=when),),
        value_history=asset.value_history + (point,),
    )


def total_net_worth(assets: Iterable[Asset]) -> float:
    return round_money(reduce(lambda acc, a: acc + a.current_value, assets, 0.0))


# --- income / expense lifecycle

def _snapshot(t: Transaction, timestamp: str, change_type: str) -> TransactionSnapshot:
    return TransactionSnapshot(
        amount=t.amount,
        description=t.description,
        date=t.date,
        is_recurring=t.is_recurring,
        frequency=t.frequency,
        end_date=t.end_date,
        timestamp=timestamp,
        change_type=change_type,
        category=t.category,
    )


def _normalize_recurrence(t: Transaction) -> Transaction:
    # frequency and end date only mean something on recurring records
    if t.is_recurring:
        return t
    return replace(t, frequency="", end_date="")


def create_transaction(
    transaction_id: str,
    amount: float,
    description: str,
    date: str,
    is_recurring: bool = False,
    frequency: str = "",
    end_date: str = "",
    category: Optional[str] = None,
    timestamp: Optional[str] = None,
) -> Transaction:
    t = _normalize_recurrence(
        Transaction(
            id=transaction_id,
            amount=to_number(amount),
            description=description,
            date=date,
            is_recurring=is_recurring,
            frequency=frequency,
            end_date=end_date or "",
            category=category,
        )
    )
    return replace(t, history=(_snapshot(t, timestamp or _now(), INITIAL_ENTRY),))


def update_transaction(t: Transaction, timestamp: Optional[str] = None, **changes: Any) -> Transaction:
    if "amount" in changes:
        changes["amount"] = to_number(changes["amount"])
    updated = _normalize_recurrence(replace(t, **changes))
    change_type = UPDATE if t.history else INITIAL_ENTRY
    entry = _snapshot(updated, timestamp or _now(), change_type)
    return replace(updated, history=t.history + (entry,))


# --- collections

def add_record(records: Tuple[R, ...], r: R) -> Tuple[R, ...]:
    return records + (r,)


def replace_record(records: Tuple[R, ...], r: R) -> Tuple[R, ...]:
    return tuple(r if existing.id == r.id else existing for existing in records)


def delete_record(records: Tuple[R, ...], record_id: str) -> Tuple[R, ...]:
    return tuple(filter(lambda r: r.id != record_id, records))
