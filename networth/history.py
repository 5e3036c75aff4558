"""Net worth history built from per-asset valuation points.

Every asset carries a sparse, append-only list of (date, value) observations.
The merger walks the union of all observation dates once and carries each
asset's last known value forward, so the total is a step function over the
record dates rather than an interpolation.
"""
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

from networth.domain import Asset, Transaction, TransactionSnapshot, ValuationPoint, is_iso_date
from networth.transforms import round_money

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NetWorthPoint:
    date: str
    total_net_worth: float


@dataclass(frozen=True)
class NetWorthHistory:
    points: tuple[NetWorthPoint, ...]
    # date -> asset id -> value known as of that date
    breakdown: Mapping[str, Mapping[str, float]]


@dataclass(frozen=True)
class AssetShare:
    asset_id: str
    name: str
    type: str
    value: float


@dataclass(frozen=True)
class ValueChange:
    date: str
    value: float
    change: float
    type: str | None = None


def _valid_points(asset: Asset) -> tuple[ValuationPoint, ...]:
    points = []
    for p in asset.value_history:
        if not isinstance(p.value, (int, float)) or isinstance(p.value, bool):
            logger.debug("Skipping non-numeric value %r on asset %s", p.value, asset.id)
            continue
        if not is_iso_date(p.date):
            logger.debug("Skipping value with bad date %r on asset %s", p.date, asset.id)
            continue
        points.append(p)
    # stable: same-date entries keep insertion order
    return tuple(sorted(points, key=lambda p: p.date))


def net_worth_history(assets: Iterable[Asset]) -> NetWorthHistory:
    # pass 1: per-date observations, later entries of the same asset win
    observed: dict[str, dict[str, float]] = {}
    for asset in assets:
        for p in _valid_points(asset):
            observed.setdefault(p.date, {})[asset.id] = float(p.value)

    # pass 2: walk the dates carrying last known values forward
    last_known: dict[str, float] = {}
    points: list[NetWorthPoint] = []
    breakdown: dict[str, Mapping[str, float]] = {}
    for date in sorted(observed):
        last_known.update(observed[date])
        points.append(NetWorthPoint(date=date, total_net_worth=round_money(sum(last_known.values()))))
        breakdown[date] = MappingProxyType(dict(last_known))

    return NetWorthHistory(points=tuple(points), breakdown=MappingProxyType(breakdown))


def breakdown_for(history: NetWorthHistory, date: str, assets: Iterable[Asset]) -> tuple[AssetShare, ...]:
    by_id = {a.id: a for a in assets}
    values = history.breakdown.get(date, {})
    return tuple(
        AssetShare(asset_id=asset_id, name=by_id[asset_id].name, type=by_id[asset_id].type, value=value)
        for asset_id, value in values.items()
        if asset_id in by_id
    )


def asset_value_changes(asset: Asset) -> tuple[ValueChange, ...]:
    changes = []
    previous = 0.0
    for p in _valid_points(asset):
        changes.append(ValueChange(date=p.date, value=p.value, change=p.value - previous, type=p.type))
        previous = p.value
    return tuple(changes)


def daily_asset_values(asset: Asset) -> tuple[tuple[str, float], ...]:
    # one value per day, the last entry of the day wins
    per_day = {p.date: float(p.value) for p in _valid_points(asset)}
    return tuple(sorted(per_day.items()))


def transaction_history(t: Transaction) -> tuple[TransactionSnapshot, ...]:
    return tuple(sorted(t.history, key=lambda h: h.timestamp or ""))
