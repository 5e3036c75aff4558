from dataclasses import dataclass
from datetime import date as date_cls
from typing import Optional

from networth.transforms import round_money, to_number


@dataclass(frozen=True)
class ProjectionPoint:
    year: int
    projected_net_worth: float


def project_net_worth(
    current_net_worth: float,
    annual_growth_rate: float,
    monthly_contribution: float,
    years: int,
    start_year: Optional[int] = None,
) -> tuple[ProjectionPoint, ...]:
    """Simulate monthly compounding with a fixed contribution.

    Each month the contribution is added first, then the month's growth is
    applied. Values are rounded only when a yearly point is emitted.
    """
    start_year = start_year if start_year is not None else date_cls.today().year
    value = to_number(current_net_worth) or 0.0
    contribution = to_number(monthly_contribution) or 0.0
    monthly_rate = (to_number(annual_growth_rate) or 0.0) / 100 / 12

    points = [ProjectionPoint(year=start_year, projected_net_worth=round_money(value))]
    for year in range(1, max(0, int(years)) + 1):
        for _ in range(12):
            value += contribution
            value *= 1 + monthly_rate
        points.append(ProjectionPoint(year=start_year + year, projected_net_worth=round_money(value)))
    return tuple(points)
