from datetime import date

from networth.projection import ProjectionPoint, project_net_worth


def test_zero_growth_adds_contributions_only():
    points = project_net_worth(1000, 0, 100, 1, start_year=2025)
    assert points == (ProjectionPoint(2025, 1000.0), ProjectionPoint(2026, 2200.0))


def test_monthly_compounding_without_contributions():
    points = project_net_worth(1000, 12, 0, 2, start_year=2025)
    assert points[1].projected_net_worth == 1126.83
    assert points[2].projected_net_worth == 1269.73


def test_contribution_is_added_before_growth():
    points = project_net_worth(0, 12, 100, 1, start_year=2025)
    # 100 * 1.01 * (1.01**12 - 1) / 0.01
    assert points[-1].projected_net_worth == 1280.93


def test_one_point_per_year_plus_now():
    points = project_net_worth(5000, 5, 100, 10, start_year=2030)
    assert len(points) == 11
    assert [p.year for p in points] == list(range(2030, 2041))
    values = [p.projected_net_worth for p in points]
    assert values == sorted(values)


def test_defaults_to_current_year():
    points = project_net_worth(100, 5, 0, 1)
    assert points[0].year == date.today().year


def test_degenerate_inputs():
    assert project_net_worth(250.125, 5, 100, 0, start_year=2025) == (ProjectionPoint(2025, 250.13),)
    assert project_net_worth(None, 0, 10, 1, start_year=2025)[-1].projected_net_worth == 120.0


def test_deterministic():
    assert project_net_worth(1234.56, 7.5, 250, 30, start_year=2025) == project_net_worth(
        1234.56, 7.5, 250, 30, start_year=2025
    )
