from __future__ import annotations

import math
import random

import pytest

from src.transition.metrics import bands_frame, calculate_var, uncertainty_bands, var_frame
from src.transition.monte_carlo import run_all_scenarios
from src.transition.schema import MonteCarloPath, ScenarioKind, VaRMetrics


def _paths(costs, year=2040, kind=ScenarioKind.ORDERLY):
    return [
        MonteCarloPath(path_id=i, scenario=kind, year=year, portfolio_cost=float(c), price=1.0, intensity_factor=1.0)
        for i, c in enumerate(costs)
    ]


def test_var_on_known_population():
    """Costs 1..100: floor-index order statistics, population std."""
    costs = list(range(1, 101))
    random.Random(0).shuffle(costs)
    m = calculate_var(_paths(costs), 2040, ScenarioKind.ORDERLY, alpha=0.95)
    n = 100
    assert m.mean == 50.5
    assert math.isclose(m.std, math.sqrt((n * n - 1) / 12.0), rel_tol=1e-12)
    var_idx = math.floor(0.95 * n)
    assert m.var == float(var_idx + 1)
    assert math.isclose(m.cvar, sum(range(var_idx + 1, 101)) / (n - var_idx), rel_tol=1e-12)
    assert m.median == 51.0
    assert m.p5 == float(math.floor(0.05 * n) + 1)
    assert m.p95 == float(math.floor(0.95 * n) + 1)


def test_no_interpolation_for_small_population():
    """n=3, alpha=0.5: index floor(1.5)=1, no averaging of neighbours."""
    m = calculate_var(_paths([30.0, 10.0, 20.0]), 2040, ScenarioKind.ORDERLY, alpha=0.5)
    assert m.var == 20.0
    assert m.cvar == 25.0
    assert m.median == 20.0
    assert m.p5 == 10.0
    assert m.p95 == 30.0


def test_filters_by_year_and_scenario():
    paths = (
        _paths([1.0, 2.0, 3.0])
        + _paths([100.0, 200.0], year=2030)
        + _paths([1000.0], kind=ScenarioKind.HOTHOUSE)
    )
    m = calculate_var(paths, 2040, ScenarioKind.ORDERLY)
    assert m.mean == 2.0
    assert m.scenario is ScenarioKind.ORDERLY and m.year == 2040


def test_empty_population_returns_zero_metrics():
    """No matching paths is not an error."""
    m = calculate_var([], 2040, ScenarioKind.HOTHOUSE)
    assert m == VaRMetrics.zero(ScenarioKind.HOTHOUSE, 2040, 0.95)
    assert (m.mean, m.std, m.median, m.p5, m.p95, m.var, m.cvar) == (0.0,) * 7


def test_alpha_must_be_open_unit_interval():
    with pytest.raises(ValueError):
        calculate_var(_paths([1.0]), 2040, ScenarioKind.ORDERLY, alpha=1.0)
    with pytest.raises(ValueError):
        calculate_var(_paths([1.0]), 2040, ScenarioKind.ORDERLY, alpha=0.0)


def test_var_not_above_cvar_on_simulation(three_companies):
    """Tail mean is at least the threshold for every scenario and year."""
    runs = run_all_scenarios(three_companies, n_paths=200, seed=42)
    for kind, paths in runs.items():
        for year in range(2025, 2041):
            for alpha in (0.9, 0.95, 0.99):
                m = calculate_var(paths, year, kind, alpha)
                assert m.var <= m.cvar, f"{kind} {year} alpha={alpha}"
                assert m.p5 <= m.median <= m.p95


def test_band_ordering_and_years(three_companies):
    runs = run_all_scenarios(three_companies, n_paths=200, seed=42)
    for kind, paths in runs.items():
        bands = uncertainty_bands(paths, kind)
        assert [b.year for b in bands] == list(range(2025, 2041))
        for b in bands:
            assert b.p5 <= b.p25 <= b.p75 <= b.p95, f"{kind} {b.year} bands out of order"


def test_band_matches_var_percentiles(three_companies):
    runs = run_all_scenarios(three_companies, n_paths=100, seed=5, kinds=[ScenarioKind.DISORDERLY])
    paths = runs[ScenarioKind.DISORDERLY]
    band = uncertainty_bands(paths, ScenarioKind.DISORDERLY)[-1]
    m = calculate_var(paths, 2040, ScenarioKind.DISORDERLY)
    assert band.p5 == m.p5 and band.p95 == m.p95
    assert math.isclose(band.mean, m.mean, rel_tol=1e-12)


def test_bands_ignore_other_scenarios():
    paths = _paths([1.0, 2.0]) + _paths([5.0], kind=ScenarioKind.HOTHOUSE, year=2030)
    assert [b.year for b in uncertainty_bands(paths, ScenarioKind.HOTHOUSE)] == [2030]
    assert uncertainty_bands([], ScenarioKind.ORDERLY) == []


def test_frames():
    m = calculate_var(_paths([1.0, 2.0, 3.0]), 2040, ScenarioKind.ORDERLY)
    df = var_frame([m])
    assert df.loc[0, "scenario"] == "orderly"
    assert {"var", "cvar", "mean", "std", "median", "p5", "p95"} <= set(df.columns)
    bdf = bands_frame({ScenarioKind.ORDERLY: uncertainty_bands(_paths([1.0, 2.0]), ScenarioKind.ORDERLY)})
    assert list(bdf.columns) == ["scenario", "year", "mean", "p5", "p25", "p75", "p95"]
    assert len(bdf) == 1
