from __future__ import annotations

import math
from typing import Dict, List, Optional, Sequence

import pandas as pd

from src.config import Config
from src.utils.logging_utils import get_logger, log_duration

from .decarbonization import decarb_rates
from .rng import PathGenerator
from .scenarios import generate_scenarios
from .schema import (
    CompanyExposure,
    MonteCarloPath,
    ScenarioKind,
    ScenarioYearPoint,
    ShockParameters,
)

logger = get_logger(__name__)

PATH_COLUMNS = ["path_id", "scenario", "year", "portfolio_cost", "price", "intensity_factor"]


def _clip(x: float, lo: float, hi: float) -> float:
    return float(min(max(x, lo), hi))


def run_monte_carlo(
    companies: Sequence[CompanyExposure],
    base_scenario: Sequence[ScenarioYearPoint],
    kind: ScenarioKind,
    n_paths: int = Config.DEFAULT_MC_PATHS,
    seed: int = Config.DEFAULT_RANDOM_SEED,
    generator: Optional[PathGenerator] = None,
    params: Optional[ShockParameters] = None,
) -> List[MonteCarloPath]:
    """
    Simulate portfolio carbon cost under correlated price/intensity shocks.

    One RNG stream runs across all paths (path-major, year-minor); a path's
    shocks for every year are drawn before its costs are evaluated.

    Args:
        companies: Cohort to aggregate
        base_scenario: Deterministic pathway the shocks are applied to
        kind: Scenario label stamped on every path
        n_paths: Number of independent paths
        seed: Seed for a fresh PathGenerator (ignored if generator is given)
        generator: Existing generator to continue drawing from
        params: Shock volatilities/correlation (defaults to ShockParameters())

    Returns:
        n_paths * len(base_scenario) path records
    """
    if n_paths < 0:
        raise ValueError(f"n_paths must be non-negative, got {n_paths}")
    kind = ScenarioKind(kind)
    if generator is None:
        generator = PathGenerator(seed, params)
    p = generator.params
    drift = 0.5 * p.price_vol * p.price_vol

    rates = decarb_rates(companies)
    emissions = [c.total_emissions for c in companies]
    n_years = len(base_scenario)
    # (1 - rate_c)^i per year index, per company
    decay = [[(1.0 - r) ** i for r in rates] for i in range(n_years)]

    logger.info(
        f"Monte Carlo {kind.value}: {n_paths} paths x {n_years} years, "
        f"{len(companies)} companies, seed={generator.seed}"
    )

    results: List[MonteCarloPath] = []
    with log_duration(logger, f"Monte Carlo {kind.value}"):
        for path_id in range(n_paths):
            shocks = generator.shock_pairs(n_years)
            for i, yd in enumerate(base_scenario):
                price_shock, intensity_shock = shocks[i]
                shocked_price = yd.price * math.exp(price_shock - drift)
                noise = _clip(1.0 + intensity_shock, p.intensity_floor, p.intensity_cap)
                shocked_intensity = yd.intensity_factor * noise

                cost = 0.0
                for e, d in zip(emissions, decay[i]):
                    cost += e * shocked_intensity * d * shocked_price

                results.append(
                    MonteCarloPath(
                        path_id=path_id,
                        scenario=kind,
                        year=yd.year,
                        portfolio_cost=cost,
                        price=shocked_price,
                        intensity_factor=shocked_intensity,
                    )
                )
    return results


def run_all_scenarios(
    companies: Sequence[CompanyExposure],
    n_paths: int = Config.DEFAULT_MC_PATHS,
    seed: int = Config.DEFAULT_RANDOM_SEED,
    kinds: Optional[Sequence[ScenarioKind]] = None,
    params: Optional[ShockParameters] = None,
) -> Dict[ScenarioKind, List[MonteCarloPath]]:
    """Run each scenario with its own generator started from the same seed."""
    scenarios = generate_scenarios()
    kinds = [ScenarioKind(k) for k in (kinds or list(ScenarioKind))]
    return {
        kind: run_monte_carlo(companies, scenarios[kind], kind, n_paths=n_paths, seed=seed, params=params)
        for kind in kinds
    }


def paths_frame(paths: Sequence[MonteCarloPath]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            (p.path_id, p.scenario.value, p.year, p.portfolio_cost, p.price, p.intensity_factor)
            for p in paths
        ],
        columns=PATH_COLUMNS,
    )
