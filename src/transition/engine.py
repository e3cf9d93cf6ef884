"""
Full scenario pipeline: pathways -> deterministic trajectories -> Monte Carlo
-> VaR metrics and uncertainty bands.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from src.utils.logging_utils import get_logger

from .metrics import bands_frame, calculate_var, uncertainty_bands, var_frame
from .monte_carlo import paths_frame, run_monte_carlo
from .scenarios import ScenarioPath, generate_scenarios
from .schema import (
    CompanyExposure,
    MonteCarloPath,
    PortfolioYearPoint,
    RunConfig,
    ScenarioKind,
    UncertaintyBand,
    VaRMetrics,
)
from .trajectory import calculate_portfolio_trajectory, trajectory_frame

logger = get_logger(__name__)


@dataclass
class EngineResult:
    config: RunConfig
    scenarios: Dict[ScenarioKind, ScenarioPath]
    trajectories: Dict[ScenarioKind, List[PortfolioYearPoint]] = field(default_factory=dict)
    paths: Dict[ScenarioKind, List[MonteCarloPath]] = field(default_factory=dict)
    var_metrics: Dict[ScenarioKind, VaRMetrics] = field(default_factory=dict)
    bands: Dict[ScenarioKind, List[UncertaintyBand]] = field(default_factory=dict)

    @property
    def all_paths(self) -> List[MonteCarloPath]:
        return [p for kind in self.paths for p in self.paths[kind]]

    def trajectories_frame(self) -> pd.DataFrame:
        frames = [trajectory_frame(points, kind) for kind, points in self.trajectories.items()]
        if not frames:
            return pd.DataFrame(columns=["scenario", "year", "total_cost", "total_emissions", "price"])
        return pd.concat(frames, ignore_index=True)

    def paths_frame(self) -> pd.DataFrame:
        return paths_frame(self.all_paths)

    def var_frame(self) -> pd.DataFrame:
        return var_frame(list(self.var_metrics.values()))

    def bands_frame(self) -> pd.DataFrame:
        return bands_frame(self.bands)

    def summary(self) -> Dict[str, float]:
        """Flat metrics dict, one key per scenario/statistic."""
        out: Dict[str, float] = {}
        horizon = self.config.horizon_year
        for kind, m in self.var_metrics.items():
            prefix = kind.value
            out[f"{prefix}_mean"] = m.mean
            out[f"{prefix}_std"] = m.std
            out[f"{prefix}_var"] = m.var
            out[f"{prefix}_cvar"] = m.cvar
            out[f"{prefix}_p5"] = m.p5
            out[f"{prefix}_p95"] = m.p95
        for kind, points in self.trajectories.items():
            for p in points:
                if p.year == horizon:
                    out[f"{kind.value}_expected_cost"] = p.total_cost
                    out[f"{kind.value}_expected_emissions"] = p.total_emissions
        return out


def run_engine(companies: Sequence[CompanyExposure], config: RunConfig) -> EngineResult:
    """
    Run every configured scenario for a cohort.

    Raises:
        ValueError: If the horizon year is not one of the generated years
    """
    scenarios = generate_scenarios()
    years = {p.year for path in scenarios.values() for p in path}
    if config.horizon_year not in years:
        raise ValueError(f"horizon_year {config.horizon_year} is outside the scenario range")

    result = EngineResult(config=config, scenarios=scenarios)
    mc = config.monte_carlo

    if not companies:
        logger.warning(f"Run {config.name!r}: no companies; returning empty trajectories and zero metrics")
        for kind in config.scenarios:
            result.var_metrics[kind] = VaRMetrics.zero(kind, config.horizon_year, mc.alpha)
        return result

    logger.info(
        f"Run {config.name!r}: {len(companies)} companies, scenarios="
        f"{[k.value for k in config.scenarios]}, horizon={config.horizon_year}"
    )
    for kind in config.scenarios:
        base = scenarios[kind]
        result.trajectories[kind] = calculate_portfolio_trajectory(companies, base, kind)
        paths = run_monte_carlo(companies, base, kind, n_paths=mc.n_paths, seed=mc.seed)
        result.paths[kind] = paths
        result.var_metrics[kind] = calculate_var(paths, config.horizon_year, kind, mc.alpha)
        result.bands[kind] = uncertainty_bands(paths, kind)
    return result


class ScenarioEngine:
    """
    Memoizes the latest run by input identity.

    A call with different companies or config discards the cached result and
    recomputes the whole pipeline.
    """

    def __init__(self):
        self._key: Optional[Tuple[Tuple[CompanyExposure, ...], RunConfig]] = None
        self._result: Optional[EngineResult] = None
        self.runs = 0

    def run(self, companies: Sequence[CompanyExposure], config: RunConfig) -> EngineResult:
        key = (tuple(companies), config)
        if self._result is not None and key == self._key:
            logger.debug(f"Run {config.name!r}: reusing cached result")
            return self._result
        self._result = run_engine(companies, config)
        self._key = key
        self.runs += 1
        return self._result
