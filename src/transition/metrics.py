from __future__ import annotations

import math
from dataclasses import asdict
from typing import Dict, List, Sequence

import pandas as pd

from src.config import Config

from .schema import MonteCarloPath, ScenarioKind, UncertaintyBand, VaRMetrics


def _at(costs: List[float], q: float) -> float:
    """Order statistic at floor(q * n); no interpolation."""
    return costs[int(math.floor(q * len(costs)))]


def _mean(costs: Sequence[float]) -> float:
    total = 0.0
    for c in costs:
        total += c
    return total / len(costs)


def _sorted_costs(paths: Sequence[MonteCarloPath], year: int, kind: ScenarioKind) -> List[float]:
    return sorted(p.portfolio_cost for p in paths if p.year == year and p.scenario is kind)


def calculate_var(
    paths: Sequence[MonteCarloPath],
    year: int,
    kind: ScenarioKind,
    alpha: float = Config.DEFAULT_VAR_ALPHA,
) -> VaRMetrics:
    """
    VaR/CVaR and distribution summary of portfolio cost at one year.

    An empty selection yields all-zero metrics rather than an error.
    """
    if not 0.0 < alpha < 1.0:
        raise ValueError(f"alpha must be within (0, 1), got {alpha}")
    kind = ScenarioKind(kind)
    costs = _sorted_costs(paths, year, kind)
    if not costs:
        return VaRMetrics.zero(kind, year, alpha)

    n = len(costs)
    mean = _mean(costs)
    variance = 0.0
    for c in costs:
        variance += (c - mean) ** 2
    std = math.sqrt(variance / n)

    var_idx = int(math.floor(alpha * n))
    tail = costs[var_idx:]

    return VaRMetrics(
        scenario=kind,
        year=year,
        alpha=alpha,
        mean=mean,
        std=std,
        median=costs[n // 2],
        p5=_at(costs, 0.05),
        p95=_at(costs, 0.95),
        var=costs[var_idx],
        cvar=_mean(tail),
    )


def uncertainty_bands(paths: Sequence[MonteCarloPath], kind: ScenarioKind) -> List[UncertaintyBand]:
    """Per-year mean and p5/p25/p75/p95 of portfolio cost, ordered by year."""
    kind = ScenarioKind(kind)
    by_year: Dict[int, List[float]] = {}
    for p in paths:
        if p.scenario is kind:
            by_year.setdefault(p.year, []).append(p.portfolio_cost)

    bands = []
    for year in sorted(by_year):
        costs = sorted(by_year[year])
        bands.append(
            UncertaintyBand(
                year=year,
                mean=_mean(costs),
                p5=_at(costs, 0.05),
                p25=_at(costs, 0.25),
                p75=_at(costs, 0.75),
                p95=_at(costs, 0.95),
            )
        )
    return bands


def var_frame(metrics: Sequence[VaRMetrics]) -> pd.DataFrame:
    rows = []
    for m in metrics:
        row = asdict(m)
        row["scenario"] = m.scenario.value
        rows.append(row)
    return pd.DataFrame(rows)


def bands_frame(bands: Dict[ScenarioKind, Sequence[UncertaintyBand]]) -> pd.DataFrame:
    rows = [
        {"scenario": kind.value, **asdict(b)}
        for kind, kind_bands in bands.items()
        for b in kind_bands
    ]
    return pd.DataFrame(rows, columns=["scenario", "year", "mean", "p5", "p25", "p75", "p95"])
