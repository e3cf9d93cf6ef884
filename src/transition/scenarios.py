"""NGFS-style carbon price and intensity pathways, 2025-2040."""

from __future__ import annotations

from typing import Dict, Iterable, Tuple

import pandas as pd

from .schema import N_YEARS, START_YEAR, ScenarioKind, ScenarioYearPoint

ScenarioPath = Tuple[ScenarioYearPoint, ...]

# Disorderly: late policy action, slope jumps at this year index
DISORDERLY_BREAK = 8


def scenario_price(kind: ScenarioKind, t: int) -> float:
    """Carbon price (USD/tCO2e) for year index t."""
    kind = ScenarioKind(kind)
    if kind is ScenarioKind.ORDERLY:
        return 50.0 + 10.0 * t
    elif kind is ScenarioKind.DISORDERLY:
        if t < DISORDERLY_BREAK:
            return 40.0 + 2.0 * t
        return 40.0 + 2.0 * DISORDERLY_BREAK + 20.0 * (t - DISORDERLY_BREAK)
    elif kind is ScenarioKind.HOTHOUSE:
        return 40.0 + 2.0 * t
    raise ValueError(f"Unknown scenario kind: {kind!r}")


def intensity_reduction(kind: ScenarioKind) -> float:
    """Annual scenario-wide intensity reduction."""
    kind = ScenarioKind(kind)
    if kind is ScenarioKind.ORDERLY:
        return 0.04
    elif kind is ScenarioKind.DISORDERLY:
        return 0.02
    elif kind is ScenarioKind.HOTHOUSE:
        return 0.01
    raise ValueError(f"Unknown scenario kind: {kind!r}")


def scenario_for(kind: ScenarioKind) -> ScenarioPath:
    """Build the 16-year pathway for one scenario."""
    reduction = intensity_reduction(kind)
    return tuple(
        ScenarioYearPoint(
            year=START_YEAR + t,
            price=scenario_price(kind, t),
            intensity_factor=(1.0 - reduction) ** t,
        )
        for t in range(N_YEARS)
    )


def generate_scenarios() -> Dict[ScenarioKind, ScenarioPath]:
    return {kind: scenario_for(kind) for kind in ScenarioKind}


def scenario_frame(scenarios: Dict[ScenarioKind, Iterable[ScenarioYearPoint]]) -> pd.DataFrame:
    """Long-format table: scenario, year, price, intensity_factor."""
    rows = [
        {
            "scenario": kind.value,
            "year": p.year,
            "price": p.price,
            "intensity_factor": p.intensity_factor,
        }
        for kind, points in scenarios.items()
        for p in points
    ]
    return pd.DataFrame(rows, columns=["scenario", "year", "price", "intensity_factor"])
