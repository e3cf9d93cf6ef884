from __future__ import annotations

from typing import List, Sequence

import pandas as pd

from .decarbonization import decarb_rates
from .schema import (
    CompanyExposure,
    CompanyTrajectory,
    CompanyYearPoint,
    PortfolioYearPoint,
    ScenarioKind,
    ScenarioYearPoint,
)


def simulate_company_trajectory(
    company: CompanyExposure,
    scenario: Sequence[ScenarioYearPoint],
    decarb_rate: float,
) -> List[CompanyYearPoint]:
    """Expected emissions and carbon cost per year for one company."""
    base = company.total_emissions
    points = []
    for i, yd in enumerate(scenario):
        decay = (1.0 - decarb_rate) ** i
        emissions = base * yd.intensity_factor * decay
        points.append(CompanyYearPoint(year=yd.year, emissions=emissions, cost=emissions * yd.price))
    return points


def company_trajectories(
    companies: Sequence[CompanyExposure],
    scenario: Sequence[ScenarioYearPoint],
    kind: ScenarioKind,
) -> List[CompanyTrajectory]:
    rates = decarb_rates(companies)
    return [
        CompanyTrajectory(
            company=c.name,
            scenario=ScenarioKind(kind),
            decarb_rate=rate,
            points=tuple(simulate_company_trajectory(c, scenario, rate)),
        )
        for c, rate in zip(companies, rates)
    ]


def calculate_portfolio_trajectory(
    companies: Sequence[CompanyExposure],
    scenario: Sequence[ScenarioYearPoint],
    kind: ScenarioKind,
) -> List[PortfolioYearPoint]:
    """Sum company trajectories per year; carries the nominal scenario price."""
    trajectories = company_trajectories(companies, scenario, kind)
    out = []
    for i, yd in enumerate(scenario):
        out.append(
            PortfolioYearPoint(
                year=yd.year,
                total_cost=sum(t.points[i].cost for t in trajectories),
                total_emissions=sum(t.points[i].emissions for t in trajectories),
                price=yd.price,
            )
        )
    return out


def trajectory_frame(points: Sequence[PortfolioYearPoint], kind: ScenarioKind) -> pd.DataFrame:
    df = pd.DataFrame(
        [(p.year, p.total_cost, p.total_emissions, p.price) for p in points],
        columns=["year", "total_cost", "total_emissions", "price"],
    )
    df.insert(0, "scenario", ScenarioKind(kind).value)
    return df
