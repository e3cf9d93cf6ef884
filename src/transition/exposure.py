"""Static carbon cost exposure at flat carbon prices."""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from .schema import CompanyExposure

PRICE_POINTS = (50.0, 100.0, 150.0, 200.0)


def fixed_price_exposure(
    companies: Sequence[CompanyExposure],
    prices: Sequence[float] = PRICE_POINTS,
) -> pd.DataFrame:
    """
    Cohort carbon cost at each flat price and its increase over the first.

    Returns:
        DataFrame with columns price, cost, increase_pct. increase_pct is NaN
        when the reference cost is zero.
    """
    if not prices:
        raise ValueError("at least one price point is required")
    total_emissions = sum(c.total_emissions for c in companies)
    df = pd.DataFrame({"price": [float(p) for p in prices]})
    df["cost"] = df["price"] * total_emissions
    reference = df["cost"].iloc[0]
    if reference > 0:
        df["increase_pct"] = (df["cost"] / reference - 1.0) * 100.0
    else:
        df["increase_pct"] = float("nan")
    return df


def company_exposure_table(companies: Sequence[CompanyExposure], price: float) -> pd.DataFrame:
    """Per-company annual cost at one flat price, largest first."""
    df = pd.DataFrame(
        {
            "company": [c.name for c in companies],
            "total_emissions": [c.total_emissions for c in companies],
            "portfolio_intensity": [c.portfolio_intensity for c in companies],
        }
    )
    df["cost"] = df["total_emissions"] * float(price)
    return df.sort_values("cost", ascending=False, kind="mergesort").reset_index(drop=True)
