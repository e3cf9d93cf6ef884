from __future__ import annotations

import math

from src.transition.exposure import company_exposure_table, fixed_price_exposure


def test_fixed_price_exposure(three_companies):
    """Cost scales linearly with the flat price; increases are relative to $50."""
    df = fixed_price_exposure(three_companies)
    assert list(df["price"]) == [50.0, 100.0, 150.0, 200.0]
    assert list(df["cost"]) == [300000.0, 600000.0, 900000.0, 1200000.0]
    assert [round(x, 9) for x in df["increase_pct"]] == [0.0, 100.0, 200.0, 300.0]


def test_fixed_price_exposure_empty_cohort():
    df = fixed_price_exposure([])
    assert (df["cost"] == 0.0).all()
    assert df["increase_pct"].isna().all()


def test_company_exposure_table_sorted(three_companies):
    df = company_exposure_table(three_companies, 100)
    assert list(df["company"]) == ["Gamma", "Beta", "Alpha"]
    assert math.isclose(df.loc[0, "cost"], 300000.0)
