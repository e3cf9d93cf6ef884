from __future__ import annotations

import pandas as pd
import pytest

from src.ingest import load_companies, load_dataset


def test_load_sample_exposure_table(sample_companies_path):
    """Source headers are mapped onto CompanyExposure fields."""
    companies = load_companies(str(sample_companies_path))
    assert len(companies) == 8
    first = companies[0]
    assert first.name == "Andes Copper Holdings"
    assert first.total_emissions == 2450000.0
    assert first.portfolio_intensity == 0.04
    assert first.hq_country == "CHL"
    assert first.mines == 6


def test_engine_headers_and_dropped_rows(tmp_path):
    """Rows without emissions are dropped; missing intensity becomes 0."""
    path = tmp_path / "companies.csv"
    pd.DataFrame({
        "name": ["a", "b", "c"],
        "total_emissions": [100.0, None, 300.0],
        "portfolio_intensity": [0.02, 0.05, None],
    }).to_csv(path, index=False)

    companies = load_companies(str(path))
    assert [c.name for c in companies] == ["a", "c"]
    assert companies[1].portfolio_intensity == 0.0


def test_json_table(tmp_path):
    path = tmp_path / "companies.json"
    pd.DataFrame({
        "Company": ["x"],
        "Total Emissions (tCO₂)": [10.0],
        "Portfolio Intensity": [0.1],
    }).to_json(path)
    companies = load_companies(str(path))
    assert companies[0].name == "x"


def test_missing_required_column(tmp_path):
    path = tmp_path / "companies.csv"
    pd.DataFrame({"name": ["a"], "total_emissions": [1.0]}).to_csv(path, index=False)
    with pytest.raises(ValueError, match="Missing required columns"):
        load_companies(str(path))


def test_non_numeric_emissions(tmp_path):
    path = tmp_path / "companies.csv"
    pd.DataFrame({
        "name": ["a"],
        "total_emissions": ["lots"],
        "portfolio_intensity": [0.1],
    }).to_csv(path, index=False)
    with pytest.raises(ValueError, match="must be numeric"):
        load_companies(str(path))


def test_load_dataset_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_dataset(str(tmp_path / "nope.csv"))
    path = tmp_path / "companies.txt"
    path.write_text("name\n")
    with pytest.raises(ValueError, match="Unsupported file type"):
        load_dataset(str(path))
