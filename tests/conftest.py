from __future__ import annotations

from pathlib import Path

import pytest

from src.transition.schema import CompanyExposure

REPO_ROOT = Path(__file__).resolve().parent.parent
SAMPLE_COMPANIES = REPO_ROOT / "data" / "sample_company_exposure.csv"


@pytest.fixture
def three_companies():
    """Cohort with emissions [1000, 2000, 3000] and intensities [0.01, 0.02, 0.03]."""
    return [
        CompanyExposure(name="Alpha", total_emissions=1000.0, portfolio_intensity=0.01),
        CompanyExposure(name="Beta", total_emissions=2000.0, portfolio_intensity=0.02),
        CompanyExposure(name="Gamma", total_emissions=3000.0, portfolio_intensity=0.03),
    ]


@pytest.fixture
def sample_companies_path() -> Path:
    return SAMPLE_COMPANIES
