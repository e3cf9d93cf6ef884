"""Value objects and run configuration for the transition risk engine."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.config import Config

START_YEAR = 2025
N_YEARS = 16
END_YEAR = START_YEAR + N_YEARS - 1
HORIZON_CHOICES = (2030, 2035, 2040)


class ScenarioKind(str, Enum):
    """NGFS-style transition scenarios. The set is closed."""

    ORDERLY = "orderly"
    DISORDERLY = "disorderly"
    HOTHOUSE = "hothouse"


class CompanyExposure(BaseModel):
    """Carbon exposure of one mining company, as loaded from the exposure table."""

    name: str = Field(..., min_length=1, description="Company name")
    total_emissions: float = Field(..., ge=0, description="Total emissions (tCO2e per year)")
    portfolio_intensity: float = Field(..., description="Emissions per tonne of production")
    hq_country: Optional[str] = Field(default=None, description="Headquarter country")
    mines: Optional[int] = Field(default=None, ge=0, description="Number of mines held")
    production: Optional[float] = Field(default=None, ge=0, description="Production (t)")

    model_config = ConfigDict(frozen=True)

    @field_validator("total_emissions", "portfolio_intensity")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("value must be finite")
        return v


@dataclass(frozen=True)
class ScenarioYearPoint:
    year: int
    price: float  # USD per tCO2e
    intensity_factor: float  # relative to START_YEAR


@dataclass(frozen=True)
class CompanyYearPoint:
    year: int
    emissions: float
    cost: float


@dataclass(frozen=True)
class CompanyTrajectory:
    company: str
    scenario: ScenarioKind
    decarb_rate: float
    points: Tuple[CompanyYearPoint, ...]


@dataclass(frozen=True)
class PortfolioYearPoint:
    year: int
    total_cost: float
    total_emissions: float
    price: float  # nominal scenario price, unshocked


@dataclass(frozen=True)
class ShockParameters:
    price_vol: float = 0.2  # log-price volatility per year
    intensity_vol: float = 0.1
    correlation: float = 0.25  # price/intensity shock correlation
    intensity_floor: float = 0.6
    intensity_cap: float = 1.4

    def __post_init__(self):
        if self.price_vol < 0 or self.intensity_vol < 0:
            raise ValueError("volatilities must be non-negative")
        if not -1.0 <= self.correlation <= 1.0:
            raise ValueError(f"correlation must be within [-1, 1], got {self.correlation}")
        if self.intensity_floor > self.intensity_cap:
            raise ValueError("intensity_floor must not exceed intensity_cap")


@dataclass(frozen=True)
class MonteCarloPath:
    path_id: int
    scenario: ScenarioKind
    year: int
    portfolio_cost: float
    price: float  # shocked
    intensity_factor: float  # shocked


@dataclass(frozen=True)
class VaRMetrics:
    scenario: ScenarioKind
    year: int
    alpha: float
    mean: float
    std: float
    median: float
    p5: float
    p95: float
    var: float
    cvar: float

    @classmethod
    def zero(cls, scenario: ScenarioKind, year: int, alpha: float) -> "VaRMetrics":
        """Metrics for an empty population."""
        return cls(scenario, year, alpha, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class UncertaintyBand:
    year: int
    mean: float
    p5: float
    p25: float
    p75: float
    p95: float


class MonteCarloConfig(BaseModel):
    """Monte Carlo settings."""
    n_paths: int = Field(default=Config.DEFAULT_MC_PATHS, ge=0, description="Paths per scenario")
    seed: int = Field(default=Config.DEFAULT_RANDOM_SEED, description="Random seed for reproducibility")
    alpha: float = Field(default=Config.DEFAULT_VAR_ALPHA, gt=0, lt=1, description="VaR confidence level")

    model_config = ConfigDict(frozen=True)


class OutputsConfig(BaseModel):
    """Output configuration."""
    out_dir: str = Field(default="runs", description="Output directory")
    save_paths: bool = Field(default=True, description="Write the full Monte Carlo path table")

    model_config = ConfigDict(frozen=True)


class RunConfig(BaseModel):
    """Schema for engine run configuration files."""

    name: str = Field(..., description="Run name")
    description: Optional[str] = Field(default=None, description="Run description")
    companies_path: Optional[str] = Field(default=None, description="Company exposure table")
    horizon_year: int = Field(default=END_YEAR, description="Year at which VaR metrics are taken")
    scenarios: Tuple[ScenarioKind, ...] = Field(
        default=tuple(ScenarioKind), description="Scenarios to simulate"
    )
    monte_carlo: MonteCarloConfig = Field(default_factory=MonteCarloConfig)
    outputs: OutputsConfig = Field(default_factory=OutputsConfig)

    model_config = ConfigDict(frozen=True)

    @field_validator("horizon_year")
    @classmethod
    def validate_horizon_year(cls, v: int) -> int:
        """Horizon must be one of the generated scenario years."""
        if not START_YEAR <= v <= END_YEAR:
            raise ValueError(f"horizon_year must be within {START_YEAR}-{END_YEAR}, got {v}")
        return v

    @field_validator("scenarios")
    @classmethod
    def validate_scenarios(cls, v: Tuple[ScenarioKind, ...]) -> Tuple[ScenarioKind, ...]:
        if not v:
            raise ValueError("at least one scenario is required")
        if len(set(v)) != len(v):
            raise ValueError("scenarios must not repeat")
        return v


def load_run_config(path: str) -> RunConfig:
    """Load and validate a run configuration from a YAML file."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Run config file not found: {path}")

    with open(config_path, "r") as f:
        data = yaml.safe_load(f) or {}

    return RunConfig(**data)
