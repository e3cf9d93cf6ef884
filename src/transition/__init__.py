"""Carbon transition scenario engine for mining company exposure."""
from .schema import CompanyExposure, RunConfig, ScenarioKind, load_run_config
from .scenarios import generate_scenarios
from .trajectory import calculate_portfolio_trajectory
from .monte_carlo import run_monte_carlo
from .metrics import calculate_var, uncertainty_bands
from .engine import EngineResult, ScenarioEngine, run_engine

__all__ = [
    "CompanyExposure",
    "RunConfig",
    "ScenarioKind",
    "load_run_config",
    "generate_scenarios",
    "calculate_portfolio_trajectory",
    "run_monte_carlo",
    "calculate_var",
    "uncertainty_bands",
    "EngineResult",
    "ScenarioEngine",
    "run_engine",
]
