"""
FastAPI application for the carbon transition risk engine.

This module provides HTTP endpoints for scenario pathways, deterministic
portfolio trajectories and Monte Carlo risk metrics. It wraps the core
engine functions with a REST API interface.
"""

from typing import List, Optional
from dataclasses import asdict
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field
from src.config import Config
from src.utils.logging_utils import get_logger, setup_logger
from src.transition.engine import ScenarioEngine
from src.transition.scenarios import generate_scenarios, scenario_for
from src.transition.schema import (
    END_YEAR,
    CompanyExposure,
    MonteCarloConfig,
    RunConfig,
    ScenarioKind,
)
from src.transition.trajectory import calculate_portfolio_trajectory

# Set up logging
setup_logger(__name__, Config.LOG_LEVEL)
logger = get_logger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Carbon Transition Risk Engine API",
    description="API for carbon price scenario trajectories and Monte Carlo VaR",
    version="0.1.0"
)

engine = ScenarioEngine()


# Request/Response models
class TrajectoryRequest(BaseModel):
    """Request model for a deterministic portfolio trajectory."""
    companies: List[CompanyExposure] = Field(..., description="Company exposure records")
    scenario: ScenarioKind = Field(..., description="Scenario kind")


class TrajectoryPoint(BaseModel):
    year: int
    total_cost: float
    total_emissions: float
    price: float


class TrajectoryResponse(BaseModel):
    """Response model for a deterministic portfolio trajectory."""
    scenario: ScenarioKind
    points: List[TrajectoryPoint]


class SimulationRequest(BaseModel):
    """Request model for Monte Carlo risk metrics."""
    companies: List[CompanyExposure] = Field(..., description="Company exposure records")
    horizon_year: int = Field(default=END_YEAR, description="Year at which VaR is taken")
    scenarios: Optional[List[ScenarioKind]] = Field(default=None, description="Scenarios to run (default all)")
    n_paths: int = Field(default=Config.DEFAULT_MC_PATHS, ge=0, le=20000, description="Paths per scenario")
    seed: int = Field(default=Config.DEFAULT_RANDOM_SEED, description="Random seed")
    alpha: float = Field(default=Config.DEFAULT_VAR_ALPHA, gt=0, lt=1, description="VaR confidence level")


class VaRResponseItem(BaseModel):
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


class BandPoint(BaseModel):
    year: int
    mean: float
    p5: float
    p25: float
    p75: float
    p95: float


class SimulationResponse(BaseModel):
    """Response model for Monte Carlo risk metrics."""
    horizon_year: int
    var_metrics: List[VaRResponseItem]
    bands: dict[str, List[BandPoint]]


@app.get("/")
async def root() -> dict:
    """Root endpoint."""
    return {
        "message": "Carbon Transition Risk Engine API",
        "version": "0.1.0",
        "endpoints": ["/scenarios", "/trajectory", "/simulate"]
    }


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/scenarios")
async def scenarios_endpoint() -> dict[str, list]:
    """Return the three carbon price / intensity pathways."""
    return {
        kind.value: [asdict(p) for p in points]
        for kind, points in generate_scenarios().items()
    }


@app.post("/trajectory", response_model=TrajectoryResponse)
async def trajectory_endpoint(req: TrajectoryRequest) -> TrajectoryResponse:
    """Deterministic portfolio cost and emissions per year under one scenario."""
    logger.info(f"Received trajectory request: {req.scenario.value}, {len(req.companies)} companies")
    points = calculate_portfolio_trajectory(req.companies, scenario_for(req.scenario), req.scenario)
    return TrajectoryResponse(
        scenario=req.scenario,
        points=[TrajectoryPoint(**asdict(p)) for p in points],
    )


@app.post("/simulate", response_model=SimulationResponse)
async def simulate_endpoint(req: SimulationRequest) -> SimulationResponse:
    """
    Run Monte Carlo simulation and return VaR metrics and uncertainty bands.

    Raises:
        HTTPException: 400 for invalid configuration, 500 if the simulation fails
    """
    logger.info(
        f"Received simulation request: {len(req.companies)} companies, "
        f"horizon={req.horizon_year}, n_paths={req.n_paths}, seed={req.seed}"
    )

    try:
        config = RunConfig(
            name="api",
            horizon_year=req.horizon_year,
            scenarios=tuple(req.scenarios) if req.scenarios else tuple(ScenarioKind),
            monte_carlo=MonteCarloConfig(n_paths=req.n_paths, seed=req.seed, alpha=req.alpha),
        )
    except ValueError as e:
        logger.error(f"Validation error: {e}")
        raise HTTPException(
            status_code=400,
            detail=f"Validation error: {str(e)}"
        )

    try:
        result = engine.run(req.companies, config)
    except ValueError as e:
        logger.error(f"Validation error: {e}")
        raise HTTPException(
            status_code=400,
            detail=f"Validation error: {str(e)}"
        )
    except Exception as e:
        logger.error(f"Simulation error: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Simulation failed: {str(e)}"
        )

    logger.info(f"Simulation completed: {len(result.all_paths)} path records")

    return SimulationResponse(
        horizon_year=config.horizon_year,
        var_metrics=[VaRResponseItem(**asdict(m)) for m in result.var_metrics.values()],
        bands={
            kind.value: [BandPoint(**asdict(b)) for b in bands]
            for kind, bands in result.bands.items()
        },
    )


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting Carbon Transition Risk Engine API on {Config.API_HOST}:{Config.API_PORT}")
    uvicorn.run(
        "src.api:app",
        host=Config.API_HOST,
        port=Config.API_PORT,
        reload=Config.API_DEBUG
    )
