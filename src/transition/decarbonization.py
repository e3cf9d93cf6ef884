"""Company-specific decarbonization rates."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from src.utils.logging_utils import get_logger

from .schema import CompanyExposure

logger = get_logger(__name__)

LOW_TARGET = 0.01
HIGH_TARGET = 0.06


def intensity_range(companies: Sequence[CompanyExposure]) -> Optional[Tuple[float, float]]:
    """(min, max) portfolio intensity over companies with intensity > 0, or None."""
    intensities = [c.portfolio_intensity for c in companies if c.portfolio_intensity > 0]
    if not intensities:
        return None
    return min(intensities), max(intensities)


def calculate_decarb_rate(portfolio_intensity: float, min_intensity: float, max_intensity: float) -> float:
    """
    Annual decarbonization rate for a company.

    Higher intensity relative to the cohort means a steeper target, scaled
    linearly between LOW_TARGET and HIGH_TARGET and clamped to that range.
    A degenerate cohort (max == min) gets LOW_TARGET.
    """
    spread = max_intensity - min_intensity
    normalized = (portfolio_intensity - min_intensity) / spread if spread > 0 else 0.0
    rate = LOW_TARGET + (HIGH_TARGET - LOW_TARGET) * normalized
    return min(max(rate, LOW_TARGET), HIGH_TARGET)


def decarb_rates(companies: Sequence[CompanyExposure]) -> List[float]:
    """Rates in company order, normalized over the cohort's intensity range."""
    bounds = intensity_range(companies)
    if bounds is None:
        if companies:
            logger.warning(
                f"No company among {len(companies)} has positive intensity; "
                f"using {LOW_TARGET} for all"
            )
        return [LOW_TARGET] * len(companies)

    lo, hi = bounds
    if hi == lo:
        logger.warning(f"Degenerate intensity range ({lo}); using {LOW_TARGET} for all")
    return [calculate_decarb_rate(c.portfolio_intensity, lo, hi) for c in companies]
