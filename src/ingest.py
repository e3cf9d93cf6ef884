"""
Data ingestion utilities for company carbon exposure tables.
"""

from pathlib import Path
from typing import List, Optional
import pandas as pd
from src.utils.logging_utils import get_logger
from src.utils.data_validation import validate_dataframe
from src.transition.schema import CompanyExposure

logger = get_logger(__name__)

# Headers used by the exposure export -> engine field names
SOURCE_COLUMNS = {
    "Company": "name",
    "Total Emissions (tCO₂)": "total_emissions",
    "Total Emissions (tCO2)": "total_emissions",
    "Portfolio Intensity": "portfolio_intensity",
    "HQ Country": "hq_country",
    "Mines": "mines",
    "Production (t)": "production",
}
REQUIRED_COLUMNS = ["name", "total_emissions", "portfolio_intensity"]


def load_dataset(
    file_path: str,
    file_type: Optional[str] = None,
    **kwargs
) -> pd.DataFrame:
    """
    Load a dataset from a file path.

    Supports CSV, Parquet, and JSON formats.

    Args:
        file_path: Path to the dataset file
        file_type: File type ('csv', 'parquet', 'json'). Auto-detected if None
        **kwargs: Additional arguments passed to pandas read functions

    Returns:
        Loaded DataFrame

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file type is unsupported
    """
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"Dataset file not found: {file_path}")

    # Auto-detect file type if not provided
    if file_type is None:
        file_type = path.suffix.lower().lstrip('.')

    logger.info(f"Loading dataset from {file_path} (type: {file_type})")

    if file_type == 'csv':
        df = pd.read_csv(path, **kwargs)
    elif file_type == 'parquet':
        df = pd.read_parquet(path, **kwargs)
    elif file_type == 'json':
        df = pd.read_json(path, **kwargs)
    else:
        raise ValueError(f"Unsupported file type: {file_type}")

    logger.info(f"Loaded dataset with {len(df)} rows and {len(df.columns)} columns")

    return df


def normalize_exposure_frame(df: pd.DataFrame) -> pd.DataFrame:
    """
    Map source headers onto engine field names and drop unusable rows.

    Rows without a company name or emissions are dropped with a warning;
    a missing intensity is treated as 0 (excluded from the cohort range).
    """
    df = df.rename(columns={k: v for k, v in SOURCE_COLUMNS.items() if k in df.columns})
    validate_dataframe(
        df,
        required_columns=REQUIRED_COLUMNS,
        numeric_columns=["total_emissions", "portfolio_intensity"],
        min_rows=0,
    )

    initial_rows = len(df)
    df = df.dropna(subset=["name", "total_emissions"])
    dropped = initial_rows - len(df)
    if dropped > 0:
        logger.warning(f"Dropped {dropped} rows with missing company name or emissions")

    df = df.copy()
    df["portfolio_intensity"] = df["portfolio_intensity"].fillna(0.0)
    return df


def frame_to_companies(df: pd.DataFrame) -> List[CompanyExposure]:
    """Build CompanyExposure records from a normalized exposure frame."""
    fields = [c for c in CompanyExposure.model_fields if c in df.columns]
    companies = []
    for record in df[fields].to_dict(orient="records"):
        clean = {k: v for k, v in record.items() if not pd.isna(v)}
        clean["name"] = str(clean["name"])
        if "hq_country" in clean:
            clean["hq_country"] = str(clean["hq_country"])
        if "mines" in clean:
            clean["mines"] = int(clean["mines"])
        companies.append(CompanyExposure(**clean))
    return companies


def load_companies(file_path: str, file_type: Optional[str] = None) -> List[CompanyExposure]:
    """
    Load company exposure records from a CSV/Parquet/JSON table.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If required columns are missing or not numeric
    """
    df = normalize_exposure_frame(load_dataset(file_path, file_type))
    companies = frame_to_companies(df)
    logger.info(f"Loaded {len(companies)} companies from {file_path}")
    return companies
