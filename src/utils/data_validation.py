"""
Data validation utilities for company exposure tables.
"""

from typing import List, Optional
import numpy as np
import pandas as pd
from src.utils.logging_utils import get_logger

logger = get_logger(__name__)


def validate_dataframe(
    df: pd.DataFrame,
    required_columns: Optional[List[str]] = None,
    numeric_columns: Optional[List[str]] = None,
    min_rows: int = 1
) -> bool:
    """
    Validate a pandas DataFrame meets basic requirements.

    Args:
        df: DataFrame to validate
        required_columns: List of column names that must be present
        numeric_columns: Columns that must hold numeric, non-infinite values
        min_rows: Minimum number of rows required

    Returns:
        True if validation passes, raises ValueError otherwise

    Raises:
        ValueError: If validation fails
    """
    if not isinstance(df, pd.DataFrame):
        raise ValueError("Input must be a pandas DataFrame")

    if len(df) < min_rows:
        raise ValueError(f"DataFrame must have at least {min_rows} rows")

    if required_columns:
        missing = set(required_columns) - set(df.columns)
        if missing:
            raise ValueError(f"Missing required columns: {sorted(missing)}")

    for col in numeric_columns or []:
        if col not in df.columns:
            continue
        if not pd.api.types.is_numeric_dtype(df[col]):
            raise ValueError(f"Column {col!r} must be numeric, got {df[col].dtype}")
        if np.isinf(df[col].to_numpy(dtype=float)).any():
            raise ValueError(f"Column {col!r} contains infinite values")

    logger.debug(f"DataFrame validation passed: {len(df)} rows, {len(df.columns)} columns")
    return True
