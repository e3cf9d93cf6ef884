"""
Utility modules for the transition risk engine.
"""

from .logging_utils import setup_logger, get_logger
from .data_validation import validate_dataframe

__all__ = [
    "setup_logger",
    "get_logger",
    "validate_dataframe",
]
