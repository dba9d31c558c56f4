# src/stockroom/utils/helpers.py

"""
Reusable Helper Utilities
==========================

Filesystem and validation helpers shared by the planning
pipeline, the chart module and the advice CLI.
"""

import os
import pandas as pd
from datetime import datetime


# ==========================================================
# Filesystem Utilities
# ==========================================================

def ensure_directory(path: str) -> None:
    """
    Create ``path`` (and parents) unless it already exists.

    Called before any report, chart or advice transcript is written.
    """
    os.makedirs(path, exist_ok=True)


def generate_timestamp(fmt: str = "%Y%m%d_%H%M") -> str:
    """
    Current local time as a filename-safe string.

    The default (YYYYMMDD_HHMM) suffixes report files; advice
    sessions pass a format with seconds.
    """
    return datetime.now().strftime(fmt)


# ==========================================================
# Validation Utilities
# ==========================================================

def validate_dataframe_not_empty(df: pd.DataFrame, name: str) -> None:
    """
    Raise ValueError when a planning frame has no rows.
    """
    if df.empty:
        raise ValueError(f"{name} dataframe is empty.")
