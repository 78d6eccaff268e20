"""
Living Burden Atlas - Indicator Normalization
Puts every indicator on a common 0-1 scale before blending

Method:
- Quantile rank fraction: position of a value in the ascending list of all
  observed values for that indicator, divided by (n - 1)

Rules:
- Ties resolve to the FIRST matching position (step-like, not mid-rank)
- Missing values are kept in the rank table as NaN, sorted last, and still
  count toward n
- A NaN value has no rank (NaN); the caller decides what it contributes
- A single-area table ranks its value at 0.0
"""

import math
from typing import Any, Iterable

import numpy as np
import pandas as pd

from src.utils.logging import get_logger

logger = get_logger(__name__)


def coerce_indicator_value(value: Any) -> float:
    """
    Convert a raw property value to float, NaN when it is not a number.

    None, booleans, containers and unparseable strings all become NaN.
    Numeric strings are accepted.
    """
    if value is None or isinstance(value, (bool, dict, list, tuple)):
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def build_rank_table(values: Iterable[float]) -> np.ndarray:
    """
    Build the ascending reference table for one indicator.

    NumPy places NaN after every number, so the table is a sorted run of
    numbers followed by the missing entries.
    """
    return np.sort(np.asarray(list(values), dtype=float), kind="stable")


def rank_fraction(table: np.ndarray, value: float) -> float:
    """
    Rank a single value against a rank table.

    Args:
        table: Output of build_rank_table
        value: Raw indicator value

    Returns:
        idx / (n - 1) where idx is the smallest index with value <= table[idx]
        (n - 1 when no entry qualifies). NaN for a NaN value, 0.0 when the
        table has a single entry.
    """
    if pd.isna(value):
        return math.nan

    n = len(table)
    if n <= 1:
        return 0.0

    numbers = table[: n - int(np.isnan(table).sum())]
    idx = int(np.searchsorted(numbers, value, side="left"))
    if idx >= len(numbers):
        idx = n - 1

    return idx / (n - 1)


def quantile_rank(values: pd.Series) -> pd.Series:
    """
    Rank every value of one indicator against all of its values.

    Vectorized form of rank_fraction over the whole column.

    Args:
        values: Raw indicator values (NaN for missing), one per area

    Returns:
        Series of rank fractions (0-1), NaN where the input is NaN
    """
    raw = values.to_numpy(dtype=float)
    table = build_rank_table(raw)
    n = len(table)
    missing = np.isnan(raw)

    if n == 0:
        return pd.Series(np.nan, index=values.index, dtype=float)

    if missing.all():
        logger.warning(f"Indicator {values.name} has all NaN values")
        return pd.Series(np.nan, index=values.index, dtype=float)

    if n == 1:
        logger.warning(f"Indicator {values.name} has a single value, ranking it at 0")
        return pd.Series(0.0, index=values.index, dtype=float)

    numbers = table[: n - int(missing.sum())]
    idx = np.searchsorted(numbers, raw, side="left")
    idx = np.where(idx >= len(numbers), n - 1, idx)

    ranks = idx / (n - 1)
    ranks[missing] = np.nan

    logger.debug(
        f"Ranked {values.name}: n={n}, missing={int(missing.sum())}, "
        f"distinct={len(np.unique(numbers))}"
    )

    return pd.Series(ranks, index=values.index, dtype=float)
