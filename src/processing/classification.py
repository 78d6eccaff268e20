"""
Living Burden Atlas - Natural Breaks Classification
Partitions composite scores into visually distinct classes for the choropleth

Method:
- Fisher-Jenks natural breaks (optimal, deterministic): k contiguous groups of
  the sorted scores minimizing the within-group sum of squared deviations

Breakpoints:
- [min, upper bound of class 1, ..., upper bound of class k-1, max]
- Every boundary is an observed score
- Only finite scores take part; null and NaN scores are ignored
- No finite scores => [] ("render unclassified")
- Fewer distinct scores than k => fewer classes, never an error
"""

from typing import Iterable, List, Optional

import mapclassify
import numpy as np
import pandas as pd

from config.settings import get_settings
from src.utils.logging import get_logger

logger = get_logger(__name__)
settings = get_settings()


def clean_scores(values: Iterable) -> np.ndarray:
    """
    Keep only finite numeric scores.

    Args:
        values: Composite scores, may contain None, NaN or inf

    Returns:
        Float array of the finite scores, input order preserved
    """
    numeric = pd.to_numeric(pd.Series(list(values), dtype=object), errors="coerce")
    array = numeric.to_numpy(dtype=float)
    return array[np.isfinite(array)]


def jenks_breaks(values: Iterable, n_classes: Optional[int] = None) -> List[float]:
    """
    Compute natural-breaks boundaries for a set of scores.

    Args:
        values: Composite scores (nulls allowed)
        n_classes: Number of classes (default: settings.JENKS_CLASSES)

    Returns:
        Ascending list of class boundaries, length 0 or at most n_classes + 1
    """
    if n_classes is None:
        n_classes = settings.JENKS_CLASSES
    if n_classes < 1:
        raise ValueError(f"n_classes must be positive, got {n_classes}")

    clean = np.sort(clean_scores(values))

    if clean.size == 0:
        logger.warning("No finite scores to classify")
        return []

    distinct = len(np.unique(clean))
    k = min(n_classes, distinct)
    if k < n_classes:
        logger.warning(f"Only {distinct} distinct scores, using {k} classes instead of {n_classes}")

    if k == 1:
        return [float(clean[0]), float(clean[-1])]

    classifier = mapclassify.FisherJenks(clean, k=k)

    # bins holds each class's upper bound; the last one is the max
    breaks = [float(clean[0])] + [float(b) for b in classifier.bins[:-1]] + [float(clean[-1])]

    logger.info(f"Natural breaks (k={k}, n={clean.size}): {[round(b, 4) for b in breaks]}")

    return breaks
