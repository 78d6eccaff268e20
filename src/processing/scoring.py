"""
Living Burden Atlas - Composite Scoring
Blends the four ranked indicators into the Total Living Burden Index (TLBI)

Rules:
- Weights are normalized to sum to 1 before use
- No primary indicator (economic burden) => TLBI is null
- A missing secondary indicator contributes 0, its weight is NOT
  redistributed over the indicators that are present
- Input features are never modified; a new collection is returned
"""

import copy
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from config.settings import get_settings
from src.processing.indicator_registry import INDICATORS, get_primary_indicator
from src.processing.normalization import coerce_indicator_value, quantile_rank
from src.processing.weights import WeightVector, normalize_weights
from src.utils.logging import get_logger

logger = get_logger(__name__)
settings = get_settings()


def extract_indicator_frame(collection: Dict[str, Any]) -> pd.DataFrame:
    """
    Pull the raw indicator values out of a feature collection.

    Args:
        collection: GeoJSON FeatureCollection

    Returns:
        DataFrame with one row per feature (same order) and one float
        column per indicator key, NaN where missing or not numeric
    """
    rows = [feature.get("properties") or {} for feature in collection.get("features", [])]

    return pd.DataFrame(
        {
            indicator.key: [coerce_indicator_value(p.get(indicator.field)) for p in rows]
            for indicator in INDICATORS
        },
        dtype=float,
    )


def calculate_composite_scores(frame: pd.DataFrame, weights: WeightVector) -> pd.Series:
    """
    Calculate the TLBI for every area.

    Args:
        frame: Output of extract_indicator_frame
        weights: Normalized weights

    Returns:
        Series of composite scores, NaN where the primary indicator is missing
    """
    if frame.empty:
        return pd.Series(np.nan, index=frame.index, dtype=float)

    ranks = pd.DataFrame({i.key: quantile_rank(frame[i.key]) for i in INDICATORS})

    weight_vector = np.array([getattr(weights, i.key) for i in INDICATORS], dtype=float)
    contributions = ranks.fillna(0.0).to_numpy(dtype=float) * weight_vector

    composite = pd.Series(contributions.sum(axis=1), index=frame.index, dtype=float)

    primary = get_primary_indicator()
    composite[frame[primary.key].isna()] = np.nan

    return composite


def _with_score(feature: Dict[str, Any], field: str, score: Optional[float]) -> Dict[str, Any]:
    record = copy.deepcopy(feature)
    record["properties"] = {**(record.get("properties") or {}), field: score}
    return record


def compute_tlbi(
    collection: Dict[str, Any], weights: WeightVector, field: Optional[str] = None
) -> Dict[str, Any]:
    """
    Score every area of a feature collection.

    Args:
        collection: Raw GeoJSON FeatureCollection (left untouched)
        weights: Raw user weights (normalized here)
        field: Property to write the score to (default: settings.TLBI_FIELD)

    Returns:
        New FeatureCollection, structurally identical to the input, with the
        score property set to a float or None on every feature
    """
    field = field or settings.TLBI_FIELD

    normalized = normalize_weights(weights)
    frame = extract_indicator_frame(collection)
    scores = calculate_composite_scores(frame, normalized)

    values: List[Optional[float]] = [None if pd.isna(s) else float(s) for s in scores]

    scored = {k: copy.deepcopy(v) for k, v in collection.items() if k != "features"}
    scored["features"] = [
        _with_score(feature, field, value)
        for feature, value in zip(collection.get("features", []), values)
    ]

    logger.info(
        f"Computed {field} for {len(values)} areas: "
        f"scored={int(scores.notna().sum())}, missing={int(scores.isna().sum())}, "
        f"weights={normalized.as_dict()}"
    )

    return scored
