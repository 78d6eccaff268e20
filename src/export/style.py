"""
Living Burden Atlas - Choropleth Style Output
Turns natural-breaks boundaries into what the map layer consumes

Outputs:
- Stepped fill-color expression keyed on the TLBI property
- Legend header (index title + weighted components from the indicator registry)
- Legend entries (color + "low – high" label) per class
- Score summary for logs and export reports
"""

from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np

from config.settings import get_settings
from src.processing.indicator_registry import get_indicator
from src.utils.logging import get_logger

logger = get_logger(__name__)
settings = get_settings()

# Diverging blue-to-red ramp, low burden to high burden
TLBI_PALETTE: List[str] = ["#2166ac", "#67a9cf", "#d1e5f0", "#fddbc7", "#ef8a62", "#b2182b"]

INDEX_TITLE = "Total Living Burden Index"


def build_step_expression(
    field: str, breaks: Sequence[float], palette: Optional[Sequence[str]] = None
) -> Union[str, List[Any]]:
    """
    Build a Mapbox "step" expression from class boundaries.

    ["step", ["get", field], c0, b1, c1, b2, c2, ...] where the first and
    last boundaries (min and max) are skipped. A score equal to an upper
    bound b_i takes color c_i. Step stops must be strictly ascending, so a
    boundary that does not exceed the previous stop is dropped.

    Args:
        field: Feature property holding the score
        breaks: Output of jenks_breaks
        palette: Ordered colors, one per class (default: TLBI_PALETTE)

    Returns:
        Expression list, or settings.UNCLASSIFIED_COLOR when fewer than two
        boundaries are available
    """
    palette = list(palette or TLBI_PALETTE)

    if len(breaks) < 2:
        return settings.UNCLASSIFIED_COLOR

    if len(breaks) - 1 > len(palette):
        raise ValueError(f"{len(breaks) - 1} classes but only {len(palette)} colors")

    expression: List[Any] = ["step", ["get", field], palette[0]]

    previous = None
    for i in range(1, len(breaks) - 1):
        if previous is not None and breaks[i] <= previous:
            logger.debug(f"Dropping non-increasing step stop {breaks[i]}")
            continue
        expression.extend([breaks[i], palette[i]])
        previous = breaks[i]

    return expression


def build_legend_items(
    breaks: Sequence[float],
    palette: Optional[Sequence[str]] = None,
    decimals: Optional[int] = None,
) -> List[Dict[str, str]]:
    """
    Legend rows for the TLBI classes.

    Row i spans breaks[i] to breaks[i + 1]: from the previous class's upper
    bound (or the minimum) up to this class's upper bound.

    Args:
        breaks: Output of jenks_breaks
        palette: Ordered colors, one per class (default: TLBI_PALETTE)
        decimals: Label precision (default: settings.LEGEND_DECIMALS)

    Returns:
        [{"color": ..., "label": "0.12 – 0.34"}, ...], empty without breaks
    """
    palette = list(palette or TLBI_PALETTE)
    decimals = settings.LEGEND_DECIMALS if decimals is None else decimals

    return [
        {
            "color": palette[i],
            "label": f"{breaks[i]:.{decimals}f} – {breaks[i + 1]:.{decimals}f}",
        }
        for i in range(len(breaks) - 1)
    ]


def build_legend_header(weights: Dict[str, float]) -> Dict[str, Any]:
    """
    Legend heading: the index title and what went into it.

    Args:
        weights: Normalized weight per indicator key

    Returns:
        {"title": ..., "components": [{"key", "title", "unit", "weight"}, ...]}
    """
    components = []
    for key, weight in weights.items():
        indicator = get_indicator(key)
        components.append({
            "key": key,
            "title": indicator.title,
            "unit": indicator.unit,
            "weight": round(weight, 4),
        })

    return {"title": INDEX_TITLE, "components": components}


def summarize_scores(collection: Dict[str, Any], field: Optional[str] = None) -> Dict[str, Any]:
    """
    Summary statistics of the scores written on a collection.

    Args:
        collection: Scored FeatureCollection
        field: Score property (default: settings.TLBI_FIELD)

    Returns:
        Dict with count, scored, missing, min, max and mean (None when no
        area has a score)
    """
    field = field or settings.TLBI_FIELD

    values = [
        (feature.get("properties") or {}).get(field)
        for feature in collection.get("features", [])
    ]
    scores = np.array([v for v in values if v is not None], dtype=float)

    return {
        "count": len(values),
        "scored": int(scores.size),
        "missing": len(values) - int(scores.size),
        "min": float(scores.min()) if scores.size else None,
        "max": float(scores.max()) if scores.size else None,
        "mean": float(scores.mean()) if scores.size else None,
    }
