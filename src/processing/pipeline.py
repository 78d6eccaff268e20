"""
Living Burden Atlas - Index Pipeline
Normalize weights -> score areas -> classify scores, in one pure call

Called once when the dataset arrives and again on every weight change.
Every call starts from the raw collection; nothing is cached between calls.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from config.settings import get_settings
from src.export.style import (
    TLBI_PALETTE,
    build_legend_header,
    build_legend_items,
    build_step_expression,
)
from src.processing.classification import jenks_breaks
from src.processing.scoring import compute_tlbi
from src.processing.weights import WeightVector, normalize_weights
from src.utils.logging import get_logger

logger = get_logger(__name__)
settings = get_settings()


@dataclass
class IndexResult:
    """Everything the map layer needs after one recomputation"""
    collection: Dict[str, Any]
    breaks: List[float]
    fill_color: Union[str, List[Any]]
    legend: List[Dict[str, str]] = field(default_factory=list)
    legend_header: Dict[str, Any] = field(default_factory=dict)

    @property
    def classified(self) -> bool:
        return len(self.breaks) >= 2


def compute_index(
    raw_collection: Dict[str, Any],
    weights: Optional[WeightVector] = None,
    n_classes: Optional[int] = None,
) -> IndexResult:
    """
    Run the full TLBI pipeline.

    Args:
        raw_collection: GeoJSON FeatureCollection with raw indicator properties
        weights: Raw user weights (default: registry defaults)
        n_classes: Number of natural-breaks classes (default: settings.JENKS_CLASSES)

    Returns:
        IndexResult with the scored collection, class boundaries, step
        fill-color expression, legend rows and legend header
    """
    weights = weights or WeightVector.defaults()
    tlbi_field = settings.TLBI_FIELD

    scored = compute_tlbi(raw_collection, weights, field=tlbi_field)

    scores = [(f.get("properties") or {}).get(tlbi_field) for f in scored["features"]]
    breaks = jenks_breaks(scores, n_classes=n_classes)

    if not breaks:
        logger.warning("No composite scores available, rendering unclassified")

    return IndexResult(
        collection=scored,
        breaks=breaks,
        fill_color=build_step_expression(tlbi_field, breaks, TLBI_PALETTE),
        legend=build_legend_items(breaks, TLBI_PALETTE),
        legend_header=build_legend_header(normalize_weights(weights).as_dict()),
    )
