"""
Living Burden Atlas - Indicator Registry
Single source of truth for the four indicators blended into the TLBI

This registry defines:
- Canonical indicator keys
- GeoJSON property names read from each area
- Titles and units used in legends
- Default weights for the interactive weight controls
- Which indicator gates whether a composite score exists at all

NO indicator should be scored without being registered here.
"""

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class IndicatorDefinition:
    """
    Definition of a single burden indicator
    """
    key: str  # Canonical key, matches the WeightVector field
    field: str  # Property name on each GeoJSON feature
    title: str  # Human-readable title
    unit: str  # Human-readable unit (may be empty)
    default_weight: float  # Initial weight before user adjustment
    primary: bool = False  # Missing primary value => no composite score


INDICATORS: List[IndicatorDefinition] = [
    IndicatorDefinition(
        key="economic",
        field="rent_income_ratio",
        title="Economic Burden (Rent / Income)",
        unit="",
        default_weight=0.4,
        primary=True,
    ),
    IndicatorDefinition(
        key="park",
        field="park_area_ratio",
        title="Park Area Ratio",
        unit="",
        default_weight=0.2,
    ),
    IndicatorDefinition(
        key="food",
        field="food_density",
        title="Number of Retail food Stores",
        unit="per km²",
        default_weight=0.2,
    ),
    IndicatorDefinition(
        key="commute",
        field="avg_commute_time",
        title="Average Commute Time",
        unit="minutes",
        default_weight=0.2,
    ),
]

INDICATORS_BY_KEY: Dict[str, IndicatorDefinition] = {i.key: i for i in INDICATORS}


def get_indicator(key: str) -> IndicatorDefinition:
    """Get indicator definition by key"""
    if key not in INDICATORS_BY_KEY:
        raise ValueError(f"Unknown indicator: {key}")
    return INDICATORS_BY_KEY[key]


def get_primary_indicator() -> IndicatorDefinition:
    """Get the indicator whose presence gates the composite score"""
    return next(i for i in INDICATORS if i.primary)


def default_weights() -> Dict[str, float]:
    """Default weight per indicator key, in registry order"""
    return {i.key: i.default_weight for i in INDICATORS}
