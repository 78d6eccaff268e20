"""
Pytest configuration and shared fixtures for Living Burden Atlas tests.
"""

import pytest
from typing import Any, Dict, List, Optional


def _make_feature(
    district_id: str,
    rent_income_ratio: Optional[float] = None,
    park_area_ratio: Optional[float] = None,
    food_density: Optional[float] = None,
    avg_commute_time: Optional[float] = None,
) -> Dict[str, Any]:
    """Build a GeoJSON feature with a small polygon geometry."""
    return {
        "type": "Feature",
        "properties": {
            "Location_x": district_id,
            "rent_income_ratio": rent_income_ratio,
            "park_area_ratio": park_area_ratio,
            "food_density": food_density,
            "avg_commute_time": avg_commute_time,
        },
        "geometry": {
            "type": "Polygon",
            "coordinates": [[[-73.9, 40.7], [-73.8, 40.7], [-73.8, 40.8], [-73.9, 40.7]]],
        },
    }


def _make_collection(features: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"type": "FeatureCollection", "name": "cd_final_cleaned", "features": features}


@pytest.fixture
def sample_collection() -> Dict[str, Any]:
    """Six districts; cd104 has no economic burden, cd105/cd106 miss a secondary value."""
    return _make_collection([
        _make_feature("cd101", 0.25, 0.10, 1.5, 35.0),
        _make_feature("cd102", 0.30, 0.02, 0.8, 44.5),
        _make_feature("cd103", 0.22, 0.20, 3.2, 29.8),
        _make_feature("cd104", None, 0.05, 2.0, 38.0),
        _make_feature("cd105", 0.35, None, 0.2, 47.7),
        _make_feature("cd106", 0.28, 0.15, None, 33.1),
    ])


@pytest.fixture
def three_area_collection() -> Dict[str, Any]:
    """Economic burden 1, 2, 3 and nothing else."""
    return _make_collection([
        _make_feature("cd201", rent_income_ratio=1.0),
        _make_feature("cd202", rent_income_ratio=2.0),
        _make_feature("cd203", rent_income_ratio=3.0),
    ])


@pytest.fixture
def empty_collection() -> Dict[str, Any]:
    return _make_collection([])


@pytest.fixture
def make_feature():
    """Factory for single features with chosen indicator values."""
    return _make_feature


@pytest.fixture
def make_collection():
    """Factory wrapping features into a FeatureCollection."""
    return _make_collection
