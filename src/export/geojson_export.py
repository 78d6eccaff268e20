"""
Living Burden Atlas - GeoJSON Boundary
Loads the raw indicator dataset and writes map-ready outputs

Data sources:
- Area features: community district GeoJSON with the four indicator properties

Outputs:
- exports/tlbi_latest.geojson (always current)
- exports/tlbi_style.json (breaks, fill-color expression, legend)
- exports/tlbi_{YYYYMMDD}.geojson (optional versioned snapshot)

Structure is validated here, at the boundary, so the index pipeline can
assume a well-formed FeatureCollection.
"""

import hashlib
import json
import os
from typing import Any, Dict, Optional

from src.utils.logging import get_logger

logger = get_logger(__name__)


class FeatureCollectionError(ValueError):
    """Raised when input is not a usable GeoJSON FeatureCollection"""


def validate_feature_collection(obj: Any) -> Dict[str, Any]:
    """
    Check the structure the index pipeline relies on.

    Args:
        obj: Parsed JSON

    Returns:
        The same object, once validated

    Raises:
        FeatureCollectionError: On the first structural problem found
    """
    if not isinstance(obj, dict):
        raise FeatureCollectionError(f"Expected a JSON object, got {type(obj).__name__}")

    if obj.get("type") != "FeatureCollection":
        raise FeatureCollectionError(f"Expected type 'FeatureCollection', got {obj.get('type')!r}")

    features = obj.get("features")
    if not isinstance(features, list):
        raise FeatureCollectionError("'features' must be a list")

    for i, feature in enumerate(features):
        if not isinstance(feature, dict):
            raise FeatureCollectionError(f"Feature {i} is not an object")
        properties = feature.get("properties")
        if properties is not None and not isinstance(properties, dict):
            raise FeatureCollectionError(f"Feature {i} has non-object properties")

    return obj


def load_feature_collection(path: str) -> Dict[str, Any]:
    """
    Read and validate a GeoJSON FeatureCollection from disk.

    Args:
        path: Path to the .geojson file

    Returns:
        Parsed FeatureCollection
    """
    logger.info(f"Loading feature collection from {path}")

    with open(path, encoding="utf-8") as f:
        try:
            obj = json.load(f)
        except json.JSONDecodeError as e:
            raise FeatureCollectionError(f"{path} is not valid JSON: {e}") from e

    collection = validate_feature_collection(obj)

    logger.info(f"Loaded {len(collection['features'])} features")

    return collection


def export_json(obj: Dict[str, Any], output_path: str, indent: Optional[int] = None) -> str:
    """
    Write a JSON document (GeoJSON or style sidecar).

    Args:
        obj: JSON-serializable object
        output_path: Output file path
        indent: JSON indentation (None for compact, 2 for readable)

    Returns:
        Path to exported file
    """
    logger.info(f"Exporting JSON to {output_path}")

    directory = os.path.dirname(output_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=indent, ensure_ascii=False)

    file_size = os.path.getsize(output_path)
    logger.info(f"Exported {output_path}, file size: {file_size / 1024:.1f} KB")

    return output_path


def calculate_file_checksum(file_path: str) -> str:
    """
    Calculate SHA256 checksum of file.

    Args:
        file_path: Path to file

    Returns:
        Hex digest of checksum
    """
    sha256 = hashlib.sha256()

    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            sha256.update(chunk)

    return sha256.hexdigest()
