"""
Living Burden Atlas - Pipeline Orchestration

Computes the TLBI for a dataset file and writes map-ready outputs.

Pipeline stages:
1. Load and validate the raw FeatureCollection
2. Normalize weights, score areas, classify scores
3. Export scored GeoJSON + style sidecar

Usage:
    python -m src.run_pipeline --input cd_final_cleaned.geojson
    python -m src.run_pipeline --weights 0.5 0.2 0.2 0.1 --versioned
"""

import argparse
import json
import os
import sys
from datetime import datetime
from typing import Any, Dict, Optional

from config.settings import get_settings
from src.export.geojson_export import (
    FeatureCollectionError,
    calculate_file_checksum,
    export_json,
    load_feature_collection,
)
from src.export.style import summarize_scores
from src.processing.pipeline import IndexResult, compute_index
from src.processing.weights import WeightVector
from src.utils.logging import get_logger, setup_logging

logger = get_logger("pipeline")
settings = get_settings()


def run_export(
    result: IndexResult, output_dir: Optional[str] = None, versioned: bool = False
) -> Dict[str, Any]:
    """
    Write the scored collection and its style sidecar.

    Args:
        result: Output of compute_index
        output_dir: Target directory (default: settings.EXPORT_DIR)
        versioned: If True, also write a dated GeoJSON snapshot

    Returns:
        Dict with export paths and checksum
    """
    output_dir = output_dir or settings.EXPORT_DIR

    style = {
        "field": settings.TLBI_FIELD,
        "breaks": result.breaks,
        "fill_color": result.fill_color,
        "legend_header": result.legend_header,
        "legend": result.legend,
    }

    latest_path = export_json(result.collection, os.path.join(output_dir, "tlbi_latest.geojson"))
    style_path = export_json(style, os.path.join(output_dir, "tlbi_style.json"), indent=2)

    versioned_path = None
    if versioned:
        version = datetime.now().strftime("%Y%m%d")
        versioned_path = export_json(
            result.collection, os.path.join(output_dir, f"tlbi_{version}.geojson"), indent=2
        )

    return {
        "latest_path": latest_path,
        "style_path": style_path,
        "versioned_path": versioned_path,
        "checksum": calculate_file_checksum(latest_path),
    }


def main():
    """Main pipeline entry point"""
    parser = argparse.ArgumentParser(
        description="Compute the Total Living Burden Index and export map outputs"
    )

    parser.add_argument(
        "--input",
        type=str,
        default=settings.SOURCE_GEOJSON_PATH,
        help="Raw GeoJSON FeatureCollection with indicator properties",
    )
    parser.add_argument(
        "--weights",
        type=float,
        nargs=4,
        metavar=("ECONOMIC", "PARK", "FOOD", "COMMUTE"),
        default=None,
        help="Raw indicator weights (normalized to sum to 1)",
    )
    parser.add_argument(
        "--classes",
        type=int,
        default=settings.JENKS_CLASSES,
        help="Number of natural-breaks classes",
    )
    parser.add_argument(
        "--output-dir", type=str, default=settings.EXPORT_DIR, help="Export directory"
    )
    parser.add_argument("--versioned", action="store_true", help="Create versioned snapshot")
    parser.add_argument(
        "--log-level", type=str, default=settings.LOG_LEVEL, help="Log level (e.g. DEBUG, INFO)"
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=settings.LOG_DIR,
        help="Directory for a dated log file (empty: stderr only)",
    )

    args = parser.parse_args()

    try:
        setup_logging("pipeline", level=args.log_level, log_dir=args.log_dir)
    except ValueError as e:
        parser.error(str(e))

    start_time = datetime.now()
    logger.info(f"Pipeline start: {start_time.isoformat()} (input={args.input})")

    try:
        collection = load_feature_collection(args.input)

        weights = (
            WeightVector.from_sequence(args.weights) if args.weights else WeightVector.defaults()
        )

        result = compute_index(collection, weights, n_classes=args.classes)
        exports = run_export(result, output_dir=args.output_dir, versioned=args.versioned)

        report = {
            "weights": weights.as_dict(),
            "summary": summarize_scores(result.collection),
            "breaks": result.breaks,
            **exports,
        }

        duration = (datetime.now() - start_time).total_seconds()
        logger.info(f"Pipeline complete in {duration:.2f} seconds")

        # stdout carries only the report; logs go to stderr
        print(json.dumps(report, indent=2))
        sys.exit(0)

    except (FeatureCollectionError, FileNotFoundError) as e:
        logger.error(f"Could not load {args.input}: {e}")
        sys.exit(1)

    except Exception as e:
        logger.error(f"Pipeline failed with unhandled exception: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
