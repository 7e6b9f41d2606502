"""CLI validating generated assets against their schemas.

Usage:
    python -m tutor_pipeline.cli.validate_assets --assets assets/tutor-data/run
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from tutor_pipeline.asset_store import AssetStore
from tutor_pipeline.config import DEFAULT_OUTPUT_DIR, LOG_FORMAT, LOG_LEVEL
from tutor_pipeline.errors import PipelineError
from tutor_pipeline.utils.logging_config import configure_logging
from tutor_pipeline.validators.asset_validator import validate_asset_dir

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Validate generated tutor assets")
    parser.add_argument(
        "--assets",
        type=Path,
        default=Path(os.getenv("TUTOR_OUTPUT_DIR", str(DEFAULT_OUTPUT_DIR))),
        help="Generated asset directory (default: TUTOR_OUTPUT_DIR)",
    )
    parser.add_argument(
        "--index",
        type=Path,
        default=None,
        help="Topic index to check (default: topics.json next to --assets)",
    )
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(level=args.log_level, json_format=LOG_FORMAT == "json")

    try:
        report = validate_asset_dir(args.assets)
    except PipelineError as e:
        logger.error(f"Validation failed: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    for error in report.errors:
        logger.error(error)

    store = AssetStore(args.assets, args.index)
    if not store.is_generated_index():
        logger.warning(f"No generated topic index at {store.index_path}")

    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
