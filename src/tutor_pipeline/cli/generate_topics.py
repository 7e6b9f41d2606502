"""CLI regenerating topics.json from an existing asset directory.

Usage:
    python -m tutor_pipeline.cli.generate_topics \
        --assets assets/tutor-data/run \
        --output assets/tutor-data/topics.json
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from tutor_pipeline.config import DEFAULT_OUTPUT_DIR, INDEX_FILENAME, LOG_FORMAT, LOG_LEVEL
from tutor_pipeline.errors import PipelineError
from tutor_pipeline.index_generator import write_topic_index
from tutor_pipeline.utils.logging_config import configure_logging

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Generate the topic index from generated asset file names",
    )
    parser.add_argument(
        "--assets",
        type=Path,
        default=Path(os.getenv("TUTOR_OUTPUT_DIR", str(DEFAULT_OUTPUT_DIR))),
        help="Generated asset directory (default: TUTOR_OUTPUT_DIR)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Index file to write (default: TUTOR_INDEX_PATH or topics.json next to --assets)",
    )
    parser.add_argument(
        "--no-availability",
        action="store_true",
        help="Only write the topic list",
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

    index_path = args.output or Path(
        os.getenv("TUTOR_INDEX_PATH", str(args.assets.parent / INDEX_FILENAME))
    )

    try:
        write_topic_index(args.assets, index_path, include_availability=not args.no_availability)
    except PipelineError as e:
        logger.error(f"Index generation failed: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
