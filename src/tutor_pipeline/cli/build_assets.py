"""CLI for building tutor assets from the authoring tree.

Usage:
    python -m tutor_pipeline.cli.build_assets \
        --source ../fiae-tutor-core/export/tutor/topics \
        --output assets/tutor-data/run \
        --report build-report.json

Features:
- Full regeneration of the output directory on every run
- Topic index (topics.json) regenerated after the build unless --skip-index
- Optional thread pool across topics (--workers)
- Progress bar with tqdm
"""

import argparse
import logging
import sys
from pathlib import Path

from tutor_pipeline.config import LOG_FORMAT, LOG_LEVEL, PipelineConfig
from tutor_pipeline.errors import PipelineError
from tutor_pipeline.index_generator import write_topic_index
from tutor_pipeline.pipeline_driver import PipelineDriver, log_summary
from tutor_pipeline.utils.file_io import write_json
from tutor_pipeline.utils.logging_config import configure_logging

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Compile topic content into static tutor JSON assets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Build with paths from the environment (.env)
  python -m tutor_pipeline.cli.build_assets

  # Build German assets only, four threads, with a progress bar
  python -m tutor_pipeline.cli.build_assets --languages de --workers 4 --progress

  # Build without touching topics.json
  python -m tutor_pipeline.cli.build_assets --skip-index
        """,
    )

    parser.add_argument(
        "--source",
        type=Path,
        default=None,
        help="Topics source directory (default: TUTOR_SOURCE_DIR or <TUTOR_CORE_DIR>/export/tutor/topics)",
    )

    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Asset output directory, fully replaced on every run (default: TUTOR_OUTPUT_DIR)",
    )

    parser.add_argument(
        "--index",
        type=Path,
        default=None,
        help="Topic index path (default: topics.json next to the output directory)",
    )

    parser.add_argument(
        "--legacy-dir",
        type=Path,
        default=None,
        help="Extra directory with <topic>.py legacy pseudocode modules",
    )

    parser.add_argument(
        "--languages",
        default=None,
        help="Comma separated languages to build (default: de,fa)",
    )

    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of threads building topics (default: 1)",
    )

    parser.add_argument(
        "--skip-index",
        action="store_true",
        help="Do not regenerate topics.json after the build",
    )

    parser.add_argument(
        "--no-availability",
        action="store_true",
        help="Write topics.json without the availability map",
    )

    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Write the build report as JSON to this path",
    )

    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar",
    )

    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    parser.add_argument(
        "--log-json",
        action="store_true",
        default=LOG_FORMAT == "json",
        help="Emit structured JSON log lines",
    )

    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(level=args.log_level, json_format=args.log_json)

    try:
        config = PipelineConfig.from_env(
            source_dir=args.source,
            output_dir=args.output,
            index_path=args.index,
            legacy_dir=args.legacy_dir,
            languages=args.languages.split(",") if args.languages else None,
            workers=args.workers,
        )
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    try:
        report = PipelineDriver(config).run(show_progress=args.progress)
        log_summary(report)

        if not args.skip_index:
            write_topic_index(
                config.output_dir,
                config.index_path,
                include_availability=not args.no_availability,
            )

        if args.report:
            write_json(report.model_dump(mode="json"), args.report)
            logger.info(f"Build report written to {args.report}")
    except PipelineError as e:
        logger.error(f"Build failed: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
