"""Pipeline driver: builds every asset for every topic and language.

A run is a full regeneration:

1. the output directory is removed and recreated (before any write),
2. topics are discovered from the source directory in lexicographic order,
3. for each topic the variant lists are merged once and the legacy module is
   scraped once, then every language gets a pseudocode, explain and exam asset,
4. every (topic, lang, mode) without an asset is recorded in the skip list.

Topics are independent. With ``workers > 1`` they are built in a thread pool,
but results are written and reported in topic order so the output directory
and the report stay deterministic.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from tqdm import tqdm

from tutor_pipeline.config import PipelineConfig
from tutor_pipeline.generators import (
    BuildContext,
    ExamAssetBuilder,
    ExplainAssetBuilder,
    PseudocodeAssetBuilder,
)
from tutor_pipeline.generators.pseudocode_builder import NO_SOURCE_REASON
from tutor_pipeline.mergers.variant_merger import merge_variants
from tutor_pipeline.parsers.content_loader import ContentLoader
from tutor_pipeline.parsers.legacy_extractor import LegacyPseudocodeExtractor
from tutor_pipeline.utils.file_io import reset_directory, write_json
from tutor_pipeline.utils.logging_config import pipeline_stage_logger
from tutor_pipeline.utils.text_utils import first_non_empty, topic_display_title
from tutor_pipeline.validators.schema import BuildReport

logger = logging.getLogger(__name__)


@dataclass
class TopicResult:
    """Assets and skip entries produced for one topic (nothing written yet)."""

    topic: str
    assets: List[Tuple[str, Dict[str, Any]]] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


class PipelineDriver:
    """Runs the asset build for one ``PipelineConfig``."""

    def __init__(
        self,
        config: PipelineConfig,
        loader: Optional[ContentLoader] = None,
        extractor: Optional[LegacyPseudocodeExtractor] = None,
    ):
        self.config = config
        self.loader = loader or ContentLoader(config.source_dir)
        self.extractor = extractor or LegacyPseudocodeExtractor(config.legacy_dir)
        self.pseudocode_builder = PseudocodeAssetBuilder()
        self.explain_builder = ExplainAssetBuilder()
        self.exam_builder = ExamAssetBuilder()

    # ------------------------------------------------------------------
    # Per-topic build (no side effects)
    # ------------------------------------------------------------------

    def build_topic(self, topic: str) -> TopicResult:
        """Build all assets of one topic for every configured language."""
        languages = self.config.languages
        result = TopicResult(topic=topic)

        variant_lists = {lang: self.loader.load_variants(topic, lang) for lang in languages}
        variants = merge_variants(variant_lists, languages)
        fallback = self.extractor.extract(topic, self.loader.topic_dir(topic), languages)

        for lang in languages:
            explain = self.loader.load_explain(topic, lang)
            exam = self.loader.load_exam(topic, lang)

            title = first_non_empty(
                [explain.document.get("title") if explain.is_present else None]
            ) or topic_display_title(topic, lang)
            context = BuildContext(topic=topic, lang=lang, title=title, languages=list(languages))

            pseudocode_asset = self.pseudocode_builder.build(context, variants, fallback)
            if pseudocode_asset is not None:
                result.assets.append(
                    (self.pseudocode_builder.asset_filename(context), pseudocode_asset.to_json_dict())
                )
            else:
                result.skipped.append(self.pseudocode_builder.skip_entry(context, NO_SOURCE_REASON))

            if explain.is_present:
                explain_asset = self.explain_builder.build(context, explain.document)
                result.assets.append(
                    (self.explain_builder.asset_filename(context), explain_asset.to_json_dict())
                )
            else:
                result.skipped.append(
                    self.explain_builder.skip_entry(context, explain.describe("explain"))
                )

            if exam.is_present:
                exam_asset = self.exam_builder.build(context, exam.document)
                result.assets.append(
                    (self.exam_builder.asset_filename(context), exam_asset.to_json_dict())
                )
            else:
                result.skipped.append(self.exam_builder.skip_entry(context, exam.describe("exam")))

        return result

    def safe_build_topic(self, topic: str) -> TopicResult:
        """``build_topic`` with failures isolated to the topic."""
        try:
            return self.build_topic(topic)
        except Exception as e:
            logger.error(
                f"Topic {topic} failed, continuing with remaining topics: {e}",
                extra={"topic": topic},
                exc_info=True,
            )
            return TopicResult(topic=topic, skipped=[f"{topic} :: topic failed: {e}"])

    # ------------------------------------------------------------------
    # Full run
    # ------------------------------------------------------------------

    def _iter_results(self, topics: List[str], show_progress: bool) -> Iterator[TopicResult]:
        progress = tqdm(total=len(topics), desc="Building topics", unit="topic", disable=not show_progress)
        try:
            if self.config.workers > 1:
                with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
                    for result in executor.map(self.safe_build_topic, topics):
                        progress.update(1)
                        yield result
            else:
                for topic in topics:
                    result = self.safe_build_topic(topic)
                    progress.update(1)
                    yield result
        finally:
            progress.close()

    def run(self, show_progress: bool = False) -> BuildReport:
        """Regenerate the output directory from source.

        Returns:
            BuildReport with written files, included topics and skip entries

        Raises:
            OutputDirectoryError: If the output directory cannot be reset or written
        """
        output_dir = Path(self.config.output_dir)

        with pipeline_stage_logger(
            "build_assets",
            source_dir=str(self.config.source_dir),
            output_dir=str(output_dir),
        ) as stage:
            reset_directory(output_dir)

            topics = self.loader.list_topics()
            written: List[str] = []
            included = set()
            skipped: List[str] = []

            for result in self._iter_results(topics, show_progress):
                for filename, data in result.assets:
                    write_json(data, output_dir / filename)
                    written.append(filename)
                    included.add(result.topic)
                skipped.extend(result.skipped)

            stage["topic_count"] = len(topics)
            stage["files_written"] = len(written)
            stage["skipped_count"] = len(skipped)

        return BuildReport(
            source_dir=str(self.config.source_dir),
            output_dir=str(output_dir),
            files_written=sorted(written),
            topics_included=sorted(included),
            skipped=sorted(skipped),
        )


def log_summary(report: BuildReport) -> None:
    """Log the human-readable end-of-run report."""
    logger.info(f"Source topics dir: {report.source_dir}")
    logger.info(f"Files written: {len(report.files_written)}")
    logger.info(
        f"Topics included ({len(report.topics_included)}): {', '.join(report.topics_included)}"
    )
    logger.info(f"Skipped ({len(report.skipped)}):")
    for item in report.skipped:
        logger.info(f"- {item}")
