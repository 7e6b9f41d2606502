"""Reader for per-topic authored source files.

Expected layout below the source directory:

    <topic>/
        variants.<lang>.v1.json   array of variant objects
        explain.<lang>.v1.json    {"title", "sections", "sections_order", "audience"}
        exam.<lang>.v1.json       {"questions": [...]}

Every read is tolerant: missing files, unreadable files and documents with the
wrong top-level shape never raise. Documents come back as ``LoadResult`` so the
driver can report why something was skipped.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from tutor_pipeline.utils.file_io import list_subdirectories, read_json_tolerant

logger = logging.getLogger(__name__)

MISSING = "missing"
MALFORMED = "malformed"


@dataclass(frozen=True)
class LoadResult:
    """Outcome of reading one JSON document.

    Exactly one of ``document`` and ``problem`` is set.
    """

    document: Optional[Dict[str, Any]] = None
    problem: Optional[str] = None

    @property
    def is_present(self) -> bool:
        return self.document is not None

    def describe(self, kind: str) -> str:
        """Skip-report wording, e.g. ``"exam file missing"``."""
        return f"{kind} file {self.problem or 'present'}"


class ContentLoader:
    """Loads authored content for topics below ``source_dir``."""

    def __init__(self, source_dir: Union[str, Path]):
        self.source_dir = Path(source_dir)

    def list_topics(self) -> List[str]:
        """Topic slugs (source subdirectory names) in lexicographic order."""
        topics = list_subdirectories(self.source_dir)
        logger.info(
            f"Discovered {len(topics)} topics in {self.source_dir}",
            extra={"source": str(self.source_dir), "topic_count": len(topics)},
        )
        return topics

    def topic_dir(self, topic: str) -> Path:
        return self.source_dir / topic

    def load_variants(self, topic: str, lang: str) -> List[Any]:
        """Raw variant list for one language.

        Returns an empty list when the file is absent, unparsable, or not a
        JSON array.
        """
        path = self.topic_dir(topic) / f"variants.{lang}.v1.json"
        data, problem = read_json_tolerant(path)

        if problem:
            return []
        if not isinstance(data, list):
            logger.warning(f"Variant file is not a JSON array, ignoring: {path}")
            return []
        return data

    def load_explain(self, topic: str, lang: str) -> LoadResult:
        return self._load_document(self.topic_dir(topic) / f"explain.{lang}.v1.json")

    def load_exam(self, topic: str, lang: str) -> LoadResult:
        return self._load_document(self.topic_dir(topic) / f"exam.{lang}.v1.json")

    def _load_document(self, path: Path) -> LoadResult:
        data, problem = read_json_tolerant(path)

        if problem:
            return LoadResult(problem=problem)
        if not isinstance(data, dict):
            logger.warning(f"Document is not a JSON object, ignoring: {path}")
            return LoadResult(problem=MALFORMED)
        return LoadResult(document=data)
