"""Read-only lookup over generated assets.

This is the consumer side of the output layout: ``(topic, lang, mode)`` maps to
``<topic>.<lang>.<mode>.json`` and the topic list is ``topics.json``, both
returned verbatim.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Optional, Union

from tutor_pipeline import INDEX_SOURCE_TAG
from tutor_pipeline.config import INDEX_FILENAME
from tutor_pipeline.errors import AssetNotFoundError
from tutor_pipeline.utils.file_io import read_json

logger = logging.getLogger(__name__)

DEFAULT_MODE = "pseudocode"
COMPONENT_PATTERN = re.compile(r"^[a-z0-9_\-]+$")


def normalize_component(value: Any) -> str:
    return str(value or "").strip().lower()


class AssetStore:
    def __init__(self, output_dir: Union[str, Path], index_path: Optional[Union[str, Path]] = None):
        self.output_dir = Path(output_dir)
        self.index_path = Path(index_path) if index_path else self.output_dir.parent / INDEX_FILENAME

    def load_topics(self) -> Any:
        """Contents of the topic index.

        Raises:
            AssetNotFoundError: If the index is missing or unreadable
        """
        return self._read(self.index_path)

    def load_asset(self, topic: Any, lang: Any, mode: Any = DEFAULT_MODE) -> Any:
        """Contents of one generated asset.

        Inputs are trimmed and lower-cased; an empty mode means pseudocode.

        Raises:
            AssetNotFoundError: If an input is empty or not a plain name, or
                no such asset exists
        """
        topic = normalize_component(topic)
        lang = normalize_component(lang)
        mode = normalize_component(mode) or DEFAULT_MODE

        for value in (topic, lang, mode):
            if not COMPONENT_PATTERN.match(value):
                raise AssetNotFoundError(f"Invalid asset lookup: {topic!r}, {lang!r}, {mode!r}")

        return self._read(self.output_dir / f"{topic}.{lang}.{mode}.json")

    def _read(self, path: Path) -> Any:
        try:
            return read_json(path)
        except FileNotFoundError as e:
            raise AssetNotFoundError(f"Not found: {path.name}") from e
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Unreadable asset {path}: {e}")
            raise AssetNotFoundError(f"Unreadable: {path.name}") from e

    def is_generated_index(self) -> bool:
        """True when the index on disk carries the generator's provenance tag."""
        try:
            index = self.load_topics()
        except AssetNotFoundError:
            return False
        return isinstance(index, dict) and index.get("source") == INDEX_SOURCE_TAG
