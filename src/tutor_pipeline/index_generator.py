"""Topic index generator.

Derives ``topics.json`` purely from the file names in the asset directory, so
the index can be regenerated without rebuilding any asset.
"""

import logging
from pathlib import Path
from typing import Dict, List, NamedTuple, Optional, Set, Union

from tutor_pipeline.utils.file_io import list_files, write_json
from tutor_pipeline.validators.schema import TopicIndex

logger = logging.getLogger(__name__)


class AssetName(NamedTuple):
    topic: str
    lang: str
    mode: str


def parse_asset_filename(filename: str) -> Optional[AssetName]:
    """Split ``<topic>.<lang>.<mode>.json`` into its parts.

    Examples:
        >>> parse_asset_filename("bubblesort.de.exam.json")
        AssetName(topic='bubblesort', lang='de', mode='exam')
        >>> parse_asset_filename("topics.json") is None
        True
    """
    parts = filename.split(".")
    if len(parts) != 4:
        return None
    topic, lang, mode, ext = parts
    if not topic or not lang or not mode or ext != "json":
        return None
    return AssetName(topic, lang, mode)


def build_topic_index(
    asset_dir: Union[str, Path], include_availability: bool = True
) -> TopicIndex:
    """Scan the asset directory and build the topic index.

    Args:
        asset_dir: Directory holding generated assets
        include_availability: Add the topic -> lang -> modes map (default: True)

    Returns:
        TopicIndex with sorted topics (and availability)

    Raises:
        OutputDirectoryError: If asset_dir does not exist
    """
    availability: Dict[str, Dict[str, Set[str]]] = {}

    for path in list_files(asset_dir):
        name = parse_asset_filename(path.name)
        if name is None:
            logger.debug(f"Ignoring non-asset file: {path.name}")
            continue
        availability.setdefault(name.topic, {}).setdefault(name.lang, set()).add(name.mode)

    topics: List[str] = sorted(availability)

    index = TopicIndex(topics=topics)
    if include_availability:
        index.availability = {
            topic: {lang: sorted(modes) for lang, modes in sorted(availability[topic].items())}
            for topic in topics
        }
    return index


def write_topic_index(
    asset_dir: Union[str, Path],
    index_path: Union[str, Path],
    include_availability: bool = True,
) -> TopicIndex:
    """Build the topic index for ``asset_dir`` and write it to ``index_path``."""
    index = build_topic_index(asset_dir, include_availability=include_availability)
    write_json(index.to_json_dict(), index_path)
    logger.info(
        f"Generated {index_path} with {len(index.topics)} topics",
        extra={"index_path": str(index_path), "topic_count": len(index.topics)},
    )
    return index
