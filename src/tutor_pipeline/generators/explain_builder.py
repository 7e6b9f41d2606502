"""Explain asset builder."""

import logging
from typing import Any, Dict, List, Mapping

from tutor_pipeline.generators.base import BaseAssetBuilder, BuildContext
from tutor_pipeline.utils.text_utils import clean_str, first_non_empty
from tutor_pipeline.validators.schema import ExplainAsset, ExplainBlock, Mode

logger = logging.getLogger(__name__)

DEFAULT_BLOCK_KIND = "text"
SUMMARY_SECTION_ID = "definition"


def order_sections(document: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """Sections in output order.

    Ids listed in ``sections_order`` come first, in list order; unknown ids are
    skipped. Sections not placed that way follow in their original order.
    Without a usable ``sections_order`` the original order is kept.
    """
    raw_sections = document.get("sections")
    if not isinstance(raw_sections, list):
        return []

    sections = [section for section in raw_sections if isinstance(section, dict)]

    raw_order = document.get("sections_order")
    id_order = [sid for sid in raw_order if isinstance(sid, str)] if isinstance(raw_order, list) else []
    if not id_order:
        return sections

    by_id: Dict[str, Dict[str, Any]] = {}
    for section in sections:
        sid = section.get("id")
        if isinstance(sid, str):
            by_id[sid] = section

    ordered: List[Dict[str, Any]] = []
    placed = set()
    for sid in id_order:
        section = by_id.get(sid)
        if section is not None and id(section) not in placed:
            ordered.append(section)
            placed.add(id(section))

    ordered.extend(section for section in sections if id(section) not in placed)
    return ordered


def section_kind(section: Mapping[str, Any]) -> str:
    return clean_str(section.get("id")) or clean_str(section.get("format")) or DEFAULT_BLOCK_KIND


def section_text(section: Mapping[str, Any]) -> str:
    body = section.get("body")
    return body if isinstance(body, str) else ""


class ExplainAssetBuilder(BaseAssetBuilder):
    mode = Mode.EXPLAIN.value

    def build(self, context: BuildContext, document: Mapping[str, Any]) -> ExplainAsset:
        """Build the explain asset; never fails, sparse input gives empty blocks."""
        sections = order_sections(document)

        blocks = [
            ExplainBlock(kind=section_kind(section), text=section_text(section))
            for section in sections
            if section_text(section).strip()
        ]

        definition = next(
            (section for section in sections if section.get("id") == SUMMARY_SECTION_ID),
            None,
        )
        summary = first_non_empty(
            [
                definition.get("body") if definition else None,
                blocks[0].text if blocks else None,
                document.get("audience"),
            ]
        )

        return ExplainAsset(
            **context.identity(),
            summary=summary,
            blocks=blocks,
        )
