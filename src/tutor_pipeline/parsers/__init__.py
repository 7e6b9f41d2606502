"""Readers for authored topic content and legacy pseudocode modules."""

from tutor_pipeline.parsers.content_loader import ContentLoader, LoadResult
from tutor_pipeline.parsers.legacy_extractor import (
    LegacyPseudocodeExtractor,
    decode_escapes,
    extract_from_text,
)

__all__ = [
    "ContentLoader",
    "LoadResult",
    "LegacyPseudocodeExtractor",
    "decode_escapes",
    "extract_from_text",
]
