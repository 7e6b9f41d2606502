"""Asset builders, one per generated mode."""

from tutor_pipeline.generators.base import BaseAssetBuilder, BuildContext
from tutor_pipeline.generators.exam_builder import ExamAssetBuilder
from tutor_pipeline.generators.explain_builder import ExplainAssetBuilder
from tutor_pipeline.generators.pseudocode_builder import PseudocodeAssetBuilder

__all__ = [
    "BaseAssetBuilder",
    "BuildContext",
    "ExamAssetBuilder",
    "ExplainAssetBuilder",
    "PseudocodeAssetBuilder",
]
