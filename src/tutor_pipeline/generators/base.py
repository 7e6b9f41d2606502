"""Base asset builder shared by the pseudocode, explain and exam builders.

Provides common functionality:
- The identity of the asset being built (topic, language, title)
- File naming for the generated asset
- Skip wording used when a builder produces nothing
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from tutor_pipeline import SUPPORTED_LANGUAGES
from tutor_pipeline.validators.schema import BaseAsset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildContext:
    """Identity of one (topic, language) build."""

    topic: str
    lang: str
    title: str
    languages: List[str] = field(default_factory=lambda: list(SUPPORTED_LANGUAGES))

    def identity(self) -> Dict[str, Any]:
        return {"topic": self.topic, "lang": self.lang, "title": self.title}


class BaseAssetBuilder(ABC):
    """Abstract base class for asset builders.

    Subclasses must implement:
    - mode (class attribute): the asset mode they produce
    - build(): turn loaded content into an asset, or None when nothing usable exists
    """

    mode: str = ""

    def asset_key(self, context: BuildContext) -> str:
        """``<topic>.<lang>.<mode>``, the skip-report and file name stem."""
        return f"{context.topic}.{context.lang}.{self.mode}"

    def asset_filename(self, context: BuildContext) -> str:
        return f"{self.asset_key(context)}.json"

    def skip_entry(self, context: BuildContext, reason: str) -> str:
        return f"{self.asset_key(context)} :: {reason}"

    @abstractmethod
    def build(self, context: BuildContext, *args: Any, **kwargs: Any) -> Optional[BaseAsset]:
        """Build the asset for ``context``."""
