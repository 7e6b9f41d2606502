"""Runtime configuration for the asset build pipeline.

Paths and languages are resolved once (environment + CLI flags) and passed into
the driver explicitly as a ``PipelineConfig``.
"""

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator

from tutor_pipeline import SUPPORTED_LANGUAGES

load_dotenv(os.getenv("ENV_FILE"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")

DEFAULT_CORE_DIR = Path("..") / "fiae-tutor-core"
DEFAULT_OUTPUT_DIR = Path("assets") / "tutor-data" / "run"
SOURCE_TOPICS_SUBDIR = Path("export") / "tutor" / "topics"
INDEX_FILENAME = "topics.json"


class PipelineConfig(BaseModel):
    """Explicit inputs for one pipeline run."""

    source_dir: Path = Field(..., description="Directory holding one subdirectory per topic")
    output_dir: Path = Field(..., description="Directory receiving <topic>.<lang>.<mode>.json files")
    index_path: Optional[Path] = Field(
        None, description="Topic index file (default: topics.json next to output_dir)"
    )
    legacy_dir: Optional[Path] = Field(
        None, description="Extra directory with <topic>.py legacy pseudocode modules"
    )
    languages: List[str] = Field(default_factory=lambda: list(SUPPORTED_LANGUAGES))
    workers: int = Field(default=1, ge=1, description="Threads used to build topics")

    @field_validator("languages")
    @classmethod
    def validate_languages(cls, v: List[str]) -> List[str]:
        """Languages must be a non-empty, duplicate free subset of SUPPORTED_LANGUAGES."""
        cleaned = [lang.strip().lower() for lang in v if lang and lang.strip()]
        if not cleaned:
            raise ValueError("at least one language is required")
        unknown = [lang for lang in cleaned if lang not in SUPPORTED_LANGUAGES]
        if unknown:
            raise ValueError(
                f"unsupported languages {unknown}; expected a subset of {SUPPORTED_LANGUAGES}"
            )
        if len(set(cleaned)) != len(cleaned):
            raise ValueError(f"duplicate languages in {cleaned}")
        return cleaned

    @model_validator(mode="after")
    def default_index_path(self) -> "PipelineConfig":
        if self.index_path is None:
            self.index_path = self.output_dir.parent / INDEX_FILENAME
        return self

    @classmethod
    def from_env(cls, **overrides) -> "PipelineConfig":
        """Build a config from environment variables, then apply overrides.

        Overrides whose value is None are ignored so CLI flags that were not
        given fall back to the environment.

        Args:
            **overrides: Field values taking precedence over the environment

        Returns:
            Validated PipelineConfig
        """
        values = {
            "source_dir": resolve_source_dir(),
            "output_dir": Path(os.getenv("TUTOR_OUTPUT_DIR", str(DEFAULT_OUTPUT_DIR))),
        }

        if index_path := os.getenv("TUTOR_INDEX_PATH"):
            values["index_path"] = Path(index_path)
        if legacy_dir := os.getenv("TUTOR_LEGACY_DIR"):
            values["legacy_dir"] = Path(legacy_dir)
        if languages := os.getenv("TUTOR_LANGUAGES"):
            values["languages"] = languages.split(",")
        if workers := os.getenv("TUTOR_WORKERS"):
            values["workers"] = int(workers)

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def resolve_source_dir() -> Path:
    """Topics directory from TUTOR_SOURCE_DIR, else <TUTOR_CORE_DIR>/export/tutor/topics."""
    if source_dir := os.getenv("TUTOR_SOURCE_DIR"):
        return Path(source_dir)
    core_dir = Path(os.getenv("TUTOR_CORE_DIR", str(DEFAULT_CORE_DIR)))
    return core_dir / SOURCE_TOPICS_SUBDIR
