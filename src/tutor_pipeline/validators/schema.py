"""Pydantic models for generated assets and pipeline reports.

Field declaration order is the key order of the written JSON, so reordering
fields here changes every generated file.
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from tutor_pipeline import ASSET_VERSION, INDEX_SOURCE_TAG


# ============================================================================
# Enums
# ============================================================================


class Mode(str, Enum):
    """Kind of generated asset."""

    PSEUDOCODE = "pseudocode"
    EXPLAIN = "explain"
    EXAM = "exam"


class QuestionType(str, Enum):
    """Exam question type."""

    MC = "mc"
    OPEN = "open"


# ============================================================================
# Asset Payload Parts
# ============================================================================


class LanguageText(BaseModel):
    """Per-language text slot as written into assets."""

    de: str = ""
    fa: str = ""


class PseudocodeVariant(BaseModel):
    """One selectable variant inside a pseudocode asset."""

    id: str = Field(..., min_length=1)
    title: str
    labels: LanguageText
    is_default: bool = False
    pseudocode: str = Field(..., min_length=1)
    explain_variant: LanguageText


class ExplainBlock(BaseModel):
    """Rendered explain section."""

    kind: str = Field(..., min_length=1, description="Section id, format or 'text'")
    text: str

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("block text must not be blank")
        return v


class ExamQuestion(BaseModel):
    """Normalized exam question."""

    id: str = Field(..., min_length=1)
    type: QuestionType
    prompt: str = Field(..., min_length=1)
    answer: str = ""
    explain_de: str = ""
    explain_fa: str = ""
    choices: Optional[List[Any]] = None


# ============================================================================
# Assets
# ============================================================================


class BaseAsset(BaseModel):
    """Identifying fields shared by every asset."""

    schema_name: str
    version: str = ASSET_VERSION
    topic: str = Field(..., min_length=1)
    lang: str = Field(..., min_length=2)
    mode: str
    title: str

    def to_json_dict(self) -> Dict[str, Any]:
        """Plain dict in declaration order with unset optionals omitted."""
        return self.model_dump(mode="json", exclude_none=True)


class PseudocodeAsset(BaseAsset):
    schema_name: Literal["tutor_asset.pseudocode.v1"] = "tutor_asset.pseudocode.v1"
    mode: Literal["pseudocode"] = "pseudocode"
    selected_variant: str = Field(..., min_length=1)
    pseudocode: str = Field(..., min_length=1)
    variants: List[PseudocodeVariant] = Field(..., min_length=1)


class ExplainAsset(BaseAsset):
    schema_name: Literal["tutor_asset.explain.v1"] = "tutor_asset.explain.v1"
    mode: Literal["explain"] = "explain"
    summary: str = ""
    blocks: List[ExplainBlock] = Field(default_factory=list)


class ExamAsset(BaseAsset):
    schema_name: Literal["tutor_asset.exam.v1"] = "tutor_asset.exam.v1"
    mode: Literal["exam"] = "exam"
    questions: List[ExamQuestion] = Field(default_factory=list)


ASSET_MODELS = {
    Mode.PSEUDOCODE.value: PseudocodeAsset,
    Mode.EXPLAIN.value: ExplainAsset,
    Mode.EXAM.value: ExamAsset,
}


# ============================================================================
# Index & Reports
# ============================================================================


class TopicIndex(BaseModel):
    """Contents of topics.json."""

    topics: List[str] = Field(default_factory=list)
    source: str = INDEX_SOURCE_TAG
    availability: Optional[Dict[str, Dict[str, List[str]]]] = None

    def to_json_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class BuildReport(BaseModel):
    """Outcome of one pipeline run."""

    source_dir: str
    output_dir: str
    files_written: List[str] = Field(default_factory=list)
    topics_included: List[str] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list)


class ValidationReport(BaseModel):
    """Outcome of validating a generated asset directory."""

    checked: int = 0
    errors: List[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors
