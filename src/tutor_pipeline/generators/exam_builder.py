"""Exam asset builder.

Exam content is monolingual per asset: only the ``explain_<lang>`` field of the
asset's own language is filled.
"""

import logging
from typing import Any, List, Mapping, Optional

from tutor_pipeline.generators.base import BaseAssetBuilder, BuildContext
from tutor_pipeline.utils.text_utils import first_non_empty
from tutor_pipeline.validators.schema import ExamAsset, ExamQuestion, Mode, QuestionType

logger = logging.getLogger(__name__)


def normalize_question(question: Any, lang: str) -> Optional[ExamQuestion]:
    """Map one raw question; returns None when id or prompt is missing.

    Args:
        question: Raw question object from the exam document
        lang: Language of the asset being built

    Returns:
        Normalized question or None
    """
    if not isinstance(question, Mapping):
        return None

    question_id = first_non_empty([question.get("id")])
    prompt = first_non_empty([question.get("task"), question.get("prompt")])
    if not question_id or not prompt:
        return None

    choices = question.get("choices")
    is_mc = isinstance(choices, list) and len(choices) > 0
    explanation = first_non_empty([question.get("solution"), question.get("expected")])

    return ExamQuestion(
        id=question_id,
        type=QuestionType.MC if is_mc else QuestionType.OPEN,
        prompt=prompt,
        answer=first_non_empty(
            [question.get("answer"), question.get("expected"), question.get("solution")]
        ),
        explain_de=explanation if lang == "de" else "",
        explain_fa=explanation if lang == "fa" else "",
        choices=choices if is_mc else None,
    )


class ExamAssetBuilder(BaseAssetBuilder):
    mode = Mode.EXAM.value

    def build(self, context: BuildContext, document: Mapping[str, Any]) -> ExamAsset:
        """Build the exam asset with questions sorted by id."""
        raw_questions = document.get("questions")
        if not isinstance(raw_questions, list):
            raw_questions = []

        questions: List[ExamQuestion] = []
        for raw in raw_questions:
            question = normalize_question(raw, context.lang)
            if question is not None:
                questions.append(question)

        dropped = len(raw_questions) - len(questions)
        if dropped:
            logger.debug(f"{self.asset_key(context)}: dropped {dropped} questions without id or prompt")

        questions.sort(key=lambda q: q.id)

        return ExamAsset(
            **context.identity(),
            questions=questions,
        )
