"""
SPFMatch Questionnaire

Answers -> Fitzpatrick type (1-6) + facial skin type.
"""

from .models import Question, QuizResult, SkinType, SKIN_TYPES
from .data import (
    QUESTIONNAIRE_QUESTIONS,
    FITZPATRICK_THRESHOLDS,
    FITZPATRICK_INFO,
    SKIN_TYPE_INFO,
    SKIN_TYPE_QUESTION_ID,
    NO_PREFERENCE,
)
from .scoring import (
    classify,
    extract_skin_type,
    score_answers,
    fitzpatrick_from_score,
    evaluate_quiz,
    to_roman,
)

__all__ = [
    "Question",
    "QuizResult",
    "SkinType",
    "SKIN_TYPES",
    "QUESTIONNAIRE_QUESTIONS",
    "FITZPATRICK_THRESHOLDS",
    "FITZPATRICK_INFO",
    "SKIN_TYPE_INFO",
    "SKIN_TYPE_QUESTION_ID",
    "NO_PREFERENCE",
    "classify",
    "extract_skin_type",
    "score_answers",
    "fitzpatrick_from_score",
    "evaluate_quiz",
    "to_roman",
]
