"""
Fitzpatrick Scoring and Skin-Type Extraction

Maps a questionnaire answer set to:
1. A Fitzpatrick type (1-6) via weighted point summation and threshold bands
2. A facial skin type (normal/oily/dry/combination/sensitive)

Both functions are pure: same (answers, questions) -> same result.
Absent, multi-valued or unrecognized answers are never errors; they
contribute zero points / resolve to "normal".
"""

from typing import Iterable, Optional, Sequence, Tuple

from .data import (
    FITZPATRICK_INFO,
    FITZPATRICK_THRESHOLDS,
    QUESTIONNAIRE_QUESTIONS,
    SKIN_TYPE_INFO,
    SKIN_TYPE_QUESTION_ID,
)
from .models import Answers, Question, QuizResult, SkinType


DEFAULT_SKIN_TYPE: SkinType = "normal"

_ROMAN = ("I", "II", "III", "IV", "V", "VI")


def to_roman(fitzpatrick_type: int) -> str:
    """1 -> 'I' ... 6 -> 'VI'."""
    return _ROMAN[fitzpatrick_type - 1]


def _selected_index(question: Question, answers: Answers) -> Optional[int]:
    """Index of the single selected option, or None if unanswered/unmatched."""
    answer = answers.get(question.id)
    # Multi-choice answers never select a single option
    if not isinstance(answer, str):
        return None
    try:
        return question.options.index(answer)
    except ValueError:
        return None


def _scoring_questions(questions: Iterable[Question]) -> Iterable[Question]:
    return (q for q in questions if q.scores is not None)


def score_answers(
    answers: Answers,
    questions: Sequence[Question] = QUESTIONNAIRE_QUESTIONS,
) -> int:
    """Sum of points over every scoring question, in definition order."""
    total = 0
    for question in _scoring_questions(questions):
        index = _selected_index(question, answers)
        if index is not None:
            total += question.scores[index]
    return total


def fitzpatrick_from_score(
    total: int,
    thresholds: Sequence[Tuple[int, int]] = FITZPATRICK_THRESHOLDS,
) -> int:
    """
    Band a total score into a Fitzpatrick type.

    Bands are inclusive on their upper bound:
    <=7 -> 1, <=16 -> 2, <=25 -> 3, <=30 -> 4, <=34 -> 5, else 6.
    """
    for fitzpatrick_type, upper_bound in thresholds:
        if total <= upper_bound:
            return fitzpatrick_type
    return 6


def classify(
    answers: Answers,
    questions: Sequence[Question] = QUESTIONNAIRE_QUESTIONS,
) -> int:
    """Fitzpatrick type (1-6) for an answer set. Empty answers -> 1."""
    return fitzpatrick_from_score(score_answers(answers, questions))


def extract_skin_type(
    answers: Answers,
    questions: Sequence[Question] = QUESTIONNAIRE_QUESTIONS,
    question_id: str = SKIN_TYPE_QUESTION_ID,
) -> SkinType:
    """
    Skin type from the categorizing question identified by `question_id`.

    Falls back to "normal" when the question is missing, unanswered or the
    answer is not one of its options.
    """
    question = next((q for q in questions if q.id == question_id), None)
    if question is None or question.types is None:
        return DEFAULT_SKIN_TYPE

    index = _selected_index(question, answers)
    if index is None:
        return DEFAULT_SKIN_TYPE
    return question.types[index]


def evaluate_quiz(
    answers: Answers,
    questions: Sequence[Question] = QUESTIONNAIRE_QUESTIONS,
) -> QuizResult:
    """Full classification with presentation copy, as returned by the API."""
    total = score_answers(answers, questions)
    fitzpatrick_type = fitzpatrick_from_score(total)
    skin_type = extract_skin_type(answers, questions)
    info = FITZPATRICK_INFO[fitzpatrick_type]

    answered = sum(
        1 for q in _scoring_questions(questions)
        if _selected_index(q, answers) is not None
    )

    return QuizResult(
        score=total,
        fitzpatrick_type=fitzpatrick_type,
        fitzpatrick_name=info.name,
        fitzpatrick_description=info.description,
        skin_type=skin_type,
        skin_type_description=SKIN_TYPE_INFO[skin_type],
        answered_scoring_questions=answered,
        lookup_key=f"{fitzpatrick_type}-{skin_type}",
    )
