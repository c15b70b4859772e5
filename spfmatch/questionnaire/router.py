"""
Questionnaire Endpoints

GET  /api/v1/quiz/questions - Question set
POST /api/v1/quiz/score     - Fitzpatrick type + skin type for an answer set
"""

from typing import List
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from .data import QUESTIONNAIRE_QUESTIONS
from .models import Answers, Question, QuizResult
from .scoring import evaluate_quiz


router = APIRouter(
    prefix="/api/v1/quiz",
    tags=["quiz"],
)


class ScoreQuizRequest(BaseModel):
    answers: Answers = Field(
        default_factory=dict,
        description="Answers keyed by question id; unanswered questions may be omitted"
    )


class QuestionsResponse(BaseModel):
    count: int
    questions: List[Question]


@router.get("/questions", response_model=QuestionsResponse)
async def list_questions():
    """Questions in display order. Options are listed in scoring order."""
    return QuestionsResponse(
        count=len(QUESTIONNAIRE_QUESTIONS),
        questions=list(QUESTIONNAIRE_QUESTIONS),
    )


@router.post("/score", response_model=QuizResult)
async def score_quiz(request: ScoreQuizRequest):
    """
    Classify an answer set.

    Missing or unrecognized answers count as zero points; an unanswered
    skin-type question yields "normal".
    """
    try:
        return evaluate_quiz(request.answers)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Scoring error: {str(e)}")
