"""
Questionnaire Models

Pydantic models for quiz questions, answer sets and quiz results.

A question has exactly one purpose:
- scoring: carries `scores` (parallel to `options`)
- categorizing: carries `types` (parallel to `options`)
- preference: carries neither
"""

from typing import Dict, List, Literal, Optional, Union
from pydantic import BaseModel, Field, model_validator


SkinType = Literal["normal", "oily", "dry", "combination", "sensitive"]
SKIN_TYPES = ("normal", "oily", "dry", "combination", "sensitive")

# question id -> single option (single choice) or list of options (multi choice)
Answers = Dict[str, Union[str, List[str]]]


class Question(BaseModel):
    """A single quiz question."""
    id: str
    question: str = Field(description="Prompt shown to the user")
    options: List[str] = Field(
        min_length=1,
        description="Options in display order; index is the scoring/type index"
    )
    scores: Optional[List[int]] = Field(
        default=None,
        description="Points per option (scoring questions only)"
    )
    types: Optional[List[SkinType]] = Field(
        default=None,
        description="Skin-type tag per option (categorizing question only)"
    )

    class Config:
        frozen = True
        extra = "forbid"

    @model_validator(mode="after")
    def _check_parallel_arrays(self) -> "Question":
        if self.scores is not None and self.types is not None:
            raise ValueError(f"Question '{self.id}' cannot both score and categorize")
        for name in ("scores", "types"):
            values = getattr(self, name)
            if values is not None and len(values) != len(self.options):
                raise ValueError(
                    f"Question '{self.id}': {name} has {len(values)} entries "
                    f"for {len(self.options)} options"
                )
        return self

    @property
    def purpose(self) -> Literal["scoring", "categorizing", "preference"]:
        if self.scores is not None:
            return "scoring"
        if self.types is not None:
            return "categorizing"
        return "preference"


class FitzpatrickInfo(BaseModel):
    name: str
    description: str


class QuizResult(BaseModel):
    """
    Classification derived from one answer set.

    Never stored; recomputed from answers on every request.
    """
    score: int = Field(ge=0, description="Sum of scoring-question points")
    fitzpatrick_type: int = Field(ge=1, le=6)
    fitzpatrick_name: str
    fitzpatrick_description: str
    skin_type: SkinType
    skin_type_description: str
    answered_scoring_questions: int = Field(
        ge=0,
        description="Scoring questions whose answer matched an option"
    )
    lookup_key: str = Field(description="'{fitzpatrick}-{skinType}' product key")
