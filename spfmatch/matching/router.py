"""
Matching Endpoints

POST /api/v1/recommendations - Sunscreen recommendations for a classification

Input options:
- answers: full answer set (classified here; preference answers applied)
- fitzpatrick_type + skin_type: explicit classification
`preferences` overrides any preference answers.
"""

from fastapi import APIRouter, Depends, HTTPException

from spfmatch.catalog.dependencies import get_product_table_load
from spfmatch.catalog.models import ProductTableLoad
from spfmatch.questionnaire.scoring import classify, extract_skin_type
from .match import preferences_from_answers, recommend
from .models import RecommendationRequest, RecommendationResult


router = APIRouter(
    prefix="/api/v1/recommendations",
    tags=["matching"],
)


@router.post("", response_model=RecommendationResult)
async def recommend_endpoint(
    request: RecommendationRequest,
    loaded: ProductTableLoad = Depends(get_product_table_load),
):
    """
    Resolve recommendations.

    Never returns an error for a valid classification: unknown keys fall
    back to "3-normal", and an empty list is a valid answer.
    """
    if request.answers is not None:
        fitzpatrick_type = classify(request.answers)
        skin_type = extract_skin_type(request.answers)
        preferences = request.preferences or preferences_from_answers(request.answers)
    elif request.fitzpatrick_type is not None and request.skin_type is not None:
        fitzpatrick_type = request.fitzpatrick_type
        skin_type = request.skin_type
        preferences = request.preferences
    else:
        raise HTTPException(
            status_code=400,
            detail="Must provide answers or fitzpatrick_type and skin_type"
        )

    try:
        result = recommend(fitzpatrick_type, skin_type, loaded.table, preferences=preferences)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Matching error: {str(e)}")

    return result.model_copy(update={
        "product_source": loaded.source,
        "warning": loaded.warning,
    })
