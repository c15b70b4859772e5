"""
SPFMatch Matching Layer

Classification -> Sunscreen recommendations

Looks up the "{fitzpatrick}-{skinType}" key (falling back to "3-normal")
and narrows the result by filter type, tint and vehicle preferences.
"""

from .models import (
    NO_PREFERENCE,
    PreferenceFilters,
    PreferenceMappings,
    RecommendationRequest,
    RecommendationResult,
)
from .match import (
    composite_key,
    match_products,
    filter_by_preferences,
    preferences_from_answers,
    recommend,
    recommend_from_answers,
)

__all__ = [
    "NO_PREFERENCE",
    "PreferenceFilters",
    "PreferenceMappings",
    "RecommendationRequest",
    "RecommendationResult",
    "composite_key",
    "match_products",
    "filter_by_preferences",
    "preferences_from_answers",
    "recommend",
    "recommend_from_answers",
]
