"""
Matching Layer Core Logic

Classification -> Product recommendations

1. Build the composite key "{fitzpatrick}-{skinType}"
2. Look it up in the product table, falling back to the default key
3. Narrow the candidates by the user's preference filters

The table is never mutated; filtering returns a new list that keeps the
source order.
"""

import logging
from typing import FrozenSet, Iterable, List, Mapping, Optional, Sequence

from spfmatch import config
from spfmatch.catalog.models import ProductTable, SunscreenProduct
from spfmatch.questionnaire.data import QUESTIONNAIRE_QUESTIONS
from spfmatch.questionnaire.models import Answers, Question, SkinType
from spfmatch.questionnaire.scoring import classify, extract_skin_type
from spfmatch.shared.hashing import fingerprint
from .models import (
    DEFAULT_PREFERENCE_MAPPINGS,
    NO_PREFERENCE,
    PreferenceFilters,
    PreferenceMappings,
    RecommendationResult,
)

logger = logging.getLogger(__name__)


def composite_key(fitzpatrick_type: int, skin_type: str) -> str:
    return f"{fitzpatrick_type}-{skin_type}"


def resolve_key(
    fitzpatrick_type: int,
    skin_type: str,
    table: ProductTable,
    default_key: str = config.DEFAULT_PRODUCT_KEY,
) -> Optional[str]:
    """Key that will be served: exact key, else default key, else None."""
    key = composite_key(fitzpatrick_type, skin_type)
    if key in table:
        return key
    if default_key in table:
        logger.debug(f"No products for '{key}', falling back to '{default_key}'")
        return default_key
    return None


def match_products(
    fitzpatrick_type: int,
    skin_type: str,
    table: ProductTable,
    default_key: str = config.DEFAULT_PRODUCT_KEY,
) -> List[SunscreenProduct]:
    """
    Products for a classification.

    Returns the default key's products on a miss, or [] if the default
    key is missing too.
    """
    key = resolve_key(fitzpatrick_type, skin_type, table, default_key)
    if key is None:
        return []
    return list(table[key])


def _category_passes(
    selected: Sequence[str],
    product_value: str,
    mapping: Mapping[str, FrozenSet[str]],
) -> bool:
    """OR within a category; empty or NO_PREFERENCE means unconstrained."""
    if not selected or NO_PREFERENCE in selected:
        return True
    return any(product_value in mapping.get(value, ()) for value in selected)


def product_passes(
    product: SunscreenProduct,
    preferences: PreferenceFilters,
    mappings: PreferenceMappings = DEFAULT_PREFERENCE_MAPPINGS,
) -> bool:
    """AND across filter type, tint and vehicle."""
    return (
        _category_passes(preferences.filter_type, product.filter_type, mappings.filter_type)
        and _category_passes(preferences.tint, product.tint, mappings.tint)
        and _category_passes(preferences.vehicle, product.vehicle, mappings.vehicle)
    )


def filter_by_preferences(
    products: Iterable[SunscreenProduct],
    preferences: Optional[PreferenceFilters],
    mappings: PreferenceMappings = DEFAULT_PREFERENCE_MAPPINGS,
) -> List[SunscreenProduct]:
    """Order-preserving subsequence of products passing every active filter."""
    products = list(products)
    if preferences is None or preferences.is_empty:
        return products
    return [p for p in products if product_passes(p, preferences, mappings)]


def _as_selection(answer) -> List[str]:
    if answer is None:
        return []
    if isinstance(answer, str):
        return [answer]
    return [value for value in answer if isinstance(value, str)]


def preferences_from_answers(answers: Answers) -> PreferenceFilters:
    """Lift the filterType / tint / vehicle answers out of an answer set."""
    return PreferenceFilters(
        filter_type=_as_selection(answers.get("filterType")),
        tint=_as_selection(answers.get("tint")),
        vehicle=_as_selection(answers.get("vehicle")),
    )


def compute_result_hash(lookup_key: str, resolved_key: Optional[str], products: Sequence[SunscreenProduct]) -> str:
    return fingerprint({
        "lookup_key": lookup_key,
        "resolved_key": resolved_key,
        "products": [p.name for p in products],
    })


def recommend(
    fitzpatrick_type: int,
    skin_type: SkinType,
    table: ProductTable,
    preferences: Optional[PreferenceFilters] = None,
    mappings: PreferenceMappings = DEFAULT_PREFERENCE_MAPPINGS,
    default_key: str = config.DEFAULT_PRODUCT_KEY,
) -> RecommendationResult:
    """
    Main matching function: lookup + preference filtering with audit fields.

    DETERMINISTIC: same inputs -> same products and result_hash.
    """
    preferences = preferences or PreferenceFilters()
    lookup_key = composite_key(fitzpatrick_type, skin_type)
    resolved_key = resolve_key(fitzpatrick_type, skin_type, table, default_key)
    candidates = list(table[resolved_key]) if resolved_key else []
    products = filter_by_preferences(candidates, preferences, mappings)

    return RecommendationResult(
        fitzpatrick_type=fitzpatrick_type,
        skin_type=skin_type,
        lookup_key=lookup_key,
        resolved_key=resolved_key,
        used_fallback=resolved_key != lookup_key,
        preferences=preferences,
        candidates_count=len(candidates),
        products=products,
        result_hash=compute_result_hash(lookup_key, resolved_key, products),
    )


def recommend_from_answers(
    answers: Answers,
    table: ProductTable,
    questions: Sequence[Question] = QUESTIONNAIRE_QUESTIONS,
    mappings: PreferenceMappings = DEFAULT_PREFERENCE_MAPPINGS,
) -> RecommendationResult:
    """Classify an answer set and recommend, using its own preference answers."""
    return recommend(
        classify(answers, questions),
        extract_skin_type(answers, questions),
        table,
        preferences=preferences_from_answers(answers),
        mappings=mappings,
    )
