"""
Matching Layer Models

Preference filters, their value mappings, and recommendation results.
"""

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import FrozenSet, List, Mapping, Optional
from pydantic import BaseModel, Field

from spfmatch.catalog.models import SunscreenProduct
from spfmatch.questionnaire.data import NO_PREFERENCE
from spfmatch.questionnaire.models import Answers, SkinType


# Filter-type labels treated as the same product filter. Physical and
# Mineral are synonyms in some sheets and distinct in others.
FILTER_TYPE_SYNONYMS: Mapping[str, FrozenSet[str]] = MappingProxyType({
    "Physical": frozenset({"Physical", "Mineral"}),
})


def _freeze(mapping: Mapping[str, set]) -> Mapping[str, FrozenSet[str]]:
    return MappingProxyType({k: frozenset(v) for k, v in mapping.items()})


@dataclass(frozen=True)
class PreferenceMappings:
    """
    User-facing preference value -> accepted product field values.

    One mapping per category. Preference values missing from a mapping
    accept nothing.
    """
    filter_type: Mapping[str, FrozenSet[str]] = field(default_factory=lambda: _freeze({
        "Physical": FILTER_TYPE_SYNONYMS["Physical"],
        "Chemical": {"Chemical"},
        "Mixture": {"Mixture"},
    }))
    tint: Mapping[str, FrozenSet[str]] = field(default_factory=lambda: _freeze({
        "Skin-colored": {"Yes", "Transparent"},
        "Transparent": {"Transparent"},
        "No tint": {"No"},
    }))
    vehicle: Mapping[str, FrozenSet[str]] = field(default_factory=lambda: _freeze({
        "Cream/lotion": {"Cream", "Lotion"},
        "Spray": {"Spray"},
        "Powder": {"Powder"},
    }))

    @classmethod
    def with_filter_synonyms(cls, physical: FrozenSet[str]) -> "PreferenceMappings":
        """Same mappings with a different set of labels accepted for 'Physical'."""
        default = cls()
        filter_type = dict(default.filter_type)
        filter_type["Physical"] = frozenset(physical)
        return cls(filter_type=MappingProxyType(filter_type), tint=default.tint, vehicle=default.vehicle)


DEFAULT_PREFERENCE_MAPPINGS = PreferenceMappings()


class PreferenceFilters(BaseModel):
    """
    Optional category filters from the preference questions.

    Empty list = no constraint. "Anything is fine" anywhere in a list
    disables that category.
    """
    filter_type: List[str] = Field(default_factory=list)
    tint: List[str] = Field(default_factory=list)
    vehicle: List[str] = Field(default_factory=list)

    class Config:
        extra = "forbid"

    @property
    def is_empty(self) -> bool:
        return not (self.filter_type or self.tint or self.vehicle)


class RecommendationRequest(BaseModel):
    """
    Recommendation input.

    Either a full answer set (classified server-side) or an explicit
    fitzpatrick_type + skin_type pair.
    """
    answers: Optional[Answers] = Field(
        default=None,
        description="Questionnaire answers keyed by question id"
    )
    fitzpatrick_type: Optional[int] = Field(default=None, ge=1, le=6)
    skin_type: Optional[SkinType] = None
    preferences: Optional[PreferenceFilters] = Field(
        default=None,
        description="Overrides preferences taken from answers"
    )

    class Config:
        extra = "forbid"


class RecommendationResult(BaseModel):
    """Products matched for one classification."""
    fitzpatrick_type: int = Field(ge=1, le=6)
    skin_type: SkinType
    lookup_key: str = Field(description="Requested '{fitzpatrick}-{skinType}' key")
    resolved_key: Optional[str] = Field(
        description="Key actually served (default key on a miss, None if both missing)"
    )
    used_fallback: bool
    preferences: PreferenceFilters
    candidates_count: int = Field(ge=0, description="Products before preference filtering")
    products: List[SunscreenProduct]
    result_hash: str
    product_source: str = "static"
    warning: Optional[str] = None
    generated_at: datetime = Field(default_factory=datetime.utcnow)

