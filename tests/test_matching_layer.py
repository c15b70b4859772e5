"""
Matching Layer Tests

Tests for classification-to-product matching.

Tests validate:
- Composite-key lookup with "3-normal" fallback
- Preference filtering (AND across categories, OR within)
- "Anything is fine" disables a category
- Enumerated value mappings and configurable filter synonyms
- Order preservation and deterministic output
"""

from types import MappingProxyType

import pytest

from spfmatch.catalog.database import load_static_table
from spfmatch.catalog.models import SunscreenProduct
from spfmatch.matching.match import (
    composite_key,
    filter_by_preferences,
    match_products,
    preferences_from_answers,
    recommend,
    recommend_from_answers,
)
from spfmatch.matching.models import (
    NO_PREFERENCE,
    PreferenceFilters,
    PreferenceMappings,
)
from spfmatch.questionnaire.models import SKIN_TYPES
from spfmatch.shared.hashing import canonical_json, fingerprint


# ============================================================================
# Test Fixtures
# ============================================================================

def make_product(
    name: str,
    filter_type: str = "Chemical",
    tint: str = "No",
    vehicle: str = "Lotion",
    spf: int = 50,
) -> SunscreenProduct:
    """Helper to create test products."""
    return SunscreenProduct(
        name=name,
        filter_type=filter_type,
        spf=spf,
        vehicle=vehicle,
        tint=tint,
        price=20.0,
        size=2.0,
        description=f"{name} test product",
    )


def make_table(**keys) -> MappingProxyType:
    """make_table(**{"3-normal": [...]}) -> read-only table."""
    return MappingProxyType({k: tuple(v) for k, v in keys.items()})


@pytest.fixture
def catalog():
    return [
        make_product("Mineral Lotion", filter_type="Mineral", tint="No", vehicle="Lotion"),
        make_product("Physical Cream Tinted", filter_type="Physical", tint="Yes", vehicle="Cream"),
        make_product("Chemical Gel", filter_type="Chemical", tint="Transparent", vehicle="Gel"),
        make_product("Mixture Spray", filter_type="Mixture", tint="No", vehicle="Spray"),
        make_product("Chemical Powder Tinted", filter_type="Chemical", tint="Yes", vehicle="Powder"),
        make_product("Mineral Spray Clear", filter_type="Mineral", tint="Transparent", vehicle="Spray"),
    ]


def names(products):
    return [p.name for p in products]


def prefs(filter_type=None, tint=None, vehicle=None) -> PreferenceFilters:
    return PreferenceFilters(
        filter_type=filter_type or [],
        tint=tint or [],
        vehicle=vehicle or [],
    )


# ============================================================================
# Lookup
# ============================================================================

class TestMatchProducts:

    def test_composite_key(self):
        assert composite_key(4, "oily") == "4-oily"

    def test_exact_key(self):
        table = load_static_table()
        assert names(match_products(6, "normal", table)) == ["Black Girl Sunscreen Kids SPF 50"]

    def test_missing_key_uses_default(self):
        default = [make_product("Default Pick")]
        table = make_table(**{"3-normal": default, "1-dry": [make_product("Dry Pick")]})

        assert names(match_products(5, "oily", table)) == ["Default Pick"]

    def test_missing_default_is_empty(self):
        table = make_table(**{"1-dry": [make_product("Dry Pick")]})
        assert match_products(5, "oily", table) == []

    def test_empty_table(self):
        assert match_products(3, "normal", make_table()) == []

    def test_never_raises_for_valid_classifications(self):
        sparse = make_table(**{"2-oily": [make_product("Only")]})
        for fitzpatrick_type in range(1, 7):
            for skin_type in SKIN_TYPES:
                match_products(fitzpatrick_type, skin_type, load_static_table())
                match_products(fitzpatrick_type, skin_type, sparse)

    def test_returns_new_list(self):
        table = make_table(**{"3-normal": [make_product("A")]})
        result = match_products(3, "normal", table)
        result.append(make_product("B"))
        assert len(table["3-normal"]) == 1


# ============================================================================
# Preference Filtering
# ============================================================================

class TestFilterByPreferences:

    def test_no_preferences_returns_input(self, catalog):
        assert filter_by_preferences(catalog, prefs()) == catalog
        assert filter_by_preferences(catalog, None) == catalog

    def test_physical_matches_mineral_and_physical(self, catalog):
        result = filter_by_preferences(catalog, prefs(filter_type=["Physical"]))
        assert names(result) == ["Mineral Lotion", "Physical Cream Tinted", "Mineral Spray Clear"]

    def test_chemical_only(self, catalog):
        result = filter_by_preferences(catalog, prefs(filter_type=["Chemical"]))
        assert names(result) == ["Chemical Gel", "Chemical Powder Tinted"]

    def test_or_within_category(self, catalog):
        result = filter_by_preferences(catalog, prefs(filter_type=["Chemical", "Mixture"]))
        assert names(result) == ["Chemical Gel", "Mixture Spray", "Chemical Powder Tinted"]

    def test_skin_colored_matches_yes_and_transparent(self, catalog):
        result = filter_by_preferences(catalog, prefs(tint=["Skin-colored"]))
        assert names(result) == [
            "Physical Cream Tinted",
            "Chemical Gel",
            "Chemical Powder Tinted",
            "Mineral Spray Clear",
        ]

    def test_no_tint(self, catalog):
        result = filter_by_preferences(catalog, prefs(tint=["No tint"]))
        assert names(result) == ["Mineral Lotion", "Mixture Spray"]

    def test_cream_lotion_matches_both(self, catalog):
        result = filter_by_preferences(catalog, prefs(vehicle=["Cream/lotion"]))
        assert names(result) == ["Mineral Lotion", "Physical Cream Tinted"]

    def test_and_across_categories(self, catalog):
        result = filter_by_preferences(
            catalog,
            prefs(filter_type=["Physical"], tint=["Transparent"], vehicle=["Spray"]),
        )
        assert names(result) == ["Mineral Spray Clear"]

    def test_sentinel_disables_category(self, catalog):
        """'Anything is fine' wins even next to concrete values."""
        result = filter_by_preferences(
            catalog,
            prefs(tint=["No tint", NO_PREFERENCE], vehicle=["Spray"]),
        )
        assert names(result) == ["Mixture Spray", "Mineral Spray Clear"]

    def test_sentinel_in_every_category(self, catalog):
        everything = [NO_PREFERENCE]
        result = filter_by_preferences(catalog, prefs(everything, everything, everything))
        assert result == catalog

    def test_unknown_preference_value_matches_nothing(self, catalog):
        assert filter_by_preferences(catalog, prefs(vehicle=["Stick"])) == []

    def test_subsequence_properties(self, catalog):
        preferences = prefs(filter_type=["Physical", "Chemical"], vehicle=["Cream/lotion", "Powder"])
        result = filter_by_preferences(catalog, preferences)

        assert len(result) <= len(catalog)
        positions = [catalog.index(p) for p in result]
        assert positions == sorted(positions)

    def test_does_not_mutate_input(self, catalog):
        before = list(catalog)
        filter_by_preferences(catalog, prefs(filter_type=["Mixture"]))
        assert catalog == before

    def test_physical_synonyms_configurable(self, catalog):
        strict = PreferenceMappings.with_filter_synonyms(frozenset({"Physical"}))
        result = filter_by_preferences(catalog, prefs(filter_type=["Physical"]), strict)
        assert names(result) == ["Physical Cream Tinted"]

    def test_default_mappings_unchanged_by_override(self):
        PreferenceMappings.with_filter_synonyms(frozenset({"Physical"}))
        assert PreferenceMappings().filter_type["Physical"] == frozenset({"Physical", "Mineral"})


# ============================================================================
# Preferences From Answers
# ============================================================================

class TestPreferencesFromAnswers:

    def test_lists_and_strings(self):
        preferences = preferences_from_answers({
            "filterType": ["Physical", "Mixture"],
            "tint": "No tint",
            "eyeColor": "Blue",
        })
        assert preferences.filter_type == ["Physical", "Mixture"]
        assert preferences.tint == ["No tint"]
        assert preferences.vehicle == []

    def test_empty(self):
        assert preferences_from_answers({}).is_empty


# ============================================================================
# Recommend
# ============================================================================

class TestRecommend:

    def test_exact_hit(self):
        result = recommend(6, "normal", load_static_table())

        assert result.lookup_key == "6-normal"
        assert result.resolved_key == "6-normal"
        assert result.used_fallback is False
        assert result.candidates_count == 1
        assert names(result.products) == ["Black Girl Sunscreen Kids SPF 50"]
        assert result.result_hash.startswith("sha256:")

    def test_fallback_flagged(self):
        table = make_table(**{"3-normal": [make_product("Default Pick")]})
        result = recommend(1, "dry", table)

        assert result.lookup_key == "1-dry"
        assert result.resolved_key == "3-normal"
        assert result.used_fallback is True

    def test_no_products_anywhere(self):
        result = recommend(1, "dry", make_table())
        assert result.resolved_key is None
        assert result.products == []

    def test_filtered_to_empty_keeps_candidate_count(self):
        result = recommend(6, "normal", load_static_table(), prefs(filter_type=["Physical"]))
        assert result.candidates_count == 1
        assert result.products == []

    def test_deterministic_hash(self):
        table = load_static_table()
        first = recommend(2, "dry", table, prefs(tint=["Skin-colored"]))
        second = recommend(2, "dry", table, prefs(tint=["Skin-colored"]))
        other = recommend(2, "oily", table)

        assert first.result_hash == second.result_hash
        assert first.result_hash != other.result_hash

    def test_from_answers_end_to_end(self):
        answers = {
            "eyeColor": "Dark Brown",
            "hairColor": "Black",
            "skinColor": "Dark brown",
            "freckles": "None",
            "sunReaction": "Never had burns",
            "tanningDegree": "Turn dark brown quickly",
            "tanningHours": "Always",
            "faceReaction": "Never had a problem",
            "lastExposure": "Less than 2 weeks ago",
            "faceExposure": "Always",
            "skinType": "Hydrated and comfortable",
            "vehicle": [NO_PREFERENCE],
        }
        result = recommend_from_answers(answers, load_static_table())

        assert result.fitzpatrick_type == 6
        assert result.skin_type == "normal"
        assert result.resolved_key == "6-normal"
        assert names(result.products) == ["Black Girl Sunscreen Kids SPF 50"]


# ============================================================================
# Fingerprints
# ============================================================================

class TestFingerprint:

    def test_key_order_irrelevant(self):
        assert fingerprint({"a": 1, "b": [1, 2]}) == fingerprint({"b": [1, 2], "a": 1})

    def test_volatile_keys_ignored(self):
        base = {"products": ["A"]}
        assert fingerprint(base) == fingerprint(dict(base, generated_at="2024-06-01T12:00:00"))

    def test_models_hash_like_their_dump(self):
        product = make_product("A")
        assert canonical_json(product) == canonical_json(product.model_dump(mode="json"))

    def test_prefix(self):
        assert fingerprint([]).startswith("sha256:")
        assert len(fingerprint([])) == len("sha256:") + 64
