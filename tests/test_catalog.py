"""
Catalog Tests

Tests validate:
- Roman-numeral scale expansion and skin-type parsing
- Row normalization and rejection of malformed rows
- One row -> many lookup keys, each an independent copy
- Bundled database shape
"""

import pytest

from spfmatch.catalog.database import load_static_table
from spfmatch.catalog.ingest import (
    RowRejected,
    build_table_from_rows,
    group_products_by_type,
    normalize_filter_type,
    normalize_tint,
    parse_fitzpatrick_scale,
    parse_skin_types,
    transform_row,
)
from spfmatch.catalog.models import SunscreenProduct
from spfmatch.questionnaire.models import SKIN_TYPES


def make_row(
    name="Test Mineral SPF 50",
    scale="IV–VI",
    skin="Oily, Combination",
    filter_type="Mineral",
    spf="50",
    vehicle="Lotion",
    tint="Yes",
    price="$24.00",
    size="2",
    unit_price="",
    image="",
    link="",
):
    return [name, scale, skin, filter_type, spf, vehicle, tint, price, size, unit_price, image, link]


# ============================================================================
# Scale / Skin Type Parsing
# ============================================================================

class TestParseFitzpatrickScale:

    @pytest.mark.parametrize("scale,expected", [
        ("IV–VI", [4, 5, 6]),
        ("I-III", [1, 2, 3]),
        ("V—VI", [5, 6]),
        (" V – VI ", [5, 6]),
        ("iv-v", [4, 5]),
        ("II", [2]),
        ("I-VI", [1, 2, 3, 4, 5, 6]),
    ])
    def test_expands_ranges(self, scale, expected):
        assert parse_fitzpatrick_scale(scale) == expected

    @pytest.mark.parametrize("scale", ["", None, "VII", "I-VII", "1-3", "I-II-III"])
    def test_unparseable_is_empty(self, scale):
        assert parse_fitzpatrick_scale(scale) == []


class TestParseSkinTypes:

    def test_lowercases_and_trims(self):
        assert parse_skin_types("Oily, Combination ,Sensitive") == ["oily", "combination", "sensitive"]

    def test_drops_duplicates_and_blanks(self):
        assert parse_skin_types("dry,, Dry ,") == ["dry"]

    def test_drops_unknown_tags(self):
        assert parse_skin_types("Normal, Acne-prone") == ["normal"]

    def test_empty(self):
        assert parse_skin_types("") == []
        assert parse_skin_types(None) == []


class TestNormalizers:

    @pytest.mark.parametrize("raw,expected", [
        ("Mineral", "Mineral"),
        (" Physical ", "Physical"),
        ("Mixture", "Mixture"),
        ("Chemical", "Chemical"),
        ("Hybrid", "Chemical"),
        ("", "Chemical"),
    ])
    def test_filter_type(self, raw, expected):
        assert normalize_filter_type(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("Yes", "Yes"),
        ("yes ", "Yes"),
        ("TRANSPARENT", "Transparent"),
        ("No", "No"),
        ("sort of", "No"),
    ])
    def test_tint(self, raw, expected):
        assert normalize_tint(raw) == expected


# ============================================================================
# Row Transformation
# ============================================================================

class TestTransformRow:

    def test_full_row(self):
        product = transform_row(make_row(image=" https://img/x.png ", link="https://shop/x"))

        assert product.name == "Test Mineral SPF 50"
        assert product.filter_type == "Mineral"
        assert product.spf == 50
        assert product.vehicle == "Lotion"
        assert product.tint == "Yes"
        assert product.price == 24.0
        assert product.size == 2.0
        assert product.unit_price == 12.0
        assert product.description == "Mineral sunscreen, SPF 50"
        assert product.image == "https://img/x.png"
        assert product.link == "https://shop/x"
        assert product.fitzpatrick_scale == "IV–VI"
        assert product.skin_types == ["oily", "combination"]

    def test_optional_columns_may_be_absent(self):
        product = transform_row(make_row()[:9])
        assert product.image is None
        assert product.link is None

    def test_lenient_numbers(self):
        product = transform_row(make_row(spf="50+", price="$1,024.50", size="1.7 oz"))
        assert product.spf == 50
        assert product.price == 1024.5
        assert product.size == 1.7

    def test_short_row_rejected(self):
        with pytest.raises(RowRejected):
            transform_row(make_row()[:8])

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name_rejected(self, name):
        with pytest.raises(RowRejected):
            transform_row(make_row(name=name))

    @pytest.mark.parametrize("field_name", ["spf", "price", "size"])
    def test_unparseable_number_rejected(self, field_name):
        with pytest.raises(RowRejected):
            transform_row(make_row(**{field_name: "n/a"}))

    def test_zero_spf_rejected(self):
        with pytest.raises(RowRejected):
            transform_row(make_row(spf="0"))

    @pytest.mark.parametrize("field_name", ["spf", "price", "size"])
    def test_overflowing_number_rejected(self, field_name):
        """A digit run too long for a float is a bad cell, not a crash."""
        with pytest.raises(RowRejected):
            transform_row(make_row(**{field_name: "9" * 400}))


class TestUnitPrice:

    def test_zero_size_gives_zero_unit_price(self):
        product = transform_row(make_row(size="0"))
        assert product.unit_price == 0.0

    def test_unit_price_is_derived(self):
        product = SunscreenProduct(
            name="X", filter_type="Chemical", spf=30, vehicle="Gel",
            tint="No", price=39.0, size=1.7,
        )
        assert product.unit_price == 39.0 / 1.7


# ============================================================================
# Table Building
# ============================================================================

class TestBuildTable:

    def test_row_expands_to_every_key(self):
        table, report = build_table_from_rows([make_row()])

        assert sorted(table.keys()) == sorted([
            "4-oily", "4-combination",
            "5-oily", "5-combination",
            "6-oily", "6-combination",
        ])
        assert report.rows_accepted == 1
        assert report.table_keys == 6
        assert report.table_entries == 6

    def test_entries_are_copies(self):
        table, _ = build_table_from_rows([make_row()])
        first = table["4-oily"][0]
        second = table["6-combination"][0]
        assert first == second
        assert first is not second

    def test_rows_keep_sheet_order_within_key(self):
        rows = [make_row(name="A", scale="II"), make_row(name="B", scale="II")]
        table, _ = build_table_from_rows(rows)
        assert [p.name for p in table["2-oily"]] == ["A", "B"]

    def test_no_dedup_across_rows(self):
        rows = [make_row(name="Same", scale="III"), make_row(name="Same", scale="III")]
        table, _ = build_table_from_rows(rows)
        assert len(table["3-oily"]) == 2

    def test_malformed_rows_skipped(self):
        rows = [
            make_row(name="Good"),
            make_row(name=""),
            ["too", "short"],
            make_row(name="Bad price", price="call us"),
            make_row(name="Also good", scale="I", skin="Dry"),
        ]
        table, report = build_table_from_rows(rows)

        assert report.rows_total == 5
        assert report.rows_accepted == 2
        assert report.rows_skipped == 3
        assert [s.row_number for s in report.skipped] == [3, 4, 5]
        assert "1-dry" in table
        assert all(p.name != "Bad price" for products in table.values() for p in products)

    def test_overflowing_spf_row_skipped(self):
        rows = [
            make_row(name="Huge", scale="II", skin="Normal", spf="9" * 400),
            make_row(name="Good", scale="II", skin="Normal"),
        ]
        table, report = build_table_from_rows(rows)

        assert report.rows_skipped == 1
        assert report.skipped[0].row_number == 2
        assert [p.name for p in table["2-normal"]] == ["Good"]

    def test_unindexable_product_dropped(self):
        """Accepted rows without a usable scale land under no key."""
        table, report = build_table_from_rows([make_row(scale="")])
        assert report.rows_accepted == 1
        assert dict(table) == {}

    def test_group_is_pure(self):
        product = transform_row(make_row(scale="V"))
        grouped = group_products_by_type([product])
        assert list(grouped) == ["5-oily", "5-combination"]
        assert product.skin_types == ["oily", "combination"]

    def test_table_is_read_only(self):
        table, _ = build_table_from_rows([make_row()])
        with pytest.raises(TypeError):
            table["1-normal"] = ()


# ============================================================================
# Bundled Database
# ============================================================================

class TestStaticTable:

    def test_all_thirty_keys(self):
        table = load_static_table()
        expected = {f"{f}-{s}" for f in range(1, 7) for s in SKIN_TYPES}
        assert set(table.keys()) == expected

    def test_type_six_normal(self):
        table = load_static_table()
        assert [p.name for p in table["6-normal"]] == ["Black Girl Sunscreen Kids SPF 50"]

    def test_loaded_once(self):
        assert load_static_table() is load_static_table()
