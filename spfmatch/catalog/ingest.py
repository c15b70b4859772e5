"""
Sheet Row Ingestion

Turns spreadsheet-shaped rows into the composite-key lookup table.

Column order (Sunscreen!A:L):
    name, fitzpatrickScale, skinType, filterType, spf, vehicle, tint,
    price, size, unitPrice?, image?, link?

Each row expands to one table entry per (Fitzpatrick type x skin type):
a row with scale "IV–VI" and skin types "oily, combination" lands under
six keys. Malformed rows are skipped with a warning; ingestion never aborts.
"""

import logging
import math
import re
from types import MappingProxyType
from typing import Any, Dict, List, Optional, Sequence, Tuple

from spfmatch.questionnaire.models import SKIN_TYPES
from .models import (
    FilterType,
    IngestionReport,
    ProductTable,
    SkippedRow,
    SunscreenProduct,
    Tint,
)

logger = logging.getLogger(__name__)

MIN_ROW_COLUMNS = 9

ROMAN_NUMERALS = MappingProxyType({
    "I": 1,
    "II": 2,
    "III": 3,
    "IV": 4,
    "V": 5,
    "VI": 6,
})

# Hyphen, en dash, em dash
_RANGE_SEPARATOR = re.compile(r"[-–—]")
_LEADING_NUMBER = re.compile(r"\d+(?:\.\d+)?")


class RowRejected(Exception):
    """A sheet row that cannot become a product."""
    pass


def parse_fitzpatrick_scale(scale: Optional[str]) -> List[int]:
    """
    Expand a Roman-numeral scale into discrete Fitzpatrick types.

    "IV–VI" -> [4, 5, 6]; "II" -> [2]; "" -> [].
    Unknown numerals yield [] (logged).
    """
    if not scale:
        return []

    cleaned = re.sub(r"\s", "", scale).upper()
    parts = _RANGE_SEPARATOR.split(cleaned)

    if len(parts) == 1:
        value = ROMAN_NUMERALS.get(parts[0])
        if value is None:
            logger.warning(f"Unknown Fitzpatrick numeral '{scale}'")
            return []
        return [value]

    if len(parts) == 2:
        start = ROMAN_NUMERALS.get(parts[0])
        end = ROMAN_NUMERALS.get(parts[1])
        if start is None or end is None:
            logger.warning(f"Unknown Fitzpatrick range '{scale}'")
            return []
        return list(range(start, end + 1))

    logger.warning(f"Unparseable Fitzpatrick scale '{scale}'")
    return []


def parse_skin_types(skin_type_str: Optional[str]) -> List[str]:
    """
    Comma-separated skin types -> lowercase tags, order kept, duplicates
    and unknown tags dropped.
    """
    if not skin_type_str:
        return []

    tags: List[str] = []
    for raw in skin_type_str.split(","):
        tag = raw.strip().lower()
        if not tag or tag in tags:
            continue
        if tag not in SKIN_TYPES:
            logger.warning(f"Dropping unknown skin type '{raw.strip()}'")
            continue
        tags.append(tag)
    return tags


def normalize_filter_type(filter_type: str) -> FilterType:
    normalized = filter_type.strip()
    if normalized in ("Physical", "Mineral", "Mixture"):
        return normalized
    return "Chemical"


def normalize_tint(tint: str) -> Tint:
    normalized = tint.strip().lower()
    if normalized == "transparent":
        return "Transparent"
    if normalized == "yes":
        return "Yes"
    return "No"


def _parse_number(raw: str, field_name: str) -> float:
    """Leading number of a cell: "$39.00" -> 39.0, "1.7 oz" -> 1.7, "50+" -> 50."""
    match = _LEADING_NUMBER.search(raw.replace("$", "").replace(",", ""))
    if not match:
        raise RowRejected(f"unparseable {field_name} '{raw}'")
    value = float(match.group())
    if not math.isfinite(value):
        raise RowRejected(f"{field_name} out of range")
    return value


def _cell(row: Sequence[Any], index: int) -> str:
    if index >= len(row) or row[index] is None:
        return ""
    return str(row[index])


def transform_row(row: Sequence[Any]) -> SunscreenProduct:
    """
    Build a product from one sheet row.

    Raises:
        RowRejected: short row, blank name, or unparseable spf/price/size
    """
    if len(row) < MIN_ROW_COLUMNS:
        raise RowRejected(f"only {len(row)} columns, need {MIN_ROW_COLUMNS}")

    name = _cell(row, 0).strip()
    if not name:
        raise RowRejected("missing name")

    filter_type_raw = _cell(row, 3)
    spf = int(_parse_number(_cell(row, 4), "spf"))
    if spf <= 0:
        raise RowRejected(f"non-positive spf '{_cell(row, 4)}'")
    price = _parse_number(_cell(row, 7), "price")
    size = _parse_number(_cell(row, 8), "size")

    return SunscreenProduct(
        name=name,
        filter_type=normalize_filter_type(filter_type_raw),
        spf=spf,
        vehicle=_cell(row, 5).strip(),
        tint=normalize_tint(_cell(row, 6)),
        price=price,
        size=size,
        description=f"{filter_type_raw.strip()} sunscreen, SPF {spf}",
        image=_cell(row, 10).strip() or None,
        link=_cell(row, 11).strip() or None,
        fitzpatrick_scale=_cell(row, 1).strip(),
        skin_types=parse_skin_types(_cell(row, 2)),
    )


def group_products_by_type(products: Sequence[SunscreenProduct]) -> Dict[str, List[SunscreenProduct]]:
    """
    Index products under every "{fitzpatrick}-{skinType}" they cover.

    Each key receives its own copy of the product; no de-duplication
    across keys.
    """
    grouped: Dict[str, List[SunscreenProduct]] = {}

    for product in products:
        if not product.fitzpatrick_scale or not product.skin_types:
            logger.debug(f"'{product.name}' has no scale or skin types, not indexed")
            continue

        for fitzpatrick_type in parse_fitzpatrick_scale(product.fitzpatrick_scale):
            for skin_type in product.skin_types:
                key = f"{fitzpatrick_type}-{skin_type}"
                grouped.setdefault(key, []).append(product.model_copy(deep=True))

    return grouped


def build_table_from_rows(rows: Sequence[Sequence[Any]]) -> Tuple[ProductTable, IngestionReport]:
    """
    Ingest raw sheet rows into a read-only lookup table.

    Row numbers in the report are sheet rows (data starts at row 2).
    """
    report = IngestionReport(rows_total=len(rows))
    products: List[SunscreenProduct] = []

    for offset, row in enumerate(rows):
        row_number = offset + 2
        try:
            product = transform_row(row)
        except (RowRejected, ValueError, OverflowError) as e:
            # pydantic ValidationError is a ValueError
            reason = str(e).splitlines()[0]
            logger.warning(f"Skipping sheet row {row_number}: {reason}")
            report.skipped.append(SkippedRow(row_number=row_number, reason=reason))
            continue
        logger.debug(f"Accepted sheet row {row_number}: {product.name}")
        products.append(product)

    grouped = group_products_by_type(products)
    table = MappingProxyType({key: tuple(items) for key, items in grouped.items()})

    report.rows_accepted = len(products)
    report.rows_skipped = len(report.skipped)
    report.table_keys = len(table)
    report.table_entries = sum(len(items) for items in table.values())
    return table, report
