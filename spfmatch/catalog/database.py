"""
Bundled Sunscreen Database

Curated lookup table shipped with the package
(spfmatch/data/sunscreen_database.json), keyed "{fitzpatrick}-{skinType}".
Loaded once and served read-only.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List

from .models import ProductTable, SunscreenProduct

logger = logging.getLogger(__name__)

STATIC_DATABASE_PATH = Path(__file__).resolve().parent.parent / "data" / "sunscreen_database.json"


def table_from_dict(raw: Dict[str, List[Dict[str, Any]]]) -> ProductTable:
    """Validate a plain {key: [product dict]} mapping into a read-only table."""
    table = {
        key: tuple(SunscreenProduct(**product) for product in products)
        for key, products in raw.items()
    }
    return MappingProxyType(table)


@lru_cache(maxsize=1)
def load_static_table(path: Path = STATIC_DATABASE_PATH) -> ProductTable:
    """Bundled table. Cached: the file is read at most once per process."""
    with open(path, "r", encoding="utf-8") as fh:
        raw = json.load(fh)

    table = table_from_dict(raw)
    logger.info(
        f"Loaded static sunscreen table: {len(table)} keys, "
        f"{sum(len(p) for p in table.values())} products"
    )
    return table
