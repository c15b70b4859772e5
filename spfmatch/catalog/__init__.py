"""
SPFMatch Catalog

Sunscreen products and the "{fitzpatrick}-{skinType}" lookup table,
from the bundled database or a Google Sheets export.
"""

from .models import (
    SunscreenProduct,
    ProductTable,
    ProductTableLoad,
    IngestionReport,
)
from .database import load_static_table
from .ingest import build_table_from_rows, parse_fitzpatrick_scale, parse_skin_types
from .sheets_client import (
    SheetsClient,
    SheetsFetchError,
    load_product_table,
    load_product_table_async,
)

__all__ = [
    "SunscreenProduct",
    "ProductTable",
    "ProductTableLoad",
    "IngestionReport",
    "load_static_table",
    "build_table_from_rows",
    "parse_fitzpatrick_scale",
    "parse_skin_types",
    "SheetsClient",
    "SheetsFetchError",
    "load_product_table",
    "load_product_table_async",
]
