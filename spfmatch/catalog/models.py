"""
Catalog Models

Sunscreen product records and the composite-key lookup table.

A product is stored under every "{fitzpatrick}-{skinType}" key it matches,
as an independent copy per key.
"""

from dataclasses import dataclass
from typing import List, Literal, Mapping, Optional, Tuple
from pydantic import BaseModel, Field, computed_field


FilterType = Literal["Mineral", "Physical", "Chemical", "Mixture"]
Tint = Literal["Yes", "No", "Transparent"]
ProductSource = Literal["static", "remote"]


class SunscreenProduct(BaseModel):
    """A single sunscreen recommendation."""
    name: str = Field(min_length=1)
    filter_type: FilterType
    spf: int = Field(gt=0)
    vehicle: str = Field(description="Lotion, Cream, Gel, Spray, Powder, Oil, Serum, Essence...")
    tint: Tint
    price: float = Field(ge=0, description="Price in currency units")
    size: float = Field(ge=0, description="Size in fluid ounces")
    description: str = ""
    link: Optional[str] = None
    image: Optional[str] = None
    # Ingestion-only fields, used to expand into lookup keys
    fitzpatrick_scale: Optional[str] = Field(
        default=None,
        description="Roman numeral range e.g. 'IV–VI'"
    )
    skin_types: Optional[List[str]] = Field(
        default=None,
        description="Lowercase skin-type tags e.g. ['oily', 'combination']"
    )

    class Config:
        # unit_price comes back in serialized payloads; ignore it on input
        frozen = True
        extra = "ignore"

    @computed_field
    @property
    def unit_price(self) -> float:
        """Price per fluid ounce; 0 when size is 0."""
        if self.size <= 0:
            return 0.0
        return self.price / self.size


# composite key -> ordered products
ProductTable = Mapping[str, Tuple[SunscreenProduct, ...]]


class SkippedRow(BaseModel):
    row_number: int = Field(description="1-based sheet row number")
    reason: str


class IngestionReport(BaseModel):
    """Outcome of turning sheet rows into a lookup table."""
    rows_total: int = 0
    rows_accepted: int = 0
    rows_skipped: int = 0
    skipped: List[SkippedRow] = Field(default_factory=list)
    table_keys: int = 0
    table_entries: int = Field(
        default=0,
        description="Products summed over all keys (one row may produce many)"
    )


@dataclass(frozen=True)
class ProductTableLoad:
    """Lookup table plus where it came from."""
    table: ProductTable
    source: ProductSource
    warning: Optional[str] = None
    report: Optional[IngestionReport] = None

    @property
    def key_count(self) -> int:
        return len(self.table)

    @property
    def product_count(self) -> int:
        return sum(len(products) for products in self.table.values())
