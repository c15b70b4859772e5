"""
Reapplication Intervals

UV index + Fitzpatrick type -> minutes until sunscreen should be reapplied,
via a fixed (type x UV bucket) table.

UV display levels (Low ... Extreme) are a separate mapping from the
interval buckets; either table may change without the other.
"""

import math
from types import MappingProxyType
from typing import Mapping, Tuple

from spfmatch import config


UV_BUCKETS = ("1-2", "3-5", "6-7", "8-10", "11+")

# Lower bound of each bucket, checked in descending order
_BUCKET_THRESHOLDS: Tuple[Tuple[float, str], ...] = (
    (11, "11+"),
    (8, "8-10"),
    (6, "6-7"),
    (3, "3-5"),
)

ReapplicationTable = Mapping[int, Mapping[str, int]]

REAPPLICATION_TIME_TABLE: ReapplicationTable = MappingProxyType({
    1: MappingProxyType({"1-2": 120, "3-5": 60, "6-7": 40, "8-10": 20, "11+": 10}),
    2: MappingProxyType({"1-2": 120, "3-5": 80, "6-7": 60, "8-10": 30, "11+": 20}),
    3: MappingProxyType({"1-2": 180, "3-5": 100, "6-7": 80, "8-10": 40, "11+": 30}),
    4: MappingProxyType({"1-2": 180, "3-5": 120, "6-7": 100, "8-10": 60, "11+": 40}),
    5: MappingProxyType({"1-2": 200, "3-5": 140, "6-7": 120, "8-10": 80, "11+": 60}),
    6: MappingProxyType({"1-2": 200, "3-5": 160, "6-7": 140, "8-10": 100, "11+": 80}),
})

UV_LEVELS: Tuple[Tuple[float, str], ...] = (
    (11, "Extreme"),
    (8, "Very High"),
    (6, "High"),
    (3, "Moderate"),
)

# At or below this the sun poses no material risk and no timer is offered
NO_TIMER_UV_THRESHOLD = 1.0


def uv_bucket(uv_index: float) -> str:
    """
    Interval bucket for a UV index.

    >=11 "11+", >=8 "8-10", >=6 "6-7", >=3 "3-5", anything else "1-2".
    """
    for lower_bound, bucket in _BUCKET_THRESHOLDS:
        if uv_index >= lower_bound:
            return bucket
    return "1-2"


def recommended_interval_minutes(
    uv_index: float,
    fitzpatrick_type: int,
    table: ReapplicationTable = REAPPLICATION_TIME_TABLE,
) -> int:
    """
    Minutes between applications for (UV index, Fitzpatrick type).

    Types outside the table use the type-3 row.
    """
    row = table.get(fitzpatrick_type)
    if row is None:
        row = table[config.DEFAULT_FITZPATRICK_ROW]
    return row[uv_bucket(uv_index)]


def uv_level(uv_index: float) -> str:
    """Display label: Extreme, Very High, High, Moderate or Low."""
    for threshold, level in UV_LEVELS:
        if uv_index >= threshold:
            return level
    return "Low"


def timer_needed(uv_index: float) -> bool:
    """False when UV is too low to warrant a reapplication timer."""
    if math.isnan(uv_index):
        return False
    return uv_index > NO_TIMER_UV_THRESHOLD
