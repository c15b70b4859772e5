"""
Result Fingerprints

Stable "sha256:<hex>" digests of recommendation payloads, so two requests
that resolve to the same products can be recognised without comparing
bodies.
"""

import hashlib
import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel

# Keys that change between otherwise identical results
VOLATILE_KEYS = frozenset({"generated_at", "timestamp", "result_hash"})


def _plain(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return _plain(value.model_dump(mode="json"))
    if isinstance(value, dict):
        return {
            str(k): _plain(v)
            for k, v in value.items()
            if k not in VOLATILE_KEYS
        }
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return sorted(_plain(v) for v in value)
    if isinstance(value, float):
        return round(value, 6)
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def canonical_json(value: Any) -> str:
    """Key-sorted, whitespace-free JSON with volatile keys dropped."""
    return json.dumps(_plain(value), sort_keys=True, separators=(",", ":"))


def fingerprint(value: Any) -> str:
    digest = hashlib.sha256(canonical_json(value).encode("utf-8")).hexdigest()
    return f"sha256:{digest}"
