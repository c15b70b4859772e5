"""SPFMatch Shared Utilities"""

from .hashing import canonical_json, fingerprint

__all__ = ["canonical_json", "fingerprint"]
