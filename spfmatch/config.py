"""
SPFMatch Configuration
======================
Environment-driven settings, read once at import.

Environment Variables:
- GOOGLE_SHEETS_ID / GOOGLE_SHEETS_API_KEY: remote product sheet (optional)
- GOOGLE_SHEETS_RANGE: range holding product rows (default Sunscreen!A2:L)
- SPFMATCH_PRODUCT_SOURCE: auto | static | remote
- UV_API_BASE_URL: Open-Meteo forecast endpoint
- LOG_LEVEL: root log level for the service
- CORS_ALLOW_ORIGINS: comma-separated origins
"""

import os


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# ============================================
# PRODUCT DATA SOURCE
# ============================================

GOOGLE_SHEETS_ID = os.getenv("GOOGLE_SHEETS_ID", "")
GOOGLE_SHEETS_API_KEY = os.getenv("GOOGLE_SHEETS_API_KEY", "")
GOOGLE_SHEETS_RANGE = os.getenv("GOOGLE_SHEETS_RANGE", "Sunscreen!A2:L")
GOOGLE_SHEETS_BASE_URL = os.getenv(
    "GOOGLE_SHEETS_BASE_URL", "https://sheets.googleapis.com/v4/spreadsheets"
).rstrip("/")
SHEETS_TIMEOUT_SECONDS = _float_env("SHEETS_TIMEOUT_SECONDS", 15.0)

PRODUCT_SOURCE = os.getenv("SPFMATCH_PRODUCT_SOURCE", "auto").lower()

# Used when the exact Fitzpatrick x skin-type key has no curated products
DEFAULT_PRODUCT_KEY = "3-normal"


# ============================================
# UV INDEX / LOCATION
# ============================================

UV_API_BASE_URL = os.getenv("UV_API_BASE_URL", "https://api.open-meteo.com/v1/forecast")
UV_TIMEOUT_SECONDS = _float_env("UV_TIMEOUT_SECONDS", 10.0)
GEOLOCATION_TIMEOUT_SECONDS = _float_env("GEOLOCATION_TIMEOUT_SECONDS", 15.0)

# Moderate UV, substituted whenever the UV service cannot answer
DEFAULT_UV_INDEX = 5.0

# Reapplication row used when the Fitzpatrick type is outside the table
DEFAULT_FITZPATRICK_ROW = 3


# ============================================
# SERVICE
# ============================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]
