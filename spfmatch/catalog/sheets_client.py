"""
Google Sheets Product Source
============================
Fetches product rows from the Sheets v4 values API and loads the lookup
table, falling back to the bundled table on any failure.

Environment Variables:
- GOOGLE_SHEETS_ID: spreadsheet id
- GOOGLE_SHEETS_API_KEY: API key
- GOOGLE_SHEETS_RANGE: range (default Sunscreen!A2:L)

Usage:
    from spfmatch.catalog.sheets_client import load_product_table

    loaded = load_product_table()
    loaded.table["3-normal"]
"""

import logging
from typing import Any, List, Optional

import httpx

from spfmatch import config
from .database import load_static_table
from .ingest import build_table_from_rows
from .models import ProductTableLoad

logger = logging.getLogger(__name__)

PRODUCT_FETCH_WARNING = "Live product data unavailable. Showing curated recommendations."


class SheetsFetchError(Exception):
    """Remote product sheet could not be read."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SheetsClient:
    """
    Read-only client for one spreadsheet range.

    The API key is sent as a query parameter and never logged.
    """

    def __init__(
        self,
        sheet_id: Optional[str] = None,
        api_key: Optional[str] = None,
        sheet_range: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = config.SHEETS_TIMEOUT_SECONDS,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.sheet_id = sheet_id if sheet_id is not None else config.GOOGLE_SHEETS_ID
        self.api_key = api_key if api_key is not None else config.GOOGLE_SHEETS_API_KEY
        self.sheet_range = sheet_range or config.GOOGLE_SHEETS_RANGE
        self.base_url = (base_url or config.GOOGLE_SHEETS_BASE_URL).rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._async_transport = async_transport

    @property
    def is_configured(self) -> bool:
        return bool(self.sheet_id and self.api_key)

    @property
    def values_url(self) -> str:
        return f"{self.base_url}/{self.sheet_id}/values/{self.sheet_range}"

    def _check_configured(self) -> None:
        if not self.is_configured:
            raise SheetsFetchError("Google Sheets API credentials not configured")

    def _handle_response(self, response: httpx.Response) -> List[List[Any]]:
        if not 200 <= response.status_code < 300:
            raise SheetsFetchError(
                f"Sheets API returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        try:
            data = response.json()
        except ValueError:
            # JSONDecodeError or UnicodeDecodeError
            raise SheetsFetchError("Sheets API returned malformed JSON")

        if not isinstance(data, dict):
            raise SheetsFetchError("Sheets API returned unexpected payload")

        values = data.get("values") or []
        if not isinstance(values, list):
            raise SheetsFetchError("Sheets API 'values' is not a list")
        if not values:
            logger.warning("No data found in product sheet")
        return [row for row in values if isinstance(row, list)]

    def fetch_rows(self) -> List[List[Any]]:
        """
        Fetch raw value rows (sync).

        Raises:
            SheetsFetchError: missing credentials, HTTP/transport failure,
                malformed payload
        """
        self._check_configured()
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.get(self.values_url, params={"key": self.api_key})
        except httpx.TimeoutException:
            raise SheetsFetchError(f"Sheets API timed out after {self.timeout}s")
        except httpx.HTTPError as e:
            raise SheetsFetchError(f"Cannot reach Sheets API: {type(e).__name__}")
        return self._handle_response(response)

    async def fetch_rows_async(self) -> List[List[Any]]:
        """Fetch raw value rows (async). Same errors as fetch_rows."""
        self._check_configured()
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._async_transport) as client:
                response = await client.get(self.values_url, params={"key": self.api_key})
        except httpx.TimeoutException:
            raise SheetsFetchError(f"Sheets API timed out after {self.timeout}s")
        except httpx.HTTPError as e:
            raise SheetsFetchError(f"Cannot reach Sheets API: {type(e).__name__}")
        return self._handle_response(response)


def _static_load(warning: Optional[str] = None) -> ProductTableLoad:
    return ProductTableLoad(table=load_static_table(), source="static", warning=warning)


def _wants_remote(client: SheetsClient, source: str) -> bool:
    if source == "static":
        return False
    if source == "auto" and not client.is_configured:
        logger.info("Google Sheets not configured, using bundled sunscreen table")
        return False
    return True


def _load_from_rows(rows: List[List[Any]]) -> ProductTableLoad:
    table, report = build_table_from_rows(rows)
    if not table:
        logger.warning(
            f"Product sheet produced no usable products "
            f"({report.rows_skipped}/{report.rows_total} rows skipped), using bundled table"
        )
        return _static_load(PRODUCT_FETCH_WARNING)

    logger.info(
        f"Loaded remote sunscreen table: {report.table_keys} keys, "
        f"{report.rows_accepted} products ({report.rows_skipped} rows skipped)"
    )
    return ProductTableLoad(table=table, source="remote", report=report)


def load_product_table(
    client: Optional[SheetsClient] = None,
    source: str = config.PRODUCT_SOURCE,
) -> ProductTableLoad:
    """
    Load the lookup table once for the process.

    Any remote failure substitutes the bundled table in its entirety;
    remote and static products are never merged.
    """
    client = client or SheetsClient()
    if not _wants_remote(client, source):
        return _static_load()

    try:
        rows = client.fetch_rows()
    except SheetsFetchError as e:
        logger.warning(f"Product sheet fetch failed: {e}. Using bundled table")
        return _static_load(PRODUCT_FETCH_WARNING)
    return _load_from_rows(rows)


async def load_product_table_async(
    client: Optional[SheetsClient] = None,
    source: str = config.PRODUCT_SOURCE,
) -> ProductTableLoad:
    """Async variant of load_product_table, used at service start-up."""
    client = client or SheetsClient()
    if not _wants_remote(client, source):
        return _static_load()

    try:
        rows = await client.fetch_rows_async()
    except SheetsFetchError as e:
        logger.warning(f"Product sheet fetch failed: {e}. Using bundled table")
        return _static_load(PRODUCT_FETCH_WARNING)
    return _load_from_rows(rows)
