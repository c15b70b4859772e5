"""FastAPI dependency serving the process-wide product table."""

from fastapi import Request

from .models import ProductTableLoad
from .sheets_client import load_product_table


def get_product_table_load(request: Request) -> ProductTableLoad:
    """
    Table loaded at start-up (see api_server lifespan).

    Loaded on first use when the app was built without the lifespan hook.
    """
    loaded = getattr(request.app.state, "product_table", None)
    if loaded is None:
        loaded = load_product_table()
        request.app.state.product_table = loaded
    return loaded
