"""
Health Check Endpoint
=====================
Reports service version and which product table is being served.
"""

from datetime import datetime
from fastapi import APIRouter, Depends

from spfmatch import __version__
from spfmatch.catalog.dependencies import get_product_table_load
from spfmatch.catalog.models import ProductTableLoad

router = APIRouter(prefix="/api/v1/health", tags=["Health"])


@router.get("")
def health(loaded: ProductTableLoad = Depends(get_product_table_load)):
    return {
        "status": "ok",
        "service": "spfmatch",
        "version": __version__,
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "components": {
            "product_table": {
                "status": "degraded" if loaded.warning else "healthy",
                "source": loaded.source,
                "keys": loaded.key_count,
                "products": loaded.product_count,
                "warning": loaded.warning,
            },
        },
    }
