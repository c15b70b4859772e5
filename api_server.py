"""
SPFMatch API Server
Sunscreen matching: Fitzpatrick quiz, product recommendations and
UV-driven reapplication intervals.

Stateless: every request carries its own answers. The product lookup
table is loaded once at start-up and shared read-only.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from spfmatch import __version__, config
from spfmatch.catalog.sheets_client import load_product_table_async
from spfmatch.health.router import router as health_router
from spfmatch.matching.router import router as matching_router
from spfmatch.questionnaire.router import router as quiz_router
from spfmatch.reminder.router import router as reminder_router

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("spfmatch")


# ============================================
# Lifespan: load product table once
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    loaded = await load_product_table_async()
    app.state.product_table = loaded
    logger.info(
        f"Serving {loaded.source} product table "
        f"({loaded.key_count} keys, {loaded.product_count} products)"
    )
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="SPFMatch API",
        description="Fitzpatrick skin typing and sunscreen matching",
        version=__version__,
        lifespan=lifespan,
    )

    # ============================================
    # CORS Configuration
    # ============================================
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOW_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(quiz_router)
    app.include_router(matching_router)
    app.include_router(reminder_router)

    @app.get("/")
    def root():
        return {
            "service": "SPFMatch API",
            "version": __version__,
            "docs": "/docs",
        }

    return app


app = create_app()
