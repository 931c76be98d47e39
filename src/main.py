"""ArtistCatalog FastAPI application entry point.

Wires the record store, the image store and the catalog service together
via dependency injection.  Loads configuration from ``.env`` and
``config/config.yaml``, configures structured logging, and serves the data
directory's images under ``/images``.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import router as api_router
from src.config.loader import load_config
from src.config.settings import Settings
from src.models.artist import IMAGES_URL_PREFIX
from src.services.catalog_factory import build_catalog
from src.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Component wiring
# ---------------------------------------------------------------------------


def _build_all(app_settings: Settings) -> dict[str, Any]:
    """Construct every component for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    catalog = build_catalog(app_settings)
    provider_registry: dict[str, Any] = {
        "record_store": "json_file_store",
        "image_store": "local_image_store",
        "data_dir": str(Path(app_settings.data_dir).resolve()),
    }
    return {
        "settings": app_settings,
        "catalog": catalog,
        "provider_registry": provider_registry,
    }


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build and configure the FastAPI application.

    Parameters
    ----------
    app_settings:
        Settings to run with; the module-level ``settings`` when omitted.
        Tests pass their own with ``data_dir`` pointing at ``tmp_path``.
    """
    app_settings = app_settings or settings
    config = load_config(settings=app_settings)

    @asynccontextmanager
    async def _lifespan(application: FastAPI):  # noqa: ANN202
        """Initialise the stores and placeholders on startup."""
        components = _build_all(app_settings)
        for key, value in components.items():
            setattr(application.state, key, value)

        placeholders = await components["catalog"].ensure_placeholders()
        _logger.info(
            "app_startup",
            version=config.get("app", {}).get("version", "0.1.0"),
            environment=app_settings.app_env,
            data_dir=app_settings.data_dir,
            placeholders=placeholders,
        )

        yield

        _logger.info("app_shutdown")

    application = FastAPI(
        title="ArtistCatalog API",
        version=str(config.get("app", {}).get("version", "0.1.0")),
        description=(
            "Catalog artist records with identifiers, training counts, tags, "
            "trigger words and preview/sample images, and compose trigger-word "
            "chains from them."
        ),
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(
        application,
        allowed_origins=config.get("cors", {}).get("allowed_origins"),
    )

    # -- API routes --
    application.include_router(api_router)

    # -- Images (StaticFiles checks the directory exists when mounted) --
    data_dir = Path(app_settings.data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    application.mount(
        IMAGES_URL_PREFIX,
        StaticFiles(directory=str(data_dir)),
        name="images",
    )

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
