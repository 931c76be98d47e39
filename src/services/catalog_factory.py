"""Catalog wiring shared by the web app and the CLI.

Kept apart from ``src.main`` so callers can build a catalog without
importing the FastAPI application (which is constructed at import time).
"""

from __future__ import annotations

from src.config.settings import Settings
from src.providers.image_store.local_image_store import LocalImageStore
from src.providers.record_store.json_file_store import JsonFileRecordStore
from src.services.catalog_service import CatalogService


def build_catalog(app_settings: Settings) -> CatalogService:
    """Build a catalog service over the configured data directory."""
    record_store = JsonFileRecordStore(data_dir=app_settings.data_dir)
    image_store = LocalImageStore(
        data_dir=app_settings.data_dir,
        max_bytes=app_settings.max_upload_size_bytes,
        allowed_types=set(app_settings.allowed_image_types),
    )
    return CatalogService(
        record_store=record_store,
        image_store=image_store,
        enforce_unique_ids_on_update=app_settings.enforce_unique_ids_on_update,
    )
