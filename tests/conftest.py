"""Shared pytest fixtures for the ArtistCatalog test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from src.config.settings import Settings
from src.models.artist import ArtistRecord
from src.providers.image_store.local_image_store import LocalImageStore
from src.providers.record_store.json_file_store import JsonFileRecordStore
from src.services.catalog_service import CatalogService

# Any bytes will do: the image store checks names, MIME types and size only.
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def make_record(
    record_id: int = 1,
    name: str = "Kawacy",
    artist_ids: list[str] | None = None,
    training_counts: list[int] | None = None,
    **kwargs: Any,
) -> ArtistRecord:
    """Build an ArtistRecord with sensible test defaults."""
    return ArtistRecord(
        id=record_id,
        name=name,
        artist_ids=artist_ids if artist_ids is not None else [name.lower()],
        training_counts=training_counts if training_counts is not None else [10],
        create_time=kwargs.pop("create_time", "2024-05-01"),
        **kwargs,
    )


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """An empty data directory for documents and images."""
    path = tmp_path / "images"
    path.mkdir()
    return path


@pytest.fixture
def record_store(data_dir: Path) -> JsonFileRecordStore:
    return JsonFileRecordStore(data_dir=data_dir)


@pytest.fixture
def image_store(data_dir: Path) -> LocalImageStore:
    return LocalImageStore(data_dir=data_dir, max_bytes=1024)


@pytest.fixture
def catalog(record_store: JsonFileRecordStore, image_store: LocalImageStore) -> CatalogService:
    """A catalog service over real stores in a temporary directory."""
    return CatalogService(record_store=record_store, image_store=image_store)


@pytest.fixture
def test_settings(data_dir: Path) -> Settings:
    """Settings pointing at the temporary data directory."""
    return Settings(
        data_dir=str(data_dir),
        max_upload_size_mb=1,
        app_env="testing",
        _env_file=None,
    )
