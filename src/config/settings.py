"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# Values are read, highest priority first, from:
#
#   1. Environment variables   -- e.g. DATA_DIR=/srv/artists
#   2. .env file               -- key=value lines in the project root
#   3. The defaults below
#
# Field ``data_dir`` maps to env var ``DATA_DIR`` and so on.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """ArtistCatalog application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Storage ===
    # Holds the artist JSON documents, uploaded images and placeholders.
    data_dir: str = "images"

    # === Uploads ===
    max_upload_size_mb: int = 10
    allowed_image_types: list[str] = ["jpeg", "jpg", "png", "gif", "webp"]

    # === Catalog policy ===
    # Duplicate artist-ID sets are always rejected on create.  Turning this on
    # applies the same check when a record is replaced.
    enforce_unique_ids_on_update: bool = False
    default_sort: str = "count"
    export_filename: str = "danbooru_artists_data.json"

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 3000
    app_env: str = "development"
    log_level: str = "INFO"
    config_path: str = "config/config.yaml"

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024
