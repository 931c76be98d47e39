"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ──────────────────────────────────────────
#
#   1. config/config.yaml  -- static defaults checked into the repo
#   2. .env file           -- local overrides (not committed)
#   3. Environment vars    -- set at deploy time
#
# load_config() reads the YAML file, then deep-merges the values resolved
# by Settings (layers 2 and 3) on top:
#
#   base      = {"view": {"page_title": "Artists", "default_sort": "name"}}
#   overrides = {"view": {"default_sort": "count"}}
#   result    = {"view": {"page_title": "Artists", "default_sort": "count"}}
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path

import yaml

from src.config.settings import Settings


def load_config(path: str | None = None, settings: Settings | None = None) -> dict:
    """Load YAML config and merge the environment-based Settings over it.

    Args:
        path: YAML file to read.  Defaults to ``settings.config_path``.
        settings: Resolved settings; a fresh ``Settings()`` when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    settings = settings or Settings()
    config_path = Path(path or settings.config_path)
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    env_overrides = {
        "app": {
            "host": settings.app_host,
            "port": settings.app_port,
            "env": settings.app_env,
        },
        "storage": {
            "data_dir": settings.data_dir,
        },
        "uploads": {
            "max_size_mb": settings.max_upload_size_mb,
            "allowed_types": list(settings.allowed_image_types),
        },
        "catalog": {
            "enforce_unique_ids_on_update": settings.enforce_unique_ids_on_update,
        },
        "view": {
            "default_sort": settings.default_sort,
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
