"""Utility modules for ArtistCatalog.

- **errors** -- Exception hierarchy rooted at ArtistCatalogError; every
  subclass carries the HTTP status the API answers with.
- **field_normalizer** -- Comma-joined or list inputs to canonical lists,
  the single training-count coercion rule, and identity keys.
- **filenames** -- Path-safe file stems for documents and images.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

# -- Domain exception hierarchy --------------------------------------------
from src.utils.errors import (
    ArtistCatalogError,
    ConfigurationError,
    DuplicateIdentityError,
    NotFoundError,
    TransportError,
    ValidationError,
)

# -- Multi-valued field normalization --------------------------------------
from src.utils.field_normalizer import (
    coerce_count,
    identity_key,
    normalize_count_list,
    normalize_string_list,
    split_delimited,
    sum_training_count,
)

# -- Structured logging setup ----------------------------------------------
from src.utils.logging import configure_logging, get_logger

__all__ = [
    "ArtistCatalogError",
    "ConfigurationError",
    "DuplicateIdentityError",
    "NotFoundError",
    "TransportError",
    "ValidationError",
    "coerce_count",
    "configure_logging",
    "get_logger",
    "identity_key",
    "normalize_count_list",
    "normalize_string_list",
    "split_delimited",
    "sum_training_count",
]
