"""ArtistCatalog API layer -- routes, schemas, and middleware."""

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import router
from src.api.schemas import (
    CatalogViewResponse,
    ChainAppendRequest,
    ChainAppendResponse,
    ChainDraftRequest,
    DeleteImageRequest,
    ErrorResponse,
    HealthResponse,
    MessageResponse,
    PlaceholderRequest,
    UploadImageResponse,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "router",
    "CatalogViewResponse",
    "ChainAppendRequest",
    "ChainAppendResponse",
    "ChainDraftRequest",
    "DeleteImageRequest",
    "ErrorResponse",
    "HealthResponse",
    "MessageResponse",
    "PlaceholderRequest",
    "UploadImageResponse",
]
