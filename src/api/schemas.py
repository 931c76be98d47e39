"""Pydantic request/response schemas for the ArtistCatalog API.

Artist records themselves go over the wire as ``ArtistRecord`` (responses)
and ``ArtistDraft`` (create/replace bodies) from ``src.models.artist``; the
models here cover everything else.

# ─── CONVENTIONS ─────────────────────────────────────────────────────
#
# JSON keys are camelCase, matching the on-disk documents
# (``filePath``, ``recordIds``, ``selectedId``).  Python attributes stay
# snake_case; ``alias_generator=to_camel`` maps between them and
# ``populate_by_name`` lets tests build models with either spelling.
#
# Request schemas end with "Request", response schemas with "Response".
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.models.artist import ArtistRecord

_CAMEL = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str | None = None


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    providers: dict[str, Any]


class CatalogViewResponse(BaseModel):
    """The filtered, sorted list for one view state."""

    model_config = _CAMEL

    records: list[ArtistRecord] = Field(default_factory=list)
    search_term: str = ""
    sort_key: str = "count"
    selected_id: int | None = Field(
        default=None,
        description="Echoed back, or null if the selected record is no longer visible.",
    )
    total: int = Field(default=0, description="Records in the catalog before filtering.")


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------


class UploadImageResponse(BaseModel):
    """Ref of a freshly stored image, to be attached to a record."""

    model_config = _CAMEL

    file_path: str


class DeleteImageRequest(BaseModel):
    """Image ref to delete, as stored on a record (``/images/<file>``)."""

    path: str = ""


class MessageResponse(BaseModel):
    model_config = _CAMEL

    message: str
    file_path: str | None = None


class PlaceholderRequest(BaseModel):
    """Placeholder to create if missing: ``artist`` or ``sample``."""

    type: str = ""


# ---------------------------------------------------------------------------
# Chains
# ---------------------------------------------------------------------------


class ChainAppendRequest(BaseModel):
    """Append the trigger words of *record_ids*, in order, to *chain*."""

    model_config = _CAMEL

    chain: str = ""
    record_ids: list[int] = Field(default_factory=list)


class ChainAppendResponse(BaseModel):
    chain: str


class ChainDraftRequest(BaseModel):
    chain: str = ""
