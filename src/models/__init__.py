"""ArtistCatalog domain models -- re-exports all public model classes.

Submodules by concern:
    - artist.py -- the persisted ``ArtistRecord`` and the client ``ArtistDraft``
    - chain.py  -- trigger-word chain match / draft results
    - view.py   -- ``ViewState`` and the derived ``CatalogView``
"""

from __future__ import annotations

from src.models.artist import (
    PLACEHOLDER_ARTIST_REF,
    PLACEHOLDER_SAMPLE_REF,
    ArtistDraft,
    ArtistRecord,
    ImageKind,
)
from src.models.chain import ChainDraft, ChainMatch
from src.models.view import CatalogView, SortKey, ViewState

__all__ = [
    "PLACEHOLDER_ARTIST_REF",
    "PLACEHOLDER_SAMPLE_REF",
    "ArtistDraft",
    "ArtistRecord",
    "CatalogView",
    "ChainDraft",
    "ChainMatch",
    "ImageKind",
    "SortKey",
    "ViewState",
]
