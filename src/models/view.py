"""View-state models for the filtered, sorted artist list.

``ViewState`` holds what a client is currently looking at -- search term,
sort key, selected record -- as an immutable value passed into
``build_view``.  ``CatalogView`` is the result: the ordered records plus
the state as it stands after selection was re-resolved against them.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from src.models.artist import ArtistRecord


class SortKey(str, Enum):  # noqa: UP042
    """Supported list orderings."""

    COUNT = "count"  # summed training count, descending
    NAME = "name"    # collated name, ascending
    DATE = "date"    # createTime, newest first


class ViewState(BaseModel):
    """What the client is looking at.  Unknown sort keys are kept verbatim."""

    model_config = ConfigDict(frozen=True)

    search_term: str = ""
    sort_key: str = SortKey.COUNT.value
    selected_id: int | None = None

    def with_selection(self, selected_id: int | None) -> ViewState:
        return self.model_copy(update={"selected_id": selected_id})


class CatalogView(BaseModel):
    """Result of one filter -> sort -> select pass over a snapshot."""

    model_config = ConfigDict(frozen=True)

    records: list[ArtistRecord] = Field(default_factory=list)
    state: ViewState = Field(default_factory=ViewState)
    selected: ArtistRecord | None = None
    total: int = Field(default=0, ge=0, description="Records in the snapshot before filtering.")
