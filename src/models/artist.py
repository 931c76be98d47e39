"""Artist record models -- the only persisted entity in the catalog.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Models (bottom of the dependency graph).
#
# ``ArtistRecord`` is what lives on disk, one JSON document per record, and
# what every service reads.  ``ArtistDraft`` is what clients submit: raw,
# un-normalized values (a comma-joined string or a list) that the catalog
# service pushes through the field normalizer before building a record.
#
# JSON keys are camelCase (``artistIds``, ``trainingCounts``, ...).  Older
# documents used the singular ``artistId`` / ``trainingCount``; both are
# accepted when reading, only the plural form is written.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.utils.field_normalizer import (
    normalize_count_list,
    normalize_string_list,
    sum_training_count,
)

IMAGES_URL_PREFIX = "/images"
PLACEHOLDER_ARTIST_FILENAME = "placeholder-artist.png"
PLACEHOLDER_SAMPLE_FILENAME = "placeholder-sample.png"
PLACEHOLDER_ARTIST_REF = f"{IMAGES_URL_PREFIX}/{PLACEHOLDER_ARTIST_FILENAME}"
PLACEHOLDER_SAMPLE_REF = f"{IMAGES_URL_PREFIX}/{PLACEHOLDER_SAMPLE_FILENAME}"


class ImageKind(str, Enum):  # noqa: UP042
    """Role of an uploaded image within its owning record."""

    PREVIEW = "preview"
    SAMPLE = "sample"


# ─── ArtistRecord ────────────────────────────────────────────────────
class ArtistRecord(BaseModel):
    """A stored artist record.

    Immutable; updates go through ``model_copy(update={...})`` and a full
    document rewrite.  Multi-valued fields are always lists once validated.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    id: int = Field(description="Store-assigned identifier, immutable.")
    name: str = Field(min_length=1, description="Display name.")
    artist_ids: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("artistIds", "artistId", "artist_ids"),
        serialization_alias="artistIds",
    )
    training_counts: list[int] = Field(
        default_factory=list,
        validation_alias=AliasChoices("trainingCounts", "trainingCount", "training_counts"),
        serialization_alias="trainingCounts",
    )
    preview_image: str = PLACEHOLDER_ARTIST_REF
    sample_images: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    trigger_words: list[str] = Field(default_factory=list)
    style_description: str = ""
    create_time: str = Field(default="", description="YYYY-MM-DD, set once at creation.")

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("artist_ids", "sample_images", "tags", "trigger_words", mode="before")
    @classmethod
    def _as_string_list(cls, value: Any) -> list[Any]:
        return normalize_string_list(value)

    @field_validator("training_counts", mode="before")
    @classmethod
    def _as_count_list(cls, value: Any) -> list[int]:
        return normalize_count_list(value)

    @field_validator("preview_image", mode="before")
    @classmethod
    def _preview_or_placeholder(cls, value: Any) -> Any:
        return value or PLACEHOLDER_ARTIST_REF

    @field_validator("style_description", "create_time", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def total_training_count(self) -> int:
        """Sum of all training counts, as shown next to the name."""
        return sum_training_count(self.training_counts)

    def owned_images(self) -> list[str]:
        """Image refs this record owns, i.e. everything but placeholders."""
        refs = [self.preview_image, *self.sample_images]
        return [
            ref for ref in refs
            if ref and ref not in (PLACEHOLDER_ARTIST_REF, PLACEHOLDER_SAMPLE_REF)
        ]

    def to_document(self) -> dict[str, Any]:
        """Return the camelCase dict written to disk and sent over the wire."""
        return self.model_dump(by_alias=True)


# ─── ArtistDraft ─────────────────────────────────────────────────────
class ArtistDraft(BaseModel):
    """Client-submitted body for create and replace.

    Values are kept raw on purpose: the create and replace paths apply
    different defaults for absent fields, and "absent" is only visible here
    through ``model_fields_set``.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        alias_generator=to_camel,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    name: str | None = None
    artist_ids: str | list[Any] | None = Field(
        default=None,
        validation_alias=AliasChoices("artistIds", "artistId", "artist_ids"),
        serialization_alias="artistIds",
    )
    training_counts: str | int | list[Any] | None = Field(
        default=None,
        validation_alias=AliasChoices("trainingCounts", "trainingCount", "training_counts"),
        serialization_alias="trainingCounts",
    )
    preview_image: str | None = None
    sample_images: str | list[Any] | None = None
    tags: str | list[Any] | None = None
    trigger_words: str | list[Any] | None = None
    style_description: str | None = None
    create_time: str | None = None
