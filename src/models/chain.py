"""Trigger-word chain models.

A *chain* is a comma-joined, order-preserving, de-duplicated list of trigger
words assembled from one or more artist records.  ``ChainMatch`` is the
reverse lookup (which records does a chain mention), ``ChainDraft`` the
creation form it seeds.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ChainMatch(BaseModel):
    """Records whose trigger words appear in a chain, and what they carry."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    artist_ids: list[str] = Field(default_factory=list)
    training_counts: list[int] = Field(default_factory=list)
    matched_record_ids: list[int] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.matched_record_ids


class ChainDraft(BaseModel):
    """Pre-filled new-record form derived from a chain.

    The user still has to name it and confirm; nothing is created here.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    trigger_words: list[str] = Field(default_factory=list)
    artist_ids: list[str] = Field(default_factory=list)
    training_counts: list[int] = Field(default_factory=list)
    matched_record_ids: list[int] = Field(default_factory=list)
