"""Unit tests for the artist, view and chain models."""

from __future__ import annotations

import pydantic
import pytest

from src.models.artist import (
    PLACEHOLDER_ARTIST_REF,
    PLACEHOLDER_SAMPLE_REF,
    ArtistDraft,
    ArtistRecord,
)
from src.models.chain import ChainMatch
from src.models.view import SortKey, ViewState
from tests.conftest import make_record


# ======================================================================
# ArtistRecord
# ======================================================================


class TestArtistRecord:
    def test_reads_camel_case_document(self) -> None:
        record = ArtistRecord.model_validate(
            {
                "id": 1700000000000,
                "name": "  Kawacy ",
                "artistIds": ["kawacy"],
                "trainingCounts": [30, 12],
                "previewImage": "/images/Kawacy-preview-1.png",
                "sampleImages": ["/images/Kawacy-sample-1.png"],
                "tags": ["anime"],
                "triggerWords": ["kawacy style"],
                "styleDescription": "Clean lines",
                "createTime": "2024-05-01",
            }
        )
        assert record.name == "Kawacy"
        assert record.training_counts == [30, 12]
        assert record.total_training_count == 42
        assert record.trigger_words == ["kawacy style"]

    def test_reads_legacy_singular_keys(self) -> None:
        record = ArtistRecord.model_validate(
            {"id": 5, "name": "Old", "artistId": "a, b", "trainingCount": "3, x"}
        )
        assert record.artist_ids == ["a", "b"]
        assert record.training_counts == [3, 0]

    def test_writes_plural_camel_case_keys(self) -> None:
        document = make_record(artist_ids=["a"], training_counts=[2]).to_document()
        assert document["artistIds"] == ["a"]
        assert document["trainingCounts"] == [2]
        assert "artistId" not in document
        assert "artist_ids" not in document
        assert {"previewImage", "sampleImages", "triggerWords", "styleDescription", "createTime"} <= set(document)

    def test_missing_preview_becomes_placeholder(self) -> None:
        record = ArtistRecord(id=1, name="x", preview_image="")
        assert record.preview_image == PLACEHOLDER_ARTIST_REF

    def test_none_text_fields_become_empty(self) -> None:
        record = ArtistRecord.model_validate({"id": 1, "name": "x", "styleDescription": None})
        assert record.style_description == ""

    def test_blank_name_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            ArtistRecord(id=1, name="   ")

    def test_is_frozen(self) -> None:
        record = make_record()
        with pytest.raises(pydantic.ValidationError):
            record.name = "changed"  # type: ignore[misc]

    def test_owned_images_excludes_placeholders(self) -> None:
        record = make_record(
            preview_image=PLACEHOLDER_ARTIST_REF,
            sample_images=["/images/a-sample-1.png", PLACEHOLDER_SAMPLE_REF],
        )
        assert record.owned_images() == ["/images/a-sample-1.png"]

    def test_extra_keys_ignored(self) -> None:
        record = ArtistRecord.model_validate({"id": 1, "name": "x", "rating": 5})
        assert not hasattr(record, "rating")


# ======================================================================
# ArtistDraft
# ======================================================================


class TestArtistDraft:
    def test_tracks_which_fields_were_sent(self) -> None:
        draft = ArtistDraft.model_validate({"name": "x", "tags": "a, b"})
        assert draft.model_fields_set == {"name", "tags"}

    def test_accepts_strings_or_lists(self) -> None:
        draft = ArtistDraft.model_validate(
            {"artistIds": ["a", "b"], "trainingCounts": "3, 4", "triggerWords": "t"}
        )
        assert draft.artist_ids == ["a", "b"]
        assert draft.training_counts == "3, 4"
        assert draft.trigger_words == "t"

    def test_accepts_legacy_keys(self) -> None:
        draft = ArtistDraft.model_validate({"artistId": "a", "trainingCount": 7})
        assert draft.artist_ids == "a"
        assert draft.training_counts == 7


# ======================================================================
# View and chain models
# ======================================================================


class TestViewState:
    def test_defaults(self) -> None:
        state = ViewState()
        assert state.search_term == ""
        assert state.sort_key == SortKey.COUNT.value
        assert state.selected_id is None

    def test_with_selection_returns_new_state(self) -> None:
        state = ViewState(selected_id=1)
        cleared = state.with_selection(None)
        assert cleared.selected_id is None
        assert state.selected_id == 1


class TestChainMatch:
    def test_empty_by_default(self) -> None:
        assert ChainMatch().is_empty

    def test_not_empty_with_matches(self) -> None:
        assert not ChainMatch(matched_record_ids=[1]).is_empty
