"""Unit tests for the filter -> sort -> select view pipeline."""

from __future__ import annotations

from datetime import date

from src.models.view import ViewState
from src.services.record_aggregator import (
    build_view,
    collation_key,
    filter_records,
    matches_search,
    parse_create_time,
    sort_records,
)
from src.utils.field_normalizer import sum_training_count
from tests.conftest import make_record


# ======================================================================
# sum_training_count
# ======================================================================


class TestSumTrainingCount:
    def test_empty_is_zero(self) -> None:
        assert sum_training_count([]) == 0

    def test_non_numeric_counts_as_zero(self) -> None:
        assert sum_training_count(["5", "x", "3"]) == 8

    def test_ints(self) -> None:
        assert sum_training_count([1, 2, 3]) == 6

    def test_record_total_uses_same_rule(self) -> None:
        record = make_record(training_counts=[5, 0, 3])
        assert record.total_training_count == sum_training_count(record.training_counts) == 8


# ======================================================================
# Search
# ======================================================================


class TestMatchesSearch:
    """Case-insensitive substring search over the searchable fields."""

    def test_empty_term_matches_everything(self) -> None:
        assert matches_search(make_record(), "") is True
        assert matches_search(make_record(), "   ") is True

    def test_tag_search_ignores_case(self) -> None:
        record = make_record(tags=["Landscape"])
        assert matches_search(record, "landscape") is True

    def test_searches_name_ids_style_and_trigger_words(self) -> None:
        record = make_record(
            name="Alpha",
            artist_ids=["beta_id"],
            style_description="Soft gamma light",
            trigger_words=["delta"],
        )
        for term in ("ALP", "beta", "gamma", "DELTA"):
            assert matches_search(record, term) is True

    def test_no_match(self) -> None:
        assert matches_search(make_record(tags=["cat"]), "dog") is False

    def test_filter_keeps_order(self) -> None:
        records = [
            make_record(1, tags=["x"]),
            make_record(2, tags=["y"]),
            make_record(3, tags=["xy"]),
        ]
        assert [r.id for r in filter_records(records, "x")] == [1, 3]


# ======================================================================
# Sorting
# ======================================================================


class TestSortRecords:
    def test_count_descending(self) -> None:
        records = [
            make_record(1, training_counts=[1]),
            make_record(2, training_counts=[5, 5]),
            make_record(3, training_counts=[4]),
        ]
        assert [r.id for r in sort_records(records, "count")] == [2, 3, 1]

    def test_count_is_stable_on_ties(self) -> None:
        records = [make_record(i, training_counts=[3]) for i in (4, 1, 3)]
        assert [r.id for r in sort_records(records, "count")] == [4, 1, 3]

    def test_name_uses_collation_not_code_points(self) -> None:
        records = [
            make_record(1, name="beta"),
            make_record(2, name="Émile"),
            make_record(3, name="Alpha"),
            make_record(4, name="zeta"),
        ]
        # Code-point order would put "Émile" after "zeta".
        assert [r.name for r in sort_records(records, "name")] == [
            "Alpha",
            "beta",
            "Émile",
            "zeta",
        ]

    def test_name_orders_greek_after_latin(self) -> None:
        records = [
            make_record(1, name="Ω-art"),
            make_record(2, name="Alpha"),
            make_record(3, name="beta"),
        ]
        assert [r.name for r in sort_records(records, "name")] == ["Alpha", "beta", "Ω-art"]

    def test_name_ignores_case(self) -> None:
        records = [make_record(1, name="Beta"), make_record(2, name="alpha")]
        # Code-point order would put "Beta" first.
        assert [r.name for r in sort_records(records, "name")] == ["alpha", "Beta"]

    def test_date_newest_first_unparseable_last(self) -> None:
        records = [
            make_record(1, create_time="2023-01-05"),
            make_record(2, create_time="not a date"),
            make_record(3, create_time="2024-12-31"),
            make_record(4, create_time=""),
        ]
        assert [r.id for r in sort_records(records, "date")] == [3, 1, 2, 4]

    def test_unknown_key_keeps_order(self) -> None:
        records = [make_record(3), make_record(1), make_record(2)]
        assert [r.id for r in sort_records(records, "popularity")] == [3, 1, 2]

    def test_collation_key_groups_accents_and_case(self) -> None:
        assert collation_key("Émile")[0] == collation_key("emile")[0]

    def test_parse_create_time(self) -> None:
        assert parse_create_time("2024-03-09") == date(2024, 3, 9)
        assert parse_create_time("2024-03-09T10:00:00Z") == date(2024, 3, 9)
        assert parse_create_time("09/03/2024") is None


# ======================================================================
# build_view
# ======================================================================


class TestBuildView:
    def test_filters_then_sorts(self) -> None:
        records = [
            make_record(1, tags=["ink"], training_counts=[1]),
            make_record(2, tags=["oil"], training_counts=[9]),
            make_record(3, tags=["Ink"], training_counts=[5]),
        ]
        view = build_view(records, ViewState(search_term="ink", sort_key="count"))
        assert [r.id for r in view.records] == [3, 1]
        assert view.total == 3

    def test_keeps_selection_when_visible(self) -> None:
        records = [make_record(1), make_record(2)]
        view = build_view(records, ViewState(selected_id=2))
        assert view.selected is not None and view.selected.id == 2
        assert view.state.selected_id == 2

    def test_clears_selection_filtered_out(self) -> None:
        records = [make_record(1, tags=["ink"]), make_record(2, tags=["oil"])]
        state = ViewState(search_term="ink", selected_id=2)
        view = build_view(records, state)
        assert view.selected is None
        assert view.state.selected_id is None
        # The input state is immutable and untouched.
        assert state.selected_id == 2

    def test_clears_selection_of_deleted_record(self) -> None:
        view = build_view([make_record(1)], ViewState(selected_id=99))
        assert view.state.selected_id is None
