"""Unit tests for multi-valued field normalization."""

from __future__ import annotations

import pytest

from src.utils.field_normalizer import (
    coerce_count,
    identity_key,
    normalize_count_list,
    normalize_string_list,
    split_delimited,
)
from src.utils.filenames import safe_file_stem


# ======================================================================
# split_delimited / normalize_string_list
# ======================================================================


class TestNormalizeStringList:
    """Tests for comma-joined and list inputs to string fields."""

    def test_splits_and_strips(self) -> None:
        assert normalize_string_list(" f1 ,f2,  f3 ") == ["f1", "f2", "f3"]

    def test_drops_empty_pieces(self) -> None:
        assert normalize_string_list("a,, ,b,") == ["a", "b"]

    def test_keeps_order_and_repeats(self) -> None:
        assert normalize_string_list("b, a, b") == ["b", "a", "b"]

    def test_none_is_empty(self) -> None:
        assert normalize_string_list(None) == []

    def test_blank_string_is_empty(self) -> None:
        assert normalize_string_list("   ") == []

    def test_list_passes_through(self) -> None:
        assert normalize_string_list(["x, y", "z"]) == ["x, y", "z"]

    def test_scalar_is_wrapped(self) -> None:
        assert normalize_string_list(42) == [42]

    def test_split_delimited_custom_delimiter(self) -> None:
        assert split_delimited("a; b ;", delimiter=";") == ["a", "b"]


# ======================================================================
# coerce_count
# ======================================================================


class TestCoerceCount:
    """One rule for every training-count token."""

    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("12", 12),
            (" 7 ", 7),
            ("12abc", 12),
            ("3.7", 3),
            ("+4", 4),
            ("abc", 0),
            ("", 0),
            ("-5", 0),
        ],
    )
    def test_string_tokens(self, token: str, expected: int) -> None:
        assert coerce_count(token) == expected

    def test_int_passes_through(self) -> None:
        assert coerce_count(30) == 30

    def test_negative_int_clamped(self) -> None:
        assert coerce_count(-3) == 0

    def test_float_truncates(self) -> None:
        assert coerce_count(9.9) == 9

    def test_nan_and_inf_are_zero(self) -> None:
        assert coerce_count(float("nan")) == 0
        assert coerce_count(float("inf")) == 0

    def test_none_and_objects_are_zero(self) -> None:
        assert coerce_count(None) == 0
        assert coerce_count({"n": 1}) == 0


# ======================================================================
# normalize_count_list
# ======================================================================


class TestNormalizeCountList:
    """Tests for the training-count list normalizer."""

    def test_malformed_tokens_become_zero_not_dropped(self) -> None:
        assert normalize_count_list("5, x, 3") == [5, 0, 3]

    def test_list_elements_are_coerced(self) -> None:
        assert normalize_count_list(["5", 2, "n/a"]) == [5, 2, 0]

    def test_absent_without_default_is_empty(self) -> None:
        assert normalize_count_list(None) == []
        assert normalize_count_list("  ") == []

    def test_absent_with_default_returns_a_copy(self) -> None:
        default = [0]
        result = normalize_count_list(None, default=default)
        assert result == [0]
        result.append(1)
        assert default == [0]

    def test_scalar_is_wrapped(self) -> None:
        assert normalize_count_list(8) == [8]


# ======================================================================
# identity_key
# ======================================================================


class TestIdentityKey:
    """Case-folded, order-free comparison key for artist-ID sets."""

    def test_order_and_case_ignored(self) -> None:
        assert identity_key(["A", "b"]) == identity_key(["b", "a"])

    def test_superset_differs(self) -> None:
        assert identity_key(["A", "b"]) != identity_key(["A", "b", "c"])

    def test_commas_inside_ids_do_not_collide(self) -> None:
        assert identity_key(["a,b"]) != identity_key(["a", "b"])

    def test_empty(self) -> None:
        assert identity_key([]) == ()


# ======================================================================
# safe_file_stem
# ======================================================================


class TestSafeFileStem:
    def test_replaces_illegal_characters(self) -> None:
        assert safe_file_stem('a\\b/c:d*e?f"g<h>i|j') == "a_b_c_d_e_f_g_h_i_j"

    def test_keeps_unicode_and_spaces(self) -> None:
        assert safe_file_stem("Émile Zola") == "Émile Zola"
