"""Normalization of multi-valued artist fields.

Form inputs arrive either as comma-joined strings (``"f1, f2"``) or as JSON
arrays, and older documents may hold bare scalars.  Everything that crosses
this module comes out as a list:

- **String lists** (artist IDs, tags, trigger words) -- split on ``,``,
  strip each piece, drop empties, keep order.
- **Count lists** (training counts) -- same split, then every piece goes
  through :func:`coerce_count`, so a malformed token becomes ``0`` instead
  of disappearing.
- **Identity keys** -- the case-folded, order-free form of an ID list used
  for duplicate detection.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from typing import Any

_DELIMITER = ","

# Leading integer, the way a browser's parseInt reads "12abc" or " 3.7".
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def split_delimited(text: str, delimiter: str = _DELIMITER) -> list[str]:
    """Split *text* on *delimiter*, strip pieces, and drop empty ones.

    >>> split_delimited(" a, ,b ,, c")
    ['a', 'b', 'c']
    """
    return [piece.strip() for piece in text.split(delimiter) if piece.strip()]


def coerce_count(value: Any) -> int:
    """Coerce one training-count token to a non-negative int.

    Ints pass through, finite floats truncate, strings are read up to the
    first non-digit.  Anything else, including ``NaN`` and negative
    numbers, maps to ``0``.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        return max(int(value), 0)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match is None:
            return 0
        return max(int(match.group(1)), 0)
    return 0


def normalize_string_list(value: Any) -> list[str]:
    """Return *value* as a list of strings.

    ``None`` and ``""`` give ``[]``; a string is split on commas; any other
    iterable is passed through as a list; a bare scalar is wrapped.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return split_delimited(value)
    if isinstance(value, Iterable):
        return list(value)
    return [value]


def normalize_count_list(value: Any, default: list[int] | None = None) -> list[int]:
    """Return *value* as a list of training counts.

    Args:
        value: Comma-joined string, iterable of tokens, bare scalar, or ``None``.
        default: Returned (copied) when *value* is absent -- ``None`` or a
                 blank string.  The create path passes ``[0]``.

    Returns:
        List of non-negative ints, one per non-empty token.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return list(default) if default is not None else []
    if isinstance(value, str):
        tokens: Iterable[Any] = split_delimited(value)
    elif isinstance(value, Iterable):
        tokens = value
    else:
        tokens = [value]
    return [coerce_count(token) for token in tokens]


def sum_training_count(counts: Iterable[Any]) -> int:
    """Sum training counts, treating anything non-numeric as ``0``.

    >>> sum_training_count(["5", "x", "3"])
    8
    """
    return sum(coerce_count(count) for count in counts)


def identity_key(artist_ids: Iterable[str]) -> tuple[str, ...]:
    """Case-fold and sort *artist_ids* into an order-free comparison key.

    ``["A", "b"]`` and ``["b", "a"]`` share a key; ``["A", "b", "c"]`` does not.
    """
    return tuple(sorted(str(artist_id).casefold() for artist_id in artist_ids))
