"""Trigger-word chain composition and reverse matching.

# ─── TWO DIRECTIONS ──────────────────────────────────────────────────
#
# Forward  (append_trigger_words / compose_chain):
#   "red, blue" + record(triggerWords=["blue", "Green"]) -> "red, blue, Green"
#   Tokens are compared exactly, so "Blue" and "blue" are both kept.
#
# Reverse  (match_records_by_chain / draft_from_chain):
#   "RED, blue" -> every record with a trigger word equal to "red" or
#   "blue" ignoring case, and the union of their artist IDs and counts.
#
# The forward direction is case-sensitive and the reverse direction is
# not.  Both behaviours are relied on by existing chains, so they are kept
# as they are rather than unified.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from collections.abc import Iterable

from src.models.artist import ArtistRecord
from src.models.chain import ChainDraft, ChainMatch
from src.utils.field_normalizer import split_delimited

CHAIN_SEPARATOR = ", "


def tokenize_chain(chain: str) -> list[str]:
    """Split a chain into trimmed, non-empty tokens."""
    return split_delimited(chain)


def _unique_in_order(items: Iterable) -> list:
    return list(dict.fromkeys(items))


def append_trigger_words(chain: str, record: ArtistRecord) -> str:
    """Append *record*'s trigger words to *chain*, skipping exact repeats.

    Existing tokens keep their position; new ones follow in record order.
    Applying the same record twice yields the same chain as applying it once.
    """
    existing = tokenize_chain(chain)
    incoming = tokenize_chain(CHAIN_SEPARATOR.join(record.trigger_words))
    return CHAIN_SEPARATOR.join(_unique_in_order([*existing, *incoming]))


def compose_chain(records: Iterable[ArtistRecord], chain: str = "") -> str:
    """Fold :func:`append_trigger_words` over *records*, starting from *chain*."""
    for record in records:
        chain = append_trigger_words(chain, record)
    return chain


def match_records_by_chain(chain: str, records: Iterable[ArtistRecord]) -> ChainMatch:
    """Find records mentioned by *chain* and collect their IDs and counts.

    A record matches when any of its trigger words, case-folded, equals a
    case-folded chain token.  Artist IDs and training counts of all
    matching records are unioned (first-seen order kept).  An empty chain
    matches nothing.
    """
    chain_words = {token.casefold() for token in tokenize_chain(chain)}
    if not chain_words:
        return ChainMatch()

    artist_ids: list[str] = []
    training_counts: list[int] = []
    matched_ids: list[int] = []
    for record in records:
        if not any(word.casefold() in chain_words for word in record.trigger_words):
            continue
        matched_ids.append(record.id)
        artist_ids.extend(record.artist_ids)
        training_counts.extend(record.training_counts)

    return ChainMatch(
        artist_ids=_unique_in_order(artist_ids),
        training_counts=_unique_in_order(training_counts),
        matched_record_ids=matched_ids,
    )


def draft_from_chain(chain: str, records: Iterable[ArtistRecord]) -> ChainDraft:
    """Build a pre-filled new-record form from *chain*.

    The chain becomes the draft's trigger words; the reverse match supplies
    candidate artist IDs and training counts for the user to confirm.
    """
    match = match_records_by_chain(chain, records)
    return ChainDraft(
        trigger_words=tokenize_chain(chain),
        artist_ids=match.artist_ids,
        training_counts=match.training_counts,
        matched_record_ids=match.matched_record_ids,
    )
