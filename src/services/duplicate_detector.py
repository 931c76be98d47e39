"""Identity-set duplicate detection for artist records.

Two records collide when their ``artistIds`` are equal as sets after
case-folding: ``["A", "b"]`` and ``["b", "a"]`` are the same identity,
``["A", "b"]`` and ``["A", "b", "c"]`` are not (no subset or superset
matching).

The check is exposed as one predicate so the catalog service can run it on
create (always) and on replace (only when
``Settings.enforce_unique_ids_on_update`` is on).
"""

from __future__ import annotations

from collections.abc import Iterable

from src.models.artist import ArtistRecord
from src.utils.field_normalizer import identity_key


def find_duplicate(
    candidate_ids: Iterable[str],
    existing_records: Iterable[ArtistRecord],
    exclude_id: int | None = None,
) -> ArtistRecord | None:
    """Return the first record whose identity set equals *candidate_ids*.

    Parameters
    ----------
    candidate_ids:
        Proposed ``artistIds`` for a new or replaced record.
    existing_records:
        One snapshot of the store.
    exclude_id:
        Record to skip, so a record being replaced never collides with itself.
    """
    key = identity_key(candidate_ids)
    for record in existing_records:
        if exclude_id is not None and record.id == exclude_id:
            continue
        if identity_key(record.artist_ids) == key:
            return record
    return None


def is_duplicate_identity_set(
    candidate_ids: Iterable[str],
    existing_records: Iterable[ArtistRecord],
    exclude_id: int | None = None,
) -> bool:
    """Return ``True`` if *candidate_ids* collides with any existing record."""
    return find_duplicate(candidate_ids, existing_records, exclude_id) is not None
