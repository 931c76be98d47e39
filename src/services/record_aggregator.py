"""Filter -> sort -> select pipeline over a record snapshot.

Everything here is a pure function of its inputs.  The client's current
search term, sort key and selection travel in a ``ViewState`` and come back,
possibly with the selection cleared, inside the ``CatalogView``.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable, Sequence
from datetime import date

from src.models.artist import ArtistRecord
from src.models.view import CatalogView, SortKey, ViewState


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------


def matches_search(record: ArtistRecord, search_term: str) -> bool:
    """Return ``True`` if *search_term* occurs in any searchable field.

    Case-insensitive substring match over the name, each artist ID, the
    style description, each trigger word and each tag.  An empty term
    matches every record.
    """
    term = search_term.strip().casefold()
    if not term:
        return True
    if term in record.name.casefold() or term in record.style_description.casefold():
        return True
    return any(
        term in value.casefold()
        for value in (*record.artist_ids, *record.trigger_words, *record.tags)
    )


def filter_records(records: Iterable[ArtistRecord], search_term: str) -> list[ArtistRecord]:
    return [record for record in records if matches_search(record, search_term)]


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------


def collation_key(name: str) -> tuple[str, str, str]:
    """Sort key approximating locale collation for display names.

    Accents and case are ignored at the first level (``"Émile"`` sorts with
    ``"emile"``), case-folded text breaks ties, the raw string breaks the rest.
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), name.casefold(), name)


def parse_create_time(value: str) -> date | None:
    """Parse the date part of a ``createTime`` string, or return ``None``."""
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def sort_records(records: Sequence[ArtistRecord], sort_key: str) -> list[ArtistRecord]:
    """Return *records* ordered by *sort_key*.

    ``count`` sorts by summed training count, highest first; ``name`` by
    :func:`collation_key`; ``date`` newest first with unparseable dates
    last.  Any other key leaves the order untouched.  All sorts are stable.
    """
    if sort_key == SortKey.COUNT.value:
        return sorted(records, key=lambda r: r.total_training_count, reverse=True)
    if sort_key == SortKey.NAME.value:
        return sorted(records, key=lambda r: collation_key(r.name))
    if sort_key == SortKey.DATE.value:
        def _date_key(record: ArtistRecord) -> tuple[bool, date]:
            parsed = parse_create_time(record.create_time)
            return (parsed is not None, parsed or date.min)

        return sorted(records, key=_date_key, reverse=True)
    return list(records)


# ---------------------------------------------------------------------------
# View
# ---------------------------------------------------------------------------


def resolve_selection(
    records: Sequence[ArtistRecord],
    selected_id: int | None,
) -> ArtistRecord | None:
    """Return the record with *selected_id* if it is still in *records*."""
    if selected_id is None:
        return None
    for record in records:
        if record.id == selected_id:
            return record
    return None


def build_view(records: Sequence[ArtistRecord], state: ViewState) -> CatalogView:
    """Filter, sort and re-resolve the selection for one snapshot.

    When the selected record was filtered out (or deleted), the returned
    view's state carries ``selected_id=None`` and callers must adopt it.
    """
    visible = sort_records(filter_records(records, state.search_term), state.sort_key)
    selected = resolve_selection(visible, state.selected_id)
    if selected is None and state.selected_id is not None:
        state = state.with_selection(None)
    return CatalogView(records=visible, state=state, selected=selected, total=len(records))
