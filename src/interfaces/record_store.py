"""Abstract base class for artist record persistence.

A record store keeps one document per artist and has no index: every read
is a full scan, and callers treat the result of :meth:`list_records` as a
snapshot they reuse instead of re-querying per item.  Writes touch exactly
one document.  No locking; last write wins.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.artist import ArtistRecord


class IRecordStore(ABC):
    """Contract for artist record storage backends.

    Operations are async so a network-backed store can be swapped in
    without blocking the event loop.  Implementations raise
    :class:`~src.utils.errors.TransportError` when the backing medium
    cannot be reached.
    """

    @abstractmethod
    async def list_records(self) -> list[ArtistRecord]:
        """Return every readable record.

        Unreadable documents are skipped (and logged), never fatal.
        """

    @abstractmethod
    async def get_record(self, record_id: int) -> ArtistRecord | None:
        """Return the record with *record_id*, or ``None``."""

    @abstractmethod
    async def next_id(self) -> int:
        """Return an identifier no stored record currently uses."""

    @abstractmethod
    async def write_record(self, record: ArtistRecord) -> None:
        """Create or overwrite the document for *record*.

        If the record was renamed, its previous document is removed so that
        exactly one document per id remains.
        """

    @abstractmethod
    async def delete_record(self, record_id: int) -> bool:
        """Remove the document for *record_id*.

        Returns
        -------
        bool
            ``True`` if a document was removed, ``False`` if none existed.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for logs and health output."""
