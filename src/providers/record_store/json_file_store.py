"""JSON-directory record store.

Each artist is one pretty-printed JSON file named
``<sanitized name>-<id>.json`` inside the data directory, next to the
uploaded images.  There is no index: ``list_records`` reads every ``*.json``
file on each call.  Blocking filesystem work runs in a worker thread via
``asyncio.to_thread``.
"""

from __future__ import annotations

import asyncio
import json
import time
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError

from src.interfaces.record_store import IRecordStore
from src.models.artist import ArtistRecord
from src.utils.errors import TransportError
from src.utils.filenames import safe_file_stem

logger = structlog.get_logger(logger_name=__name__)

_DOCUMENT_SUFFIX = ".json"


class JsonFileRecordStore(IRecordStore):
    """Record store backed by one JSON document per artist."""

    def __init__(self, data_dir: str | Path) -> None:
        self._data_dir = Path(data_dir)
        self._last_issued_id = 0

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    # -- Naming ------------------------------------------------------------

    @staticmethod
    def document_name(record: ArtistRecord) -> str:
        """Return the file name for *record*'s document."""
        return f"{safe_file_stem(record.name)}-{record.id}{_DOCUMENT_SUFFIX}"

    def _documents_for_id(self, record_id: int) -> list[Path]:
        suffix = f"-{record_id}{_DOCUMENT_SUFFIX}"
        return [path for path in self._document_paths() if path.name.endswith(suffix)]

    def _document_paths(self) -> list[Path]:
        if not self._data_dir.exists():
            return []
        return sorted(
            path for path in self._data_dir.iterdir()
            if path.is_file() and path.suffix == _DOCUMENT_SUFFIX
        )

    # -- Sync helpers (executed via asyncio.to_thread) ---------------------

    def _read_all_sync(self) -> list[ArtistRecord]:
        records: list[ArtistRecord] = []
        for path in self._document_paths():
            try:
                raw: Any = json.loads(path.read_text(encoding="utf-8"))
                records.append(ArtistRecord.model_validate(raw))
            except (json.JSONDecodeError, UnicodeDecodeError, PydanticValidationError) as exc:
                logger.warning("artist_json_unreadable", file=path.name, error=str(exc))
        return records

    def _write_sync(self, record: ArtistRecord) -> str:
        self._data_dir.mkdir(parents=True, exist_ok=True)
        filename = self.document_name(record)

        for stale in self._documents_for_id(record.id):
            if stale.name != filename:
                stale.unlink()
                logger.info("artist_json_renamed", old_file=stale.name, new_file=filename)

        payload = json.dumps(record.to_document(), indent=2, ensure_ascii=False)
        (self._data_dir / filename).write_text(payload, encoding="utf-8")
        return filename

    def _delete_sync(self, record_id: int) -> bool:
        documents = self._documents_for_id(record_id)
        for path in documents:
            path.unlink()
        return bool(documents)

    # -- IRecordStore implementation ---------------------------------------

    async def list_records(self) -> list[ArtistRecord]:
        """Scan the data directory and return every readable record."""
        try:
            records = await asyncio.to_thread(self._read_all_sync)
        except OSError as exc:
            logger.error("record_scan_failed", data_dir=str(self._data_dir), error=str(exc))
            raise TransportError(
                message=f"Could not read artist records: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        logger.debug("records_scanned", count=len(records))
        return records

    async def get_record(self, record_id: int) -> ArtistRecord | None:
        for record in await self.list_records():
            if record.id == record_id:
                return record
        return None

    async def next_id(self) -> int:
        """Return a millisecond timestamp not yet used by any document.

        Two creates in the same millisecond get consecutive ids.
        """
        candidate = max(int(time.time() * 1000), self._last_issued_id + 1)
        while await asyncio.to_thread(self._documents_for_id, candidate):
            candidate += 1
        self._last_issued_id = candidate
        return candidate

    async def write_record(self, record: ArtistRecord) -> None:
        try:
            filename = await asyncio.to_thread(self._write_sync, record)
        except OSError as exc:
            logger.error("record_write_failed", record_id=record.id, error=str(exc))
            raise TransportError(
                message=f"Could not save artist '{record.name}': {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        logger.info("artist_json_saved", record_id=record.id, file=filename)

    async def delete_record(self, record_id: int) -> bool:
        try:
            removed = await asyncio.to_thread(self._delete_sync, record_id)
        except OSError as exc:
            logger.error("record_delete_failed", record_id=record_id, error=str(exc))
            raise TransportError(
                message=f"Could not delete artist {record_id}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        if removed:
            logger.info("artist_json_deleted", record_id=record_id)
        return removed

    def get_provider_name(self) -> str:
        return "json_file_store"
