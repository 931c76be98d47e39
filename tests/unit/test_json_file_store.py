"""Unit tests for JsonFileRecordStore.

Runs against a ``tmp_path`` data directory so every test starts empty.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from src.providers.record_store.json_file_store import JsonFileRecordStore
from src.utils.errors import TransportError
from tests.conftest import make_record


# ─── Write + read ─────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_write_creates_named_document(record_store, data_dir: Path):
    record = make_record(1700000000001, name="Kawacy")
    await record_store.write_record(record)

    path = data_dir / "Kawacy-1700000000001.json"
    assert path.exists()
    text = path.read_text(encoding="utf-8")
    assert text.startswith('{\n  "id": 1700000000001')
    assert json.loads(text)["artistIds"] == ["kawacy"]


@pytest.mark.asyncio
async def test_illegal_name_characters_are_replaced(record_store, data_dir: Path):
    await record_store.write_record(make_record(7, name='A/B:C*"D"'))
    assert (data_dir / "A_B_C__D_-7.json").exists()


@pytest.mark.asyncio
async def test_unicode_is_written_unescaped(record_store, data_dir: Path):
    await record_store.write_record(make_record(2, name="Émile"))
    assert "Émile" in (data_dir / "Émile-2.json").read_text(encoding="utf-8")


@pytest.mark.asyncio
async def test_list_and_get_round_trip(record_store):
    await record_store.write_record(make_record(1, name="One"))
    await record_store.write_record(make_record(2, name="Two"))

    records = await record_store.list_records()
    assert sorted(r.id for r in records) == [1, 2]

    fetched = await record_store.get_record(2)
    assert fetched is not None and fetched.name == "Two"
    assert await record_store.get_record(3) is None


@pytest.mark.asyncio
async def test_missing_directory_lists_empty(tmp_path: Path):
    store = JsonFileRecordStore(data_dir=tmp_path / "does-not-exist")
    assert await store.list_records() == []


# ─── Rename ───────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_rename_removes_old_document(record_store, data_dir: Path):
    record = make_record(5, name="Old Name")
    await record_store.write_record(record)
    await record_store.write_record(record.model_copy(update={"name": "New Name"}))

    assert not (data_dir / "Old Name-5.json").exists()
    assert (data_dir / "New Name-5.json").exists()
    assert len(await record_store.list_records()) == 1


@pytest.mark.asyncio
async def test_rename_does_not_touch_ids_with_same_suffix(record_store, data_dir: Path):
    await record_store.write_record(make_record(15, name="Fifteen"))
    await record_store.write_record(make_record(5, name="Five"))
    await record_store.write_record(make_record(5, name="Five Renamed"))

    assert (data_dir / "Fifteen-15.json").exists()


# ─── Unreadable documents ─────────────────────────────────────────

@pytest.mark.asyncio
async def test_corrupt_and_invalid_documents_are_skipped(record_store, data_dir: Path):
    await record_store.write_record(make_record(1, name="Good"))
    (data_dir / "broken-2.json").write_text("{not json", encoding="utf-8")
    (data_dir / "nameless-3.json").write_text('{"id": 3}', encoding="utf-8")
    (data_dir / "notes.txt").write_text("ignored", encoding="utf-8")

    records = await record_store.list_records()
    assert [r.name for r in records] == ["Good"]


@pytest.mark.asyncio
async def test_legacy_document_is_read(record_store, data_dir: Path):
    legacy = {"id": 9, "name": "Legacy", "artistId": ["l1"], "trainingCount": [4]}
    (data_dir / "Legacy-9.json").write_text(json.dumps(legacy), encoding="utf-8")

    record = await record_store.get_record(9)
    assert record is not None
    assert record.artist_ids == ["l1"]
    assert record.training_counts == [4]


# ─── Delete ───────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_delete_removes_document(record_store, data_dir: Path):
    await record_store.write_record(make_record(4, name="Gone"))
    assert await record_store.delete_record(4) is True
    assert not (data_dir / "Gone-4.json").exists()


@pytest.mark.asyncio
async def test_delete_missing_returns_false(record_store):
    assert await record_store.delete_record(404) is False


# ─── Ids ──────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_next_id_is_unique_within_same_millisecond(record_store):
    with patch("src.providers.record_store.json_file_store.time.time", return_value=1000.0):
        first = await record_store.next_id()
        second = await record_store.next_id()
    assert first == 1_000_000
    assert second == 1_000_001


@pytest.mark.asyncio
async def test_next_id_skips_ids_in_use(record_store):
    await record_store.write_record(make_record(1_000_000, name="Taken"))
    with patch("src.providers.record_store.json_file_store.time.time", return_value=1000.0):
        assert await record_store.next_id() == 1_000_001


# ─── Failures ─────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_write_failure_raises_transport_error(record_store):
    with patch.object(Path, "write_text", side_effect=PermissionError("read-only")):
        with pytest.raises(TransportError) as exc_info:
            await record_store.write_record(make_record(1))
    assert exc_info.value.provider_name == "json_file_store"
    assert exc_info.value.status_code == 503


def test_provider_name(record_store):
    assert record_store.get_provider_name() == "json_file_store"
