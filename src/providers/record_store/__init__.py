"""Record store providers.

JsonFileRecordStore keeps one pretty-printed JSON document per artist in the
data directory and rescans it on every read.  Any other backend only has to
implement IRecordStore.
"""

from src.providers.record_store.json_file_store import JsonFileRecordStore

__all__ = ["JsonFileRecordStore"]
