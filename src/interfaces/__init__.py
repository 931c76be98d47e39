"""Public interface definitions for the catalog's storage backends.

The catalog service talks to disk exclusively through the abstract base
classes defined in this package.  Concrete adapters implement them and are
injected at startup in ``src/main.py``, so unit tests can hand the service
an in-memory fake or a ``tmp_path``-backed store instead.

CONCRETE PROVIDER MAP:
    Interface        →  Concrete implementations (in src/providers/)
    ──────────────────────────────────────────────────────────────
    IRecordStore     →  JsonFileRecordStore
    IImageStore      →  LocalImageStore

Re-exports
----------
IRecordStore
    Artist document persistence contract.
IImageStore, ImageUpload
    Image storage contract and the uploaded-file dataclass.
"""

from src.interfaces.image_store import IImageStore, ImageUpload
from src.interfaces.record_store import IRecordStore

__all__ = [
    "IImageStore",
    "IRecordStore",
    "ImageUpload",
]
