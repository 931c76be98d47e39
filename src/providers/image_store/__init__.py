"""Image store providers.

LocalImageStore writes uploads next to the artist documents and serves them
under ``/images``; placeholders are created on demand and never deleted.
"""

from src.providers.image_store.local_image_store import LocalImageStore

__all__ = ["LocalImageStore"]
