"""Local-directory image store.

Uploaded previews and samples are written into the same directory as the
artist documents and served under ``/images``.  Stored names follow
``<sanitized owner>-<kind>-<n><ext>`` with the first free ``n``.

Placeholders are small SVG documents saved under ``.png`` names (the names
are fixed refs baked into existing records); they are created on demand
and can never be deleted here.
"""

from __future__ import annotations

import asyncio
from pathlib import Path, PurePosixPath

import structlog

from src.interfaces.image_store import IImageStore
from src.models.artist import (
    IMAGES_URL_PREFIX,
    PLACEHOLDER_ARTIST_FILENAME,
    PLACEHOLDER_SAMPLE_FILENAME,
    ImageKind,
)
from src.utils.errors import (
    ForbiddenImageError,
    ImageNotFoundError,
    ImageTooLargeError,
    InvalidImageError,
    TransportError,
)
from src.utils.filenames import safe_file_stem

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
_DEFAULT_ALLOWED_TYPES = frozenset({"jpeg", "jpg", "png", "gif", "webp"})
_PLACEHOLDER_PREFIX = "placeholder-"
# Ref prefixes that point into the managed directory: "/images/x.png", "images/x.png", "x.png".
_MANAGED_PARENTS = frozenset({IMAGES_URL_PREFIX, IMAGES_URL_PREFIX.lstrip("/"), "."})

_PLACEHOLDER_ARTIST_SVG = (
    '<svg width="200" height="180" xmlns="http://www.w3.org/2000/svg">'
    '<rect width="200" height="180" fill="#e6e6fa"/>'
    '<text x="50%" y="50%" font-family="Arial" font-size="18" text-anchor="middle" '
    'alignment-baseline="middle" fill="#777">Artist Image</text></svg>'
)
_PLACEHOLDER_SAMPLE_SVG = (
    '<svg width="100" height="80" xmlns="http://www.w3.org/2000/svg">'
    '<rect width="100" height="80" fill="#f0f0f0"/>'
    '<text x="50%" y="50%" font-family="Arial" font-size="12" text-anchor="middle" '
    'alignment-baseline="middle" fill="#8a8c8a">Sample</text></svg>'
)

_PLACEHOLDERS: dict[ImageKind, tuple[str, str]] = {
    ImageKind.PREVIEW: (PLACEHOLDER_ARTIST_FILENAME, _PLACEHOLDER_ARTIST_SVG),
    ImageKind.SAMPLE: (PLACEHOLDER_SAMPLE_FILENAME, _PLACEHOLDER_SAMPLE_SVG),
}


class LocalImageStore(IImageStore):
    """Filesystem-backed image store.

    Parameters
    ----------
    data_dir:
        Directory that holds the images (shared with the record documents).
    max_bytes:
        Upload size limit.
    allowed_types:
        Lower-case format names accepted in both the extension and the MIME
        subtype.
    """

    def __init__(
        self,
        data_dir: str | Path,
        max_bytes: int = _DEFAULT_MAX_BYTES,
        allowed_types: frozenset[str] | set[str] = _DEFAULT_ALLOWED_TYPES,
    ) -> None:
        self._data_dir = Path(data_dir)
        self._max_bytes = max_bytes
        self._allowed_types = frozenset(t.lower().lstrip(".") for t in allowed_types)

    # -- Validation ---------------------------------------------------------

    def _validate_upload(self, data: bytes, filename: str, content_type: str) -> str:
        """Return the lower-cased extension of an acceptable upload."""
        extension = PurePosixPath(filename).suffix.lower()
        mime_subtype = content_type.lower().partition("/")[2]
        if extension.lstrip(".") not in self._allowed_types or mime_subtype not in self._allowed_types:
            raise InvalidImageError(
                message=(
                    f"Only images ({', '.join(sorted(self._allowed_types))}) are allowed, "
                    f"got '{filename}' ({content_type or 'unknown type'})"
                ),
                provider_name=self.get_provider_name(),
            )
        if len(data) > self._max_bytes:
            raise ImageTooLargeError(
                message=(
                    f"File too large: {len(data)} bytes. "
                    f"Maximum: {self._max_bytes // (1024 * 1024)} MB."
                ),
                provider_name=self.get_provider_name(),
            )
        return extension

    def _resolve_ref(self, ref: str) -> Path:
        """Map an ``/images/<file>`` ref to a path inside the data directory."""
        ref_path = PurePosixPath(ref)
        name = ref_path.name
        if not name or name.startswith(_PLACEHOLDER_PREFIX):
            raise ForbiddenImageError(provider_name=self.get_provider_name())
        if str(ref_path.parent) not in _MANAGED_PARENTS:
            raise ForbiddenImageError(provider_name=self.get_provider_name())
        # Only image files are managed here; record documents share the directory.
        if PurePosixPath(name).suffix.lower().lstrip(".") not in self._allowed_types:
            raise ForbiddenImageError(
                message=f"Not an image file: {ref}",
                provider_name=self.get_provider_name(),
            )
        root = self._data_dir.resolve()
        candidate = (root / name).resolve()
        if candidate.parent != root:
            raise ForbiddenImageError(provider_name=self.get_provider_name())
        return candidate

    # -- Sync helpers (executed via asyncio.to_thread) ----------------------

    def _next_free_path(self, stem: str, extension: str) -> Path:
        index = 1
        while (self._data_dir / f"{stem}-{index}{extension}").exists():
            index += 1
        return self._data_dir / f"{stem}-{index}{extension}"

    def _save_sync(self, data: bytes, owner_name: str, kind: ImageKind, extension: str) -> str:
        self._data_dir.mkdir(parents=True, exist_ok=True)
        target = self._next_free_path(f"{safe_file_stem(owner_name)}-{kind.value}", extension)
        target.write_bytes(data)
        return target.name

    def _ensure_placeholder_sync(self, kind: ImageKind) -> tuple[str, bool]:
        filename, svg = _PLACEHOLDERS[kind]
        path = self._data_dir / filename
        if path.exists():
            return filename, False
        self._data_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(svg, encoding="utf-8")
        return filename, True

    # -- IImageStore implementation -----------------------------------------

    async def ensure_placeholder(self, kind: ImageKind) -> str:
        try:
            filename, created = await asyncio.to_thread(self._ensure_placeholder_sync, kind)
        except OSError as exc:
            raise TransportError(
                message=f"Could not create placeholder image: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        if created:
            logger.info("placeholder_created", file=filename)
        return f"{IMAGES_URL_PREFIX}/{filename}"

    async def save_image(
        self,
        data: bytes,
        filename: str,
        content_type: str,
        owner_name: str,
        kind: ImageKind,
    ) -> str:
        extension = self._validate_upload(data, filename, content_type)
        owner = owner_name.strip() or "unknown"
        try:
            stored = await asyncio.to_thread(self._save_sync, data, owner, kind, extension)
        except OSError as exc:
            logger.error("image_save_failed", owner=owner, kind=kind.value, error=str(exc))
            raise TransportError(
                message=f"Could not store image: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        logger.info("image_saved", file=stored, owner=owner, kind=kind.value, size=len(data))
        return f"{IMAGES_URL_PREFIX}/{stored}"

    async def delete_image(self, ref: str) -> None:
        path = self._resolve_ref(ref)
        if not path.is_file():
            raise ImageNotFoundError(
                message=f"Image file not found: {ref}",
                provider_name=self.get_provider_name(),
            )
        try:
            await asyncio.to_thread(path.unlink)
        except OSError as exc:
            logger.error("image_delete_failed", file=path.name, error=str(exc))
            raise TransportError(
                message=f"Failed to delete image file: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        logger.info("image_deleted", file=path.name)

    def is_placeholder(self, ref: str) -> bool:
        return PurePosixPath(ref).name.startswith(_PLACEHOLDER_PREFIX)

    def get_provider_name(self) -> str:
        return "local_image_store"
