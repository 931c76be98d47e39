"""Artist catalog orchestrator -- create, replace, delete, images, chains.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Services (business logic orchestration).
# Depends on: IRecordStore, IImageStore, and the pure helpers in
#             field_normalizer, duplicate_detector, chain_composer and
#             record_aggregator.
#
# Every mutation follows the same path:
#
#   1. NORMALIZE -- raw draft values become lists (FieldNormalizer).
#   2. VALIDATE  -- required fields, identity-set collision.
#   3. PERSIST   -- one document written or removed (IRecordStore).
#   4. RELEASE   -- owned image files removed, best-effort.
#
# Operations that need "all records" take exactly one snapshot from the
# store per call.  Nothing here caches records between calls.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Any

import pydantic
import structlog

from src.interfaces.image_store import IImageStore, ImageUpload
from src.interfaces.record_store import IRecordStore
from src.models.artist import ArtistDraft, ArtistRecord, ImageKind
from src.models.chain import ChainDraft
from src.models.view import CatalogView, ViewState
from src.services import chain_composer, record_aggregator
from src.services.duplicate_detector import find_duplicate
from src.utils.errors import (
    ArtistCatalogError,
    DuplicateIdentityError,
    InvalidImageError,
    RecordNotFoundError,
    ValidationError,
)
from src.utils.field_normalizer import normalize_count_list, normalize_string_list

logger = structlog.get_logger(logger_name=__name__)

# Training counts for a new record with none given.
_DEFAULT_TRAINING_COUNTS = [0]

# Names accepted for the placeholder endpoint; "artist" is the preview placeholder.
_PLACEHOLDER_TYPES: dict[str, ImageKind] = {
    "artist": ImageKind.PREVIEW,
    "preview": ImageKind.PREVIEW,
    "sample": ImageKind.SAMPLE,
}


def parse_image_kind(value: str | ImageKind) -> ImageKind:
    """Return the :class:`ImageKind` named by *value*.

    Raises
    ------
    InvalidImageError
        *value* is neither ``preview`` nor ``sample``.
    """
    if isinstance(value, ImageKind):
        return value
    try:
        return ImageKind(value.strip().lower())
    except ValueError as exc:
        raise InvalidImageError(
            message=f"Unknown image type '{value}', expected 'preview' or 'sample'"
        ) from exc


def parse_placeholder_type(value: str) -> ImageKind:
    """Map a placeholder type name (``artist`` or ``sample``) to its kind."""
    kind = _PLACEHOLDER_TYPES.get(value.strip().lower())
    if kind is None:
        raise ValidationError(message="Invalid placeholder type")
    return kind


class CatalogService:
    """Coordinates the record store, the image store and the pure helpers.

    All dependencies are constructor-injected.

    Parameters
    ----------
    record_store:
        Where artist documents live.
    image_store:
        Where uploaded previews and samples live.
    enforce_unique_ids_on_update:
        Also reject identity-set collisions when a record is replaced.
        Off by default; creation is always checked.
    """

    def __init__(
        self,
        record_store: IRecordStore,
        image_store: IImageStore,
        enforce_unique_ids_on_update: bool = False,
    ) -> None:
        self._records = record_store
        self._images = image_store
        self._enforce_unique_ids_on_update = enforce_unique_ids_on_update

    # ── Reads ──────────────────────────────────────────────────────────

    async def list_records(self) -> list[ArtistRecord]:
        return await self._records.list_records()

    async def get_record(self, record_id: int) -> ArtistRecord:
        record = await self._records.get_record(record_id)
        if record is None:
            raise RecordNotFoundError(message=f"Artist {record_id} not found")
        return record

    async def build_view(self, state: ViewState) -> CatalogView:
        """Filter, sort and re-select against one fresh snapshot."""
        records = await self._records.list_records()
        return record_aggregator.build_view(records, state)

    async def export_all(self) -> list[dict[str, Any]]:
        """Return every record as its on-disk document."""
        records = await self._records.list_records()
        logger.info("catalog_exported", count=len(records))
        return [record.to_document() for record in records]

    # ── Create / replace / delete ──────────────────────────────────────

    async def create_record(self, draft: ArtistDraft) -> ArtistRecord:
        """Validate *draft*, assign an id and persist it as a new record.

        Raises
        ------
        ValidationError
            No name, or no artist IDs.
        DuplicateIdentityError
            Another record already has the same artist-ID set.
        """
        name = (draft.name or "").strip()
        artist_ids = normalize_string_list(draft.artist_ids)
        if not name:
            raise ValidationError(message="Artist name is required")
        if not artist_ids:
            raise ValidationError(message="At least one artist ID is required")

        snapshot = await self._records.list_records()
        self._reject_duplicate(artist_ids, snapshot)

        record = _validated_record(
            {
                "id": await self._records.next_id(),
                "name": name,
                "artist_ids": artist_ids,
                "training_counts": normalize_count_list(
                    draft.training_counts, default=_DEFAULT_TRAINING_COUNTS
                ),
                "preview_image": draft.preview_image or "",
                "sample_images": normalize_string_list(draft.sample_images),
                "tags": normalize_string_list(draft.tags),
                "trigger_words": normalize_string_list(draft.trigger_words),
                "style_description": draft.style_description or "",
                "create_time": (draft.create_time or "").strip() or date.today().isoformat(),
            }
        )
        await self._records.write_record(record)
        logger.info("record_created", record_id=record.id, name=record.name)
        return record

    async def replace_record(self, record_id: int, draft: ArtistDraft) -> ArtistRecord:
        """Overwrite the fields present in *draft*; absent fields keep their values.

        ``id`` and ``createTime`` never change.  Renaming moves the document
        to its new file name.
        """
        snapshot = await self._records.list_records()
        current = _find(snapshot, record_id)

        sent = draft.model_fields_set
        update: dict[str, Any] = {}
        if "name" in sent:
            name = (draft.name or "").strip()
            if not name:
                raise ValidationError(message="Artist name is required")
            update["name"] = name
        if "artist_ids" in sent:
            update["artist_ids"] = normalize_string_list(draft.artist_ids)
        if "training_counts" in sent:
            update["training_counts"] = normalize_count_list(draft.training_counts)
        if "preview_image" in sent:
            update["preview_image"] = draft.preview_image or ""
        for field in ("sample_images", "tags", "trigger_words"):
            if field in sent:
                update[field] = normalize_string_list(getattr(draft, field))
        if "style_description" in sent:
            update["style_description"] = draft.style_description or ""

        if self._enforce_unique_ids_on_update and "artist_ids" in update:
            self._reject_duplicate(update["artist_ids"], snapshot, exclude_id=record_id)

        # Re-validate so the before-validators run on the merged values.
        record = _validated_record({**current.model_dump(), **update})
        await self._records.write_record(record)
        logger.info("record_replaced", record_id=record_id, fields=sorted(update))
        return record

    async def delete_record(self, record_id: int) -> ArtistRecord:
        """Remove the record, then release the images it owns.

        Image removal is best-effort: a file that cannot be deleted is
        logged and left behind, the record is gone either way.
        """
        current = await self.get_record(record_id)
        if not await self._records.delete_record(record_id):
            raise RecordNotFoundError(message=f"Artist {record_id} not found")
        logger.info("record_deleted", record_id=record_id, name=current.name)

        for ref in current.owned_images():
            await self._release_image(ref, record_id=record_id)
        return current

    # ── Images ─────────────────────────────────────────────────────────

    async def upload_image(
        self,
        data: bytes,
        filename: str,
        content_type: str,
        owner_name: str,
        kind: str | ImageKind,
    ) -> str:
        """Store one image and return its ref; the caller attaches it to a record."""
        return await self._images.save_image(
            data, filename, content_type, owner_name, parse_image_kind(kind)
        )

    async def delete_image(self, ref: str) -> None:
        await self._images.delete_image(ref)

    async def add_sample_images(
        self,
        record_id: int,
        uploads: Sequence[ImageUpload],
    ) -> ArtistRecord:
        """Store *uploads* as samples and append them to the record.

        If any upload is rejected, files already stored by this call are
        removed again and the record is left unchanged.
        """
        current = await self.get_record(record_id)
        if not uploads:
            raise ValidationError(message="No image file uploaded")

        stored: list[str] = []
        try:
            for upload in uploads:
                stored.append(
                    await self._images.save_image(
                        upload.data,
                        upload.filename,
                        upload.content_type,
                        current.name,
                        ImageKind.SAMPLE,
                    )
                )
            record = current.model_copy(
                update={"sample_images": [*current.sample_images, *stored]}
            )
            await self._records.write_record(record)
        except ArtistCatalogError:
            for ref in stored:
                await self._release_image(ref, record_id=record_id)
            raise

        logger.info("samples_added", record_id=record_id, count=len(stored))
        return record

    async def remove_sample_image(self, record_id: int, index: int) -> ArtistRecord:
        """Drop the sample at *index* and delete its file, best-effort."""
        current = await self.get_record(record_id)
        if not 0 <= index < len(current.sample_images):
            raise ValidationError(
                message=f"Sample index {index} out of range for artist {record_id}"
            )

        samples = list(current.sample_images)
        ref = samples.pop(index)
        if not self._images.is_placeholder(ref):
            await self._release_image(ref, record_id=record_id)

        record = current.model_copy(update={"sample_images": samples})
        await self._records.write_record(record)
        logger.info("sample_removed", record_id=record_id, index=index, ref=ref)
        return record

    async def ensure_placeholder(self, kind: ImageKind) -> str:
        return await self._images.ensure_placeholder(kind)

    async def ensure_placeholders(self) -> list[str]:
        """Create both placeholders if missing; run once at startup."""
        return [await self._images.ensure_placeholder(kind) for kind in ImageKind]

    # ── Chains ─────────────────────────────────────────────────────────

    async def append_to_chain(self, chain: str, record_ids: Sequence[int]) -> str:
        """Append the trigger words of *record_ids*, in order, to *chain*."""
        snapshot = await self._records.list_records()
        records = [_find(snapshot, record_id) for record_id in record_ids]
        return chain_composer.compose_chain(records, chain)

    async def draft_from_chain(self, chain: str) -> ChainDraft:
        snapshot = await self._records.list_records()
        draft = chain_composer.draft_from_chain(chain, snapshot)
        logger.debug(
            "chain_draft_built",
            tokens=len(draft.trigger_words),
            matched=len(draft.matched_record_ids),
        )
        return draft

    # ── Private helpers ────────────────────────────────────────────────

    def _reject_duplicate(
        self,
        artist_ids: list[str],
        snapshot: Sequence[ArtistRecord],
        exclude_id: int | None = None,
    ) -> None:
        existing = find_duplicate(artist_ids, snapshot, exclude_id=exclude_id)
        if existing is not None:
            logger.info(
                "duplicate_identity_rejected",
                artist_ids=artist_ids,
                existing_id=existing.id,
            )
            raise DuplicateIdentityError(
                message=(
                    "An artist with the same artist ID combination already exists: "
                    f"'{existing.name}'"
                ),
                existing_id=existing.id,
            )

    async def _release_image(self, ref: str, record_id: int) -> None:
        try:
            await self._images.delete_image(ref)
        except ArtistCatalogError as exc:
            logger.warning("image_release_failed", record_id=record_id, ref=ref, error=str(exc))


def _validated_record(values: dict[str, Any]) -> ArtistRecord:
    """Build a record, reporting malformed field values as a 400."""
    try:
        return ArtistRecord.model_validate(values)
    except pydantic.ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        raise ValidationError(message=f"Invalid artist record: {problems}") from exc


def _find(records: Sequence[ArtistRecord], record_id: int) -> ArtistRecord:
    for record in records:
        if record.id == record_id:
            return record
    raise RecordNotFoundError(message=f"Artist {record_id} not found")
