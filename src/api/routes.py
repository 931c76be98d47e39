"""FastAPI API routes for the artist catalog.

Thin HTTP layer over :class:`CatalogService`: every handler parses its
input, makes one service call, and shapes the response.  Errors raised by
the service propagate to ``ErrorHandlingMiddleware``, which turns them into
JSON bodies with the right status.  Service dependencies are resolved from
``app.state`` via FastAPI's ``Depends`` using the ``Annotated`` pattern.

# ─── API ROUTE MAP ───────────────────────────────────────────────────
#
# Endpoint                              Method  Description
# ─────────────────────────────────────────────────────────────────────
# /api/v1/artists                       GET     All records, store order
# /api/v1/artists/view                  GET     Filtered + sorted list
# /api/v1/artists                       POST    Create a record (201)
# /api/v1/artists/{id}                  GET     One record
# /api/v1/artists/{id}                  PUT     Replace fields of a record
# /api/v1/artists/{id}                  DELETE  Delete record + its images
# /api/v1/artists/{id}/samples          POST    Upload and attach samples
# /api/v1/artists/{id}/samples/{index}  DELETE  Detach and delete a sample
# /api/v1/upload-image                  POST    Store one image, return ref
# /api/v1/delete-image                  POST    Delete one image by ref
# /api/v1/create-placeholder            POST    Ensure a placeholder exists
# /api/v1/export-artists                GET     Download every record
# /api/v1/chain/append                  POST    Append trigger words
# /api/v1/chain/draft                   POST    Reverse-match a chain
# /api/v1/health                        GET     Health check
#
# Images themselves are served from /images (StaticFiles, see main.py).
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, File, Form, Request, Response, UploadFile
from fastapi.responses import JSONResponse

from src.api.schemas import (
    CatalogViewResponse,
    ChainAppendRequest,
    ChainAppendResponse,
    ChainDraftRequest,
    DeleteImageRequest,
    ErrorResponse,
    HealthResponse,
    MessageResponse,
    PlaceholderRequest,
    UploadImageResponse,
)
from src.config.settings import Settings
from src.interfaces.image_store import ImageUpload
from src.models.artist import ArtistDraft, ArtistRecord
from src.models.chain import ChainDraft
from src.models.view import ViewState
from src.services.catalog_service import CatalogService, parse_placeholder_type
from src.utils.errors import ArtistCatalogError, ImageTooLargeError, ValidationError
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api/v1")

# Uploads are read in 64 KB chunks so an oversized file is rejected after
# buffering just past the limit rather than in full.
_UPLOAD_CHUNK_SIZE = 64 * 1024


# ---------------------------------------------------------------------------
# Dependency injection helpers -- resolve singletons from app.state
# ---------------------------------------------------------------------------


def _get_catalog(request: Request) -> CatalogService:
    """Return the catalog service from application state."""
    return request.app.state.catalog


def _get_settings(request: Request) -> Settings:
    """Return the resolved settings from application state."""
    return request.app.state.settings


CatalogDep = Annotated[CatalogService, Depends(_get_catalog)]
SettingsDep = Annotated[Settings, Depends(_get_settings)]


async def _read_upload(file: UploadFile, max_bytes: int) -> ImageUpload:
    """Read *file* in chunks, rejecting it as soon as it passes *max_bytes*."""
    chunks: list[bytes] = []
    total_size = 0
    while True:
        chunk = await file.read(_UPLOAD_CHUNK_SIZE)
        if not chunk:
            break
        total_size += len(chunk)
        if total_size > max_bytes:
            raise ImageTooLargeError(
                message=(
                    f"File too large: >{max_bytes // (1024 * 1024)} MB. "
                    f"Maximum: {max_bytes} bytes."
                ),
            )
        chunks.append(chunk)
    return ImageUpload(
        data=b"".join(chunks),
        filename=file.filename or "",
        content_type=file.content_type or "",
    )


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@router.get(
    "/artists",
    response_model=list[ArtistRecord],
    summary="List every artist record",
)
async def list_artists(catalog: CatalogDep) -> list[ArtistRecord]:
    return await catalog.list_records()


@router.get(
    "/artists/view",
    response_model=CatalogViewResponse,
    summary="Filtered and sorted artist list",
)
async def view_artists(
    catalog: CatalogDep,
    settings: SettingsDep,
    search: str = "",
    sort: str | None = None,
    selected: int | None = None,
) -> CatalogViewResponse:
    """Apply search, sort and selection to a fresh snapshot.

    ``selectedId`` comes back ``null`` when the selected record is not in
    the filtered result; clients should drop their selection then.
    """
    state = ViewState(
        search_term=search,
        sort_key=sort or settings.default_sort,
        selected_id=selected,
    )
    view = await catalog.build_view(state)
    return CatalogViewResponse(
        records=view.records,
        search_term=view.state.search_term,
        sort_key=view.state.sort_key,
        selected_id=view.state.selected_id,
        total=view.total,
    )


@router.get(
    "/artists/{record_id}",
    response_model=ArtistRecord,
    responses={404: {"model": ErrorResponse}},
    summary="Fetch one artist record",
)
async def get_artist(record_id: int, catalog: CatalogDep) -> ArtistRecord:
    return await catalog.get_record(record_id)


@router.post(
    "/artists",
    status_code=201,
    response_model=ArtistRecord,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Create an artist record",
)
async def create_artist(draft: ArtistDraft, catalog: CatalogDep) -> ArtistRecord:
    """Create a record; ``artistIds`` and ``trainingCounts`` may be comma-joined strings."""
    return await catalog.create_record(draft)


@router.put(
    "/artists/{record_id}",
    response_model=ArtistRecord,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Replace fields of an artist record",
)
async def replace_artist(
    record_id: int,
    draft: ArtistDraft,
    catalog: CatalogDep,
) -> ArtistRecord:
    """Overwrite the fields present in the body; ``id`` and ``createTime`` are kept."""
    return await catalog.replace_record(record_id, draft)


@router.delete(
    "/artists/{record_id}",
    status_code=204,
    responses={404: {"model": ErrorResponse}},
    summary="Delete an artist record and its images",
)
async def delete_artist(record_id: int, catalog: CatalogDep) -> Response:
    await catalog.delete_record(record_id)
    return Response(status_code=204)


@router.post(
    "/artists/{record_id}/samples",
    response_model=ArtistRecord,
    responses={
        404: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        415: {"model": ErrorResponse},
    },
    summary="Upload sample images and attach them to a record",
)
async def add_samples(
    record_id: int,
    images: Annotated[list[UploadFile], File()],
    catalog: CatalogDep,
    settings: SettingsDep,
) -> ArtistRecord:
    uploads = [await _read_upload(image, settings.max_upload_size_bytes) for image in images]
    return await catalog.add_sample_images(record_id, uploads)


@router.delete(
    "/artists/{record_id}/samples/{index}",
    response_model=ArtistRecord,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Detach a sample image and delete its file",
)
async def remove_sample(record_id: int, index: int, catalog: CatalogDep) -> ArtistRecord:
    return await catalog.remove_sample_image(record_id, index)


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------


@router.post(
    "/upload-image",
    response_model=UploadImageResponse,
    responses={413: {"model": ErrorResponse}, 415: {"model": ErrorResponse}},
    summary="Store one uploaded image",
)
async def upload_image(
    image: UploadFile,
    catalog: CatalogDep,
    settings: SettingsDep,
    artist_name: Annotated[str, Form(alias="artistName")] = "",
    image_type: Annotated[str, Form(alias="imageType")] = "preview",
) -> UploadImageResponse:
    """Validate and store an image; the returned ``filePath`` goes on a record."""
    upload = await _read_upload(image, settings.max_upload_size_bytes)
    ref = await catalog.upload_image(
        upload.data,
        upload.filename,
        upload.content_type,
        artist_name,
        image_type,
    )
    return UploadImageResponse(file_path=ref)


@router.post(
    "/delete-image",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Delete one image file by ref",
)
async def delete_image(body: DeleteImageRequest, catalog: CatalogDep) -> MessageResponse:
    if not body.path.strip():
        raise ValidationError(message="Image path is required")
    await catalog.delete_image(body.path)
    return MessageResponse(message="Image deleted successfully")


@router.post(
    "/create-placeholder",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Create a placeholder image if it is missing",
)
async def create_placeholder(body: PlaceholderRequest, catalog: CatalogDep) -> MessageResponse:
    ref = await catalog.ensure_placeholder(parse_placeholder_type(body.type))
    return MessageResponse(message="Placeholder checked/created", file_path=ref)


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------


@router.get(
    "/export-artists",
    summary="Download every record as one JSON file",
)
async def export_artists(catalog: CatalogDep, settings: SettingsDep) -> JSONResponse:
    documents = await catalog.export_all()
    return JSONResponse(
        content=documents,
        headers={
            "Content-Disposition": f'attachment; filename="{settings.export_filename}"',
        },
    )


# ---------------------------------------------------------------------------
# Chains
# ---------------------------------------------------------------------------


@router.post(
    "/chain/append",
    response_model=ChainAppendResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Append records' trigger words to a chain",
)
async def append_chain(body: ChainAppendRequest, catalog: CatalogDep) -> ChainAppendResponse:
    chain = await catalog.append_to_chain(body.chain, body.record_ids)
    return ChainAppendResponse(chain=chain)


@router.post(
    "/chain/draft",
    response_model=ChainDraft,
    summary="Pre-fill a new record from a chain",
)
async def chain_draft(body: ChainDraftRequest, catalog: CatalogDep) -> ChainDraft:
    """Return the chain's tokens plus the artist IDs and counts of matching records."""
    return await catalog.draft_from_chain(body.chain)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Application health check",
)
async def health_check(request: Request) -> HealthResponse:
    """Report the configured stores; the record store is probed with a scan."""
    providers: dict[str, object] = dict(getattr(request.app.state, "provider_registry", {}))
    catalog: CatalogService | None = getattr(request.app.state, "catalog", None)

    status = "healthy"
    if catalog is None:
        status = "unhealthy"
    else:
        try:
            providers["records"] = len(await catalog.list_records())
        except ArtistCatalogError as exc:
            _logger.warning("health_probe_failed", error=str(exc))
            status = "degraded"

    return HealthResponse(status=status, version=request.app.version, providers=providers)
