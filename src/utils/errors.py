"""Custom exception hierarchy for ArtistCatalog.

All application exceptions inherit from :class:`ArtistCatalogError`, which
carries an optional ``provider_name`` (which store or adapter raised it) and
the HTTP ``status_code`` the API layer should answer with.

The hierarchy is organized by how the caller has to react:

    ArtistCatalogError  (base -- catch-all for any catalog error)
    +-- ValidationError          (bad input, operation aborted, no write)
    |   +-- DuplicateIdentityError   (artist-ID set already taken)
    |   +-- InvalidImageError        (extension / MIME / kind not allowed)
    |   +-- ImageTooLargeError       (upload over the size limit)
    |   +-- ForbiddenImageError      (placeholder or out-of-directory ref)
    +-- NotFoundError            (record or image absent)
    |   +-- RecordNotFoundError
    |   +-- ImageNotFoundError
    +-- TransportError           (store unreachable / I/O failure)
    +-- ConfigurationError       (startup / missing config)

None of these are retried automatically; every failure is terminal for the
user action that triggered it.
"""


class ArtistCatalogError(Exception):
    """Base exception for all ArtistCatalog errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name``.  ``status_code`` is a class attribute so the error
    middleware can map an exception to a response without a lookup table.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Validation errors -- surfaced to the user, nothing persisted
# ---------------------------------------------------------------------------

class ValidationError(ArtistCatalogError):
    """Raised when a submitted record or image fails validation."""

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class DuplicateIdentityError(ValidationError):
    """Raised when a new record's artist-ID set equals an existing one."""

    status_code = 409

    def __init__(
        self,
        message: str = "An artist with the same artist ID combination already exists",
        provider_name: str | None = None,
        existing_id: int | None = None,
    ) -> None:
        self._existing_id = existing_id
        super().__init__(message=message, provider_name=provider_name)

    @property
    def existing_id(self) -> int | None:
        return self._existing_id


class InvalidImageError(ValidationError):
    """Raised when an upload is not one of the whitelisted image formats."""

    status_code = 415

    def __init__(
        self,
        message: str = "Only images (jpeg, jpg, png, gif, webp) are allowed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ImageTooLargeError(ValidationError):
    """Raised when an upload exceeds the configured size limit."""

    status_code = 413

    def __init__(
        self,
        message: str = "Image file too large",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ForbiddenImageError(ValidationError):
    """Raised when deleting a placeholder or a file outside the image directory."""

    status_code = 403

    def __init__(
        self,
        message: str = "Cannot delete placeholder images or files outside the image directory",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Lookup errors
# ---------------------------------------------------------------------------

class NotFoundError(ArtistCatalogError):
    """Raised when a record or image does not exist."""

    status_code = 404

    def __init__(
        self,
        message: str = "Resource not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class RecordNotFoundError(NotFoundError):
    """Raised when no artist record has the requested id."""

    def __init__(
        self,
        message: str = "Artist not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ImageNotFoundError(NotFoundError):
    """Raised when an image reference points at a missing file."""

    def __init__(
        self,
        message: str = "Image file not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Infrastructure errors
# ---------------------------------------------------------------------------

class TransportError(ArtistCatalogError):
    """Raised when the backing store cannot be read or written.

    Callers must leave their local state untouched when they see this.
    """

    status_code = 503

    def __init__(
        self,
        message: str = "Storage is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(ArtistCatalogError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
