"""Abstract base class for image resource storage.

Images are referenced from records by URL-style refs (``/images/<file>``).
Two shared placeholder refs exist for records without a preview or sample;
they are created on demand and can never be deleted through this
interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from src.models.artist import ImageKind


@dataclass(frozen=True)
class ImageUpload:
    """One uploaded file as received from the client.

    Attributes
    ----------
    data:
        Raw file bytes.
    filename:
        Client-side file name; only the extension matters.
    content_type:
        MIME type reported by the client.
    """

    data: bytes
    filename: str
    content_type: str


class IImageStore(ABC):
    """Contract for storing and releasing uploaded artist images."""

    @abstractmethod
    async def ensure_placeholder(self, kind: ImageKind) -> str:
        """Create the placeholder for *kind* if missing and return its ref."""

    @abstractmethod
    async def save_image(
        self,
        data: bytes,
        filename: str,
        content_type: str,
        owner_name: str,
        kind: ImageKind,
    ) -> str:
        """Validate and store an uploaded image.

        Parameters
        ----------
        data:
            Raw file bytes.
        filename:
            Client-side file name; only its extension is used.
        content_type:
            MIME type reported by the client.
        owner_name:
            Display name of the owning record, used in the stored name.
        kind:
            Preview or sample.

        Returns
        -------
        str
            The ref to store on the record.

        Raises
        ------
        InvalidImageError
            Extension or MIME type not whitelisted.
        ImageTooLargeError
            *data* exceeds the size limit.
        """

    @abstractmethod
    async def delete_image(self, ref: str) -> None:
        """Delete the file behind *ref*.

        Raises
        ------
        ForbiddenImageError
            *ref* is a placeholder or resolves outside the managed directory.
        ImageNotFoundError
            No such file.
        """

    @abstractmethod
    def is_placeholder(self, ref: str) -> bool:
        """Return ``True`` if *ref* names a shared placeholder."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for logs and health output."""
