"""Abstract contract for public blob storage."""

from abc import ABC, abstractmethod


class BlobStoreRepository(ABC):
    """Contract for storing image files under a public URL.

    Implementations could be S3, GCS, Azure Blob, etc.
    The upload service depends on this interface, not the implementation.
    """

    @abstractmethod
    def ensure_container(self) -> None:
        """Create the destination container if it does not exist.

        Must be idempotent and leave individual objects publicly readable.

        Raises:
            StorageError: If the container cannot be created or configured
        """

    @abstractmethod
    def put(
        self,
        *,
        key: str,
        data: bytes,
        content_type: str,
        cache_control: str,
        metadata: dict[str, str],
    ) -> str:
        """Store bytes under ``key`` and return the object's public URL.

        Raises:
            StorageError: If the write fails
        """

    @abstractmethod
    def public_url(self, key: str) -> str:
        """Return the stable public URL for ``key``."""
