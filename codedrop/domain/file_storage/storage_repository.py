"""
File Storage Repository Interface

Abstract interface for physical blob storage operations.
The domain layer depends on this contract, never on a concrete
filesystem or cloud implementation.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import BinaryIO, Dict, Optional


class IFileStorageRepository(ABC):
    """
    Unified interface for blob storage operations.

    Contract Guarantees:
    - Blob names are relative to the storage root
    - save() never leaves a partially written blob under its final name
    - open() returns None for missing blobs (no exceptions)
    - delete() succeeds even if the blob doesn't exist (idempotent)
    - exists() never raises for invalid names
    """

    @abstractmethod
    def generate_blob_name(self, original_name: str) -> str:
        """
        Produce a collision-resistant blob name.

        The name keeps the original extension and carries nothing derived
        from the share code.
        """
        pass  # pragma: no cover

    @abstractmethod
    def save(
        self, file_path: str, content: BinaryIO, max_bytes: Optional[int] = None
    ) -> int:
        """
        Stream content into storage.

        Args:
            file_path: Blob name (e.g., '1700000000000-3f9a1c.txt')
            content: Binary file-like object positioned at the start
            max_bytes: Optional size ceiling

        Returns:
            Number of bytes written

        Raises:
            PayloadTooLargeError: If the stream exceeds max_bytes; nothing
                is left behind
            ValueError: If file_path is empty
            IOError: If the write fails; nothing is left behind
        """
        pass  # pragma: no cover

    @abstractmethod
    def open(self, file_path: str) -> Optional[BinaryIO]:
        """
        Open a blob for streaming. The caller must close the stream.

        Returns:
            Readable binary stream, or None if the blob doesn't exist
        """
        pass  # pragma: no cover

    @abstractmethod
    def delete(self, file_path: str) -> bool:
        """
        Delete a blob. Idempotent.

        Returns:
            True if the blob was deleted or didn't exist

        Raises:
            IOError: If the blob exists but could not be removed
        """
        pass  # pragma: no cover

    @abstractmethod
    def exists(self, file_path: str) -> bool:
        pass  # pragma: no cover

    @abstractmethod
    def get_size(self, file_path: str) -> Optional[int]:
        pass  # pragma: no cover

    @abstractmethod
    def list_blobs(self) -> Dict[str, datetime]:
        """
        List stored blobs with their last-modified time (UTC).

        Used to find orphans that no record references.
        """
        pass  # pragma: no cover
