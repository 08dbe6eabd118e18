"""
File Storage Repositories

Registry interface for share-code to file-record mappings.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from .entities import FileRecord


@dataclass(frozen=True)
class DownloadTicket:
    """
    Result of consuming one download slot.

    Attributes:
        record: The record as it stands after the increment
        should_delete: True for exactly one caller, the one whose download
            reached the quota; that caller owns blob removal
    """
    record: FileRecord
    should_delete: bool


class FileRegistry(ABC):
    """
    Abstract registry of live file records.

    Every mutation of shared state goes through these methods, and each
    of them is atomic with respect to the code it touches.
    """

    @abstractmethod
    def create(self, record: FileRecord) -> str:
        """
        Assign a fresh, currently unused code and insert the record.

        Args:
            record: Candidate record (its code is ignored)

        Returns:
            The assigned share code

        Raises:
            RegistryFullError: If no unused code could be found
        """
        pass  # pragma: no cover

    @abstractmethod
    def lookup(self, code: str) -> FileRecord:
        """
        Retrieve a record by code, case-insensitively.

        Raises:
            FileNotFoundError: If the code is malformed, unknown or reaped
        """
        pass  # pragma: no cover

    @abstractmethod
    def record_download(self, code: str) -> DownloadTicket:
        """
        Increment the download counter and, when the quota is reached,
        remove the record in the same step.

        Raises:
            FileNotFoundError: If the record is no longer live
        """
        pass  # pragma: no cover

    @abstractmethod
    def delete(self, code: str) -> bool:
        """
        Remove a record. Idempotent.

        Returns:
            True if a record was removed, False if it was already absent
        """
        pass  # pragma: no cover

    @abstractmethod
    def snapshot(self) -> List[FileRecord]:
        """Return a point-in-time copy of all live records."""
        pass  # pragma: no cover

    @abstractmethod
    def __len__(self) -> int:
        pass  # pragma: no cover
