"""
File Storage Services

Domain service for the shared-file lifecycle.
"""

import logging
from datetime import datetime, timedelta
from typing import BinaryIO, List, Optional

from ..errors import FileGoneError, FileNotFoundError
from .access_policy import AccessPolicy
from .entities import DEFAULT_TTL_SECONDS, FileRecord, utcnow
from .repositories import DownloadTicket, FileRegistry
from .storage_repository import IFileStorageRepository

logger = logging.getLogger(__name__)


class FileManager:
    """
    Domain service for managing shared files.

    Treats a registry entry and its blob as one logical unit: a blob is
    persisted before its record becomes visible, and whoever removes a
    record from the registry is responsible for removing its blob.
    Blob removal is best effort; the registry decision is what counts.
    """

    def __init__(
        self,
        registry: FileRegistry,
        storage_repository: IFileStorageRepository,
        access_policy: Optional[AccessPolicy] = None,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
    ):
        """
        Initialize FileManager.

        Args:
            registry: Registry of live records
            storage_repository: Blob storage
            access_policy: Policy evaluator (default: AccessPolicy())
            ttl_seconds: Maximum record age before reaping
        """
        self.registry = registry
        self.storage = storage_repository
        self.access_policy = access_policy or AccessPolicy()
        self.ttl_seconds = ttl_seconds

    def register_file(
        self,
        content: BinaryIO,
        original_name: str,
        mime_type: str,
        password: Optional[str] = None,
        max_downloads: Optional[int] = None,
        notify_address: Optional[str] = None,
        max_bytes: Optional[int] = None,
    ) -> FileRecord:
        """
        Persist an upload and register it under a fresh code.

        The record is created only after the blob is fully written, so a
        failed or interrupted upload never becomes visible.

        Returns:
            The registered FileRecord, carrying its code

        Raises:
            PayloadTooLargeError: If content exceeds max_bytes
            IOError: If the blob could not be written
        """
        blob_name = self.storage.generate_blob_name(original_name)
        size = self.storage.save(blob_name, content, max_bytes=max_bytes)

        candidate = FileRecord.create(
            storage_path=blob_name,
            original_name=original_name,
            mime_type=mime_type,
            size_bytes=size,
            password=password,
            max_downloads=max_downloads,
            notify_address=notify_address,
        )

        try:
            code = self.registry.create(candidate)
        except Exception:
            self._delete_blob(blob_name)
            raise

        return candidate.with_code(code)

    def get_file(self, code: str) -> FileRecord:
        """
        Raises:
            FileNotFoundError: If the code is unknown, expired or already reaped
        """
        return self._lookup_live(code)

    def authorize(self, record: FileRecord, password: Optional[str]) -> None:
        """
        Raises:
            InvalidPasswordError: If the record is protected and the
                password does not match
        """
        self.access_policy.check_password(record, password)

    def consume_download(self, code: str, password: Optional[str]) -> DownloadTicket:
        """
        Check access and take one download slot.

        The slot counts as soon as it is taken, whether or not the
        transfer later completes.

        Raises:
            FileNotFoundError: If the code is unknown, expired or already reaped
            InvalidPasswordError: If the password does not match
            FileGoneError: If the quota is exhausted, including when a
                concurrent download took the last slot first
        """
        record = self._lookup_live(code)

        try:
            self.access_policy.enforce(record, password)
        except FileGoneError:
            # Only records inserted already at quota reach this branch
            if self.registry.delete(record.code):
                self._delete_blob(record.storage_path)
            raise

        try:
            ticket = self.registry.record_download(record.code)
        except FileNotFoundError as e:
            if record.max_downloads is not None:
                raise FileGoneError(
                    f"Download quota exhausted for {record.code}", e
                ) from e
            raise

        if ticket.should_delete:
            logger.info(
                f"File {record.code} reached its download quota "
                f"({ticket.record.download_count}/{record.max_downloads})"
            )
        return ticket

    def open_blob(self, record: FileRecord) -> BinaryIO:
        """
        Raises:
            FileNotFoundError: If the blob is missing from storage
        """
        stream = self.storage.open(record.storage_path)
        if stream is None:
            logger.error(f"Blob missing for file {record.code}")
            raise FileNotFoundError(f"Blob missing for {record.code}")
        return stream

    def release_blob(self, record: FileRecord) -> bool:
        """Remove the blob of a record that has already left the registry."""
        return self._delete_blob(record.storage_path)

    def delete_file(self, record: FileRecord) -> bool:
        """
        Delete a record and its blob. Idempotent.

        Returns:
            True if this call removed the registry entry
        """
        removed = self.registry.delete(record.code)
        if removed:
            self._delete_blob(record.storage_path)
        return removed

    def cleanup_expired_files(self, now: Optional[datetime] = None) -> List[FileRecord]:
        """
        Remove every record older than the TTL, with its blob.

        Failures are isolated per record.

        Returns:
            Records removed by this sweep
        """
        now = now or utcnow()
        removed = []

        for record in self.registry.snapshot():
            if not record.is_expired(self.ttl_seconds, now):
                continue
            try:
                if self.delete_file(record):
                    removed.append(record)
            except Exception as e:
                logger.error(f"Error cleaning up file {record.code}: {e}", exc_info=True)

        return removed

    def cleanup_orphaned_blobs(self, now: Optional[datetime] = None) -> int:
        """
        Remove blobs older than the TTL that no live record references.

        These are left behind when an earlier unlink failed.

        Returns:
            Number of blobs removed
        """
        now = now or utcnow()
        referenced = {record.storage_path for record in self.registry.snapshot()}
        cutoff = now - timedelta(seconds=self.ttl_seconds)
        count = 0

        for name, modified_at in self.storage.list_blobs().items():
            if name in referenced or modified_at > cutoff:
                continue
            if self._delete_blob(name):
                logger.info(f"Removed orphaned blob: {name}")
                count += 1

        return count

    def _lookup_live(self, code: str) -> FileRecord:
        record = self.registry.lookup(code)
        # Past its TTL but not yet swept
        if record.is_expired(self.ttl_seconds):
            raise FileNotFoundError(f"File {record.code} has expired")
        return record

    def _delete_blob(self, blob_name: str) -> bool:
        try:
            return self.storage.delete(blob_name)
        except Exception as e:
            logger.error(f"Error deleting blob {blob_name}: {e}")
            return False
