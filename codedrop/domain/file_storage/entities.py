"""
File Storage Entities

Domain entities for shared file management.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Optional

from .access_policy import hash_password

DEFAULT_TTL_SECONDS = 3600


def utcnow() -> datetime:
    """Timezone-aware current time, the single clock for file lifecycles."""
    return datetime.now(timezone.utc)


def to_epoch_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


@dataclass(frozen=True)
class FileRecord:
    """
    Entity representing one shared file.

    Records are immutable: the registry replaces them wholesale when the
    download counter moves, so any record handed out is a stable view.
    A record without a code is a candidate that has not been registered yet.
    """
    storage_path: str
    original_name: str
    mime_type: str
    size_bytes: int
    created_at: datetime
    code: str = ""
    password_hash: Optional[str] = None
    max_downloads: Optional[int] = None
    download_count: int = 0
    notify_address: Optional[str] = None

    def __post_init__(self):
        if self.max_downloads is not None and self.max_downloads < 1:
            raise ValueError("max_downloads must be a positive integer or None")
        if self.download_count < 0:
            raise ValueError("download_count cannot be negative")
        if self.size_bytes < 0:
            raise ValueError("size_bytes cannot be negative")

    @classmethod
    def create(
        cls,
        storage_path: str,
        original_name: str,
        mime_type: str,
        size_bytes: int,
        password: Optional[str] = None,
        max_downloads: Optional[int] = None,
        notify_address: Optional[str] = None,
    ) -> "FileRecord":
        """
        Factory method to create a candidate record for a persisted blob.

        Args:
            storage_path: Blob name relative to the upload directory
            original_name: Filename supplied by the uploader
            mime_type: Content type supplied by the uploader
            size_bytes: Number of bytes written
            password: Optional plaintext password, stored only as a digest
            max_downloads: Optional download quota (None = unlimited)
            notify_address: Optional contact string for notifications

        Returns:
            New FileRecord without a code
        """
        return cls(
            storage_path=storage_path,
            original_name=original_name,
            mime_type=mime_type or "application/octet-stream",
            size_bytes=size_bytes,
            created_at=utcnow(),
            password_hash=hash_password(password) if password else None,
            max_downloads=max_downloads,
            notify_address=notify_address or None,
        )

    @property
    def is_protected(self) -> bool:
        return self.password_hash is not None

    def with_code(self, code: str) -> "FileRecord":
        return replace(self, code=code)

    def with_download_recorded(self) -> "FileRecord":
        return replace(self, download_count=self.download_count + 1)

    def is_exhausted(self) -> bool:
        """True once the download quota has been reached."""
        return (
            self.max_downloads is not None
            and self.download_count >= self.max_downloads
        )

    def get_age(self, now: Optional[datetime] = None) -> timedelta:
        return (now or utcnow()) - self.created_at

    def is_expired(
        self, ttl_seconds: int = DEFAULT_TTL_SECONDS, now: Optional[datetime] = None
    ) -> bool:
        """
        Check if the record has outlived its TTL.

        Expiry is strict: a record exactly ttl_seconds old is still live.
        """
        return self.get_age(now) > timedelta(seconds=ttl_seconds)

    def get_expires_at(self, ttl_seconds: int = DEFAULT_TTL_SECONDS) -> datetime:
        return self.created_at + timedelta(seconds=ttl_seconds)

    def to_info_dict(self) -> dict:
        """Public metadata for the info endpoint."""
        return {
            "code": self.code,
            "filename": self.original_name,
            "size": self.size_bytes,
            "type": self.mime_type,
            "uploadTime": to_epoch_millis(self.created_at),
            "isProtected": self.is_protected,
        }
