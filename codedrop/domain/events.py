"""
Domain Events

Immutable records of significant state changes in the domain.
Events decouple side effects (notifications, logging) from core business logic.
"""

from abc import ABC
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class DomainEvent(ABC):
    """
    Base class for all domain events.

    Attributes:
        aggregate_id: Share code of the file that generated the event
        occurred_at: Timestamp when the event occurred
    """
    aggregate_id: str
    occurred_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_type": self.__class__.__name__,
            "aggregate_id": self.aggregate_id,
            "occurred_at": self.occurred_at.isoformat(),
        }


@dataclass(frozen=True)
class FileUploadedEvent(DomainEvent):
    """
    Event emitted when a file is registered under a new code.

    Attributes:
        filename: Original filename
        size_bytes: Stored size
        expires_at: When the file will be reaped
        is_protected: Whether a password gates the file
        max_downloads: Download quota, None for unlimited
        notify_address: Contact string supplied by the uploader
    """
    filename: str
    size_bytes: int
    expires_at: datetime
    is_protected: bool = False
    max_downloads: Optional[int] = None
    notify_address: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            "filename": self.filename,
            "size_bytes": self.size_bytes,
            "expires_at": self.expires_at.isoformat(),
            "is_protected": self.is_protected,
            "max_downloads": self.max_downloads,
        })
        return base_dict


@dataclass(frozen=True)
class FileDownloadedEvent(DomainEvent):
    """
    Event emitted when a download slot is consumed and bytes start streaming.

    Attributes:
        filename: Original filename
        download_count: Counter value after this download
        max_downloads: Download quota, None for unlimited
        notify_address: Contact string supplied by the uploader
    """
    filename: str
    download_count: int
    max_downloads: Optional[int] = None
    notify_address: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            "filename": self.filename,
            "download_count": self.download_count,
            "max_downloads": self.max_downloads,
        })
        return base_dict


@dataclass(frozen=True)
class FileBurnedEvent(DomainEvent):
    """
    Event emitted when a file is destroyed after reaching its quota.

    Attributes:
        filename: Original filename
        notify_address: Contact string supplied by the uploader
    """
    filename: str
    notify_address: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict["filename"] = self.filename
        return base_dict


@dataclass(frozen=True)
class FileExpiredEvent(DomainEvent):
    """
    Event emitted when the reaper removes a file past its TTL.

    Attributes:
        filename: Original filename
        download_count: Downloads served before expiry
    """
    filename: str
    download_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        base_dict = super().to_dict()
        base_dict.update({
            "filename": self.filename,
            "download_count": self.download_count,
        })
        return base_dict
