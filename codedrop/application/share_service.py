"""
Share Service

Application service orchestrating uploads (ingress) and downloads (egress)
on top of the FileManager, and publishing domain events for side effects.
"""

import logging
from typing import Any, BinaryIO, Dict, Optional

from codedrop.application.download_result import DownloadResult
from codedrop.application.event_publisher import EventPublisher
from codedrop.domain.events import (
    FileBurnedEvent,
    FileDownloadedEvent,
    FileExpiredEvent,
    FileUploadedEvent,
)
from codedrop.domain.file_storage.entities import FileRecord, to_epoch_millis, utcnow
from codedrop.domain.file_storage.services import FileManager

logger = logging.getLogger(__name__)


class ShareService:
    """
    Application service for the share workflow.

    Upload: persist blob, register record, return code and expiry.
    Download: resolve code, enforce policy, consume a slot, open the blob,
    and hand back a result whose close hook removes a burned blob.
    """

    def __init__(
        self,
        file_manager: FileManager,
        event_publisher: Optional[EventPublisher] = None,
        max_upload_bytes: Optional[int] = None,
    ):
        self.file_manager = file_manager
        self.event_publisher = event_publisher
        self.max_upload_bytes = max_upload_bytes

    @property
    def ttl_seconds(self) -> int:
        return self.file_manager.ttl_seconds

    def upload(
        self,
        content: BinaryIO,
        filename: str,
        mime_type: str,
        password: Optional[str] = None,
        max_downloads: Optional[int] = None,
        notify_address: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Store an upload and register it.

        Returns:
            {"code": str, "expiresAt": epoch millis}

        Raises:
            PayloadTooLargeError: If the upload exceeds the size ceiling
        """
        record = self.file_manager.register_file(
            content,
            original_name=filename,
            mime_type=mime_type,
            password=password or None,
            max_downloads=max_downloads,
            notify_address=notify_address,
            max_bytes=self.max_upload_bytes,
        )
        expires_at = record.get_expires_at(self.ttl_seconds)

        logger.info(f"File uploaded: {record.code} ({record.original_name})")
        self._publish(FileUploadedEvent(
            aggregate_id=record.code,
            occurred_at=record.created_at,
            filename=record.original_name,
            size_bytes=record.size_bytes,
            expires_at=expires_at,
            is_protected=record.is_protected,
            max_downloads=record.max_downloads,
            notify_address=record.notify_address,
        ))

        return {"code": record.code, "expiresAt": to_epoch_millis(expires_at)}

    def get_file_info(self, code: str) -> Dict[str, Any]:
        """
        Raises:
            FileNotFoundError: If the code is unknown or expired
        """
        return self.file_manager.get_file(code).to_info_dict()

    def download(self, code: str, password: Optional[str] = None) -> DownloadResult:
        """
        Authorize and count a download, then open the blob.

        Raises:
            FileNotFoundError: Unknown or expired code, or missing blob
            InvalidPasswordError: Wrong password (nothing is consumed)
            FileGoneError: Quota exhausted
        """
        ticket = self.file_manager.consume_download(code, password)
        record = ticket.record

        try:
            stream = self.file_manager.open_blob(record)
        except Exception:
            if ticket.should_delete:
                self.file_manager.release_blob(record)
            raise

        self._publish(FileDownloadedEvent(
            aggregate_id=record.code,
            occurred_at=utcnow(),
            filename=record.original_name,
            download_count=record.download_count,
            max_downloads=record.max_downloads,
            notify_address=record.notify_address,
        ))

        on_close = None
        if ticket.should_delete:
            self._publish(FileBurnedEvent(
                aggregate_id=record.code,
                occurred_at=utcnow(),
                filename=record.original_name,
                notify_address=record.notify_address,
            ))
            on_close = self._burn_callback(record)

        return DownloadResult(
            stream=stream,
            filename=record.original_name,
            mime_type=record.mime_type,
            size_bytes=record.size_bytes,
            burned=ticket.should_delete,
            on_close=on_close,
        )

    def publish_expired(self, record: FileRecord) -> None:
        """Announce a record removed by the reaper."""
        self._publish(FileExpiredEvent(
            aggregate_id=record.code,
            occurred_at=utcnow(),
            filename=record.original_name,
            download_count=record.download_count,
        ))

    def _burn_callback(self, record: FileRecord):
        def burn() -> None:
            if self.file_manager.release_blob(record):
                logger.info(f"Burned file {record.code} after download.")

        return burn

    def _publish(self, event) -> None:
        if self.event_publisher is not None:
            self.event_publisher.publish(event)
