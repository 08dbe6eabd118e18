"""
Cleanup Task

Periodic in-process sweep removing expired files and orphaned blobs.
Thin wrapper that delegates to the FileManager.
"""

import logging
import threading
from typing import Any, Callable, Dict, Optional

from codedrop.domain.file_storage.entities import FileRecord
from codedrop.domain.file_storage.services import FileManager

# Configure logging
logger = logging.getLogger(__name__)


class Reaper:
    """
    Background thread that sweeps the registry on a fixed period.

    The reaper only talks to the FileManager's public operations, which in
    turn only use the registry's snapshot and delete. It never holds the
    registry lock across I/O and is never blocked by uploads or downloads.
    """

    def __init__(
        self,
        file_manager: FileManager,
        interval_seconds: float = 60,
        on_expired: Optional[Callable[[FileRecord], None]] = None,
    ):
        """
        Args:
            file_manager: Lifecycle service to sweep
            interval_seconds: Period between sweeps
            on_expired: Optional callback for each reaped record
        """
        self.file_manager = file_manager
        self.interval_seconds = interval_seconds
        self.on_expired = on_expired
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the sweep thread. Calling start on a running reaper is a no-op."""
        if self.is_running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="codedrop-reaper", daemon=True
        )
        self._thread.start()
        logger.info(f"Reaper started (interval={self.interval_seconds}s)")

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("Reaper stopped")

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval_seconds):
            self.run_once()

    def run_once(self) -> Dict[str, Any]:
        """
        Perform one sweep.

        1. Remove records older than the TTL, with their blobs
        2. Remove orphaned blobs no record references

        Returns:
            dict: Cleanup statistics with counts and errors
        """
        logger.debug("Starting cleanup sweep")

        cleanup_stats = {
            "expired_files_removed": 0,
            "orphaned_files_cleaned": 0,
            "errors": [],
        }

        try:
            expired = self.file_manager.cleanup_expired_files()
            cleanup_stats["expired_files_removed"] = len(expired)
            for record in expired:
                self._notify_expired(record)
        except Exception as e:
            error_msg = f"Error cleaning up expired files: {e}"
            cleanup_stats["errors"].append(error_msg)
            logger.error(error_msg, exc_info=True)

        try:
            cleanup_stats["orphaned_files_cleaned"] = (
                self.file_manager.cleanup_orphaned_blobs()
            )
        except Exception as e:
            error_msg = f"Error cleaning up orphaned files: {e}"
            cleanup_stats["errors"].append(error_msg)
            logger.error(error_msg, exc_info=True)

        if cleanup_stats["expired_files_removed"] or cleanup_stats["orphaned_files_cleaned"]:
            logger.info(
                f"Cleaned up {cleanup_stats['expired_files_removed']} expired files, "
                f"{cleanup_stats['orphaned_files_cleaned']} orphaned blobs"
            )

        if cleanup_stats["errors"]:
            logger.warning(f"Cleanup errors: {cleanup_stats['errors']}")

        return cleanup_stats

    def _notify_expired(self, record: FileRecord) -> None:
        if self.on_expired is None:
            return
        try:
            self.on_expired(record)
        except Exception as e:
            logger.error(f"Expiry callback failed for {record.code}: {e}", exc_info=True)
