"""
In-Memory File Registry

Process-local implementation of FileRegistry. Records live only as long
as the process; a restart loses every share.
"""

import logging
import threading
from typing import Callable, Dict, List, Optional

from codedrop.domain.errors import FileNotFoundError, RegistryFullError
from codedrop.domain.file_storage.entities import FileRecord
from codedrop.domain.file_storage.repositories import DownloadTicket, FileRegistry
from codedrop.domain.file_storage.value_objects import (
    InvalidShareCodeError,
    ShareCode,
)

logger = logging.getLogger(__name__)


class InMemoryFileRegistry(FileRegistry):
    """
    Dictionary-backed registry guarded by a single lock.

    Every operation runs entirely inside the lock and never performs I/O,
    so the critical sections are short and cannot suspend.
    """

    def __init__(
        self,
        code_generator: Optional[Callable[[], str]] = None,
        max_attempts: int = 100,
    ):
        """
        Args:
            code_generator: Callable returning candidate codes
                (default: ShareCode.generate)
            max_attempts: Collisions tolerated before giving up on create
        """
        self._records: Dict[str, FileRecord] = {}
        self._lock = threading.Lock()
        self._code_generator = code_generator or (lambda: ShareCode.generate().value)
        self._max_attempts = max_attempts

    def create(self, record: FileRecord) -> str:
        with self._lock:
            for _ in range(self._max_attempts):
                code = ShareCode.normalize(self._code_generator())
                if code in self._records:
                    logger.debug(f"Share code collision on {code}, retrying")
                    continue

                self._records[code] = record.with_code(code)
                return code

        raise RegistryFullError(
            f"No free share code after {self._max_attempts} attempts"
        )

    def lookup(self, code: str) -> FileRecord:
        key = self._key(code)
        with self._lock:
            record = self._records.get(key)

        if record is None:
            raise FileNotFoundError(f"No file registered under {key}")
        return record

    def record_download(self, code: str) -> DownloadTicket:
        key = self._key(code)
        with self._lock:
            record = self._records.get(key)
            if record is None:
                raise FileNotFoundError(f"No file registered under {key}")

            updated = record.with_download_recorded()
            if updated.is_exhausted():
                del self._records[key]
                return DownloadTicket(record=updated, should_delete=True)

            self._records[key] = updated
            return DownloadTicket(record=updated, should_delete=False)

    def delete(self, code: str) -> bool:
        try:
            key = self._key(code)
        except FileNotFoundError:
            return False

        with self._lock:
            return self._records.pop(key, None) is not None

    def snapshot(self) -> List[FileRecord]:
        with self._lock:
            return list(self._records.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, code: object) -> bool:
        if not isinstance(code, str):
            return False
        try:
            key = self._key(code)
        except FileNotFoundError:
            return False
        with self._lock:
            return key in self._records

    @staticmethod
    def _key(code: str) -> str:
        try:
            return ShareCode.normalize(code)
        except InvalidShareCodeError as e:
            raise FileNotFoundError(f"Malformed share code: {code!r}", e) from e
