"""
Local File Storage Repository Implementation

Concrete implementation of IFileStorageRepository for the local filesystem.
Uploads are streamed to a temporary name and renamed into place, so a blob
is only ever visible once it has been written completely.
"""

import logging
import os
import secrets
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO, Dict, Optional

from codedrop.domain.errors import PayloadTooLargeError
from codedrop.domain.file_storage.storage_repository import IFileStorageRepository

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
PARTIAL_SUFFIX = ".part"


class LocalFileStorageRepository(IFileStorageRepository):
    """
    Local filesystem implementation of IFileStorageRepository.

    Attributes:
        base_path: Upload directory holding every blob
    """

    def __init__(self, base_path: str = "/tmp/codedrop/uploads"):
        self.base_path = Path(base_path)
        self._ensure_base_directory()

    def _ensure_base_directory(self) -> None:
        """
        Ensure the upload directory exists.

        Raises:
            PermissionError: If insufficient permissions to create directory
            OSError: If directory creation fails for other reasons
        """
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
        except PermissionError as e:
            raise PermissionError(
                f"Insufficient permissions to create storage directory: {self.base_path}"
            ) from e
        except OSError as e:
            raise OSError(
                f"Failed to create storage directory: {self.base_path}"
            ) from e

    def _resolve(self, file_path: str) -> Optional[Path]:
        """Map a blob name to a path inside base_path, rejecting traversal."""
        if not file_path or not file_path.strip():
            return None

        full_path = (self.base_path / file_path).resolve()
        if full_path.parent != self.base_path.resolve():
            return None
        return full_path

    # IFileStorageRepository interface methods

    def generate_blob_name(self, original_name: str) -> str:
        extension = Path(original_name or "").suffix.lower()
        # Keep only plain extensions; anything odd is dropped
        if not extension[1:].isalnum() or len(extension) > 16:
            extension = ""
        return f"{int(time.time() * 1000)}-{secrets.token_hex(8)}{extension}"

    def save(
        self, file_path: str, content: BinaryIO, max_bytes: Optional[int] = None
    ) -> int:
        full_path = self._resolve(file_path)
        if full_path is None:
            raise ValueError(f"Invalid blob name: {file_path!r}")

        partial_path = full_path.with_name(full_path.name + PARTIAL_SUFFIX)
        written = 0
        try:
            with open(partial_path, "wb") as f:
                while True:
                    chunk = content.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if max_bytes is not None and written > max_bytes:
                        raise PayloadTooLargeError(max_bytes)
                    f.write(chunk)

            os.replace(partial_path, full_path)
            return written

        except PayloadTooLargeError:
            self._discard(partial_path)
            raise
        except (IOError, OSError) as e:
            self._discard(partial_path)
            raise IOError(f"Failed to save blob {file_path}: {e}") from e
        except BaseException:
            # Client disconnects surface as arbitrary exceptions mid-read
            self._discard(partial_path)
            raise

    def open(self, file_path: str) -> Optional[BinaryIO]:
        full_path = self._resolve(file_path)
        if full_path is None:
            return None

        try:
            return open(full_path, "rb")
        except (FileNotFoundError, IsADirectoryError):
            return None

    def delete(self, file_path: str) -> bool:
        full_path = self._resolve(file_path)
        if full_path is None:
            return True

        try:
            full_path.unlink()
        except FileNotFoundError:
            return True
        except (IOError, OSError) as e:
            raise IOError(f"Failed to delete blob {file_path}: {e}") from e
        return True

    def exists(self, file_path: str) -> bool:
        try:
            full_path = self._resolve(file_path)
            return full_path is not None and full_path.is_file()
        except (OSError, ValueError):
            return False

    def get_size(self, file_path: str) -> Optional[int]:
        try:
            full_path = self._resolve(file_path)
            if full_path is None or not full_path.is_file():
                return None
            return full_path.stat().st_size
        except (OSError, ValueError):
            return None

    def list_blobs(self) -> Dict[str, datetime]:
        blobs = {}
        for item in self.base_path.iterdir():
            try:
                if item.is_file():
                    blobs[item.name] = datetime.fromtimestamp(
                        item.stat().st_mtime, tz=timezone.utc
                    )
            except OSError as e:
                logger.warning(f"Could not stat {item.name}: {e}")
        return blobs

    @staticmethod
    def _discard(path: Path) -> None:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Failed to remove partial upload {path.name}: {e}")
