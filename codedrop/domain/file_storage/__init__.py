"""
File Storage Domain

Handles shared file records, code-based access, quotas and expiry.
"""

from .access_policy import AccessDecision, AccessPolicy
from .entities import FileRecord
from .repositories import DownloadTicket, FileRegistry
from .services import FileManager
from .storage_repository import IFileStorageRepository
from .value_objects import CODE_ALPHABET, InvalidShareCodeError, ShareCode

__all__ = [
    "AccessDecision",
    "AccessPolicy",
    "CODE_ALPHABET",
    "DownloadTicket",
    "FileManager",
    "FileRecord",
    "FileRegistry",
    "IFileStorageRepository",
    "InvalidShareCodeError",
    "ShareCode",
]
