"""Infrastructure layer: in-memory registry, local blob storage, event handlers."""

from .in_memory_file_registry import InMemoryFileRegistry
from .local_file_storage_repository import LocalFileStorageRepository

__all__ = [
    "InMemoryFileRegistry",
    "LocalFileStorageRepository",
]
