"""Shared test doubles and builders."""

from .mock_storage import MockStorageRepository
from .records import make_record

__all__ = ["MockStorageRepository", "make_record"]
