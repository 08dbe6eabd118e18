"""Builders for file records used across test modules."""

from datetime import timedelta

from codedrop.domain.file_storage.entities import FileRecord, utcnow


def make_record(
    storage_path: str = "blob-1.txt",
    original_name: str = "hello.txt",
    size_bytes: int = 10,
    age_seconds: float = 0,
    **kwargs,
) -> FileRecord:
    """Build a candidate record, optionally backdated."""
    return FileRecord(
        storage_path=storage_path,
        original_name=original_name,
        mime_type=kwargs.pop("mime_type", "text/plain"),
        size_bytes=size_bytes,
        created_at=utcnow() - timedelta(seconds=age_seconds),
        **kwargs,
    )
