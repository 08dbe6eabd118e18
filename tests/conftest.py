"""
Shared pytest fixtures and configuration for the CodeDrop test suite.

This module provides:
- Hypothesis configuration for property-based testing
- Shared fixtures for the registry, storage and services
- A Flask app and test client backed by a temporary upload directory
"""

import io
from unittest.mock import Mock

import pytest
from hypothesis import HealthCheck, Phase, settings

from app_factory import create_app
from codedrop.application.share_service import ShareService
from codedrop.config.settings import AppConfig
from codedrop.domain.file_storage import access_policy
from codedrop.domain.file_storage.services import FileManager
from codedrop.infrastructure.in_memory_file_registry import InMemoryFileRegistry
from codedrop.infrastructure.local_file_storage_repository import (
    LocalFileStorageRepository,
)
from tests.fixtures.mock_storage import MockStorageRepository

# Register Hypothesis profiles
settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.target, Phase.shrink],
)
settings.register_profile(
    "ci",
    max_examples=200,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile(
    "dev",
    max_examples=10,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile("default")


TTL_SECONDS = 3600


@pytest.fixture(autouse=True, scope="session")
def fast_password_hashing():
    """Use a cheap werkzeug hash method so password-heavy tests stay fast."""
    with pytest.MonkeyPatch.context() as mp:
        mp.setattr(access_policy, "PASSWORD_HASH_METHOD", "pbkdf2:sha256:1000")
        yield


# =============================================================================
# Domain Fixtures
# =============================================================================

@pytest.fixture
def registry() -> InMemoryFileRegistry:
    return InMemoryFileRegistry()


@pytest.fixture
def mock_storage() -> MockStorageRepository:
    return MockStorageRepository()


@pytest.fixture
def local_storage(tmp_path) -> LocalFileStorageRepository:
    return LocalFileStorageRepository(str(tmp_path / "uploads"))


@pytest.fixture
def file_manager(registry, mock_storage) -> FileManager:
    return FileManager(registry, mock_storage, ttl_seconds=TTL_SECONDS)


@pytest.fixture
def mock_event_publisher():
    """Provide a mock event publisher recording published events."""
    return Mock()


@pytest.fixture
def share_service(file_manager, mock_event_publisher) -> ShareService:
    return ShareService(file_manager, event_publisher=mock_event_publisher, max_upload_bytes=1024)


@pytest.fixture
def hello_bytes() -> bytes:
    return b"hello worl"


@pytest.fixture
def hello_stream(hello_bytes) -> io.BytesIO:
    return io.BytesIO(hello_bytes)


# =============================================================================
# Flask Fixtures
# =============================================================================

@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    return AppConfig(
        upload_dir=str(tmp_path / "uploads"),
        reaper_enabled=False,
        max_upload_bytes=1024,
        ttl_seconds=TTL_SECONDS,
    )


@pytest.fixture
def flask_app(app_config):
    app = create_app(app_config)
    app.config["TESTING"] = True
    yield app
    if app.container is not None:
        app.container.clear_overrides()
    if app.event_publisher is not None:
        app.event_publisher.shutdown(wait=True)


@pytest.fixture
def client(flask_app):
    return flask_app.test_client()


# =============================================================================
# Pytest Configuration Hooks
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests (full workflows)"
    )
    config.addinivalue_line(
        "markers", "property: Property-based tests using Hypothesis"
    )


def pytest_collection_modifyitems(config, items):
    """
    Automatically mark tests based on their location.

    - tests/unit/* -> @pytest.mark.unit
    - tests/e2e/* -> @pytest.mark.e2e
    - tests/property/* -> @pytest.mark.property
    """
    for item in items:
        test_path = str(item.fspath)

        if "/unit/" in test_path or "\\unit\\" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/e2e/" in test_path or "\\e2e\\" in test_path:
            item.add_marker(pytest.mark.e2e)
        elif "/property/" in test_path or "\\property\\" in test_path:
            item.add_marker(pytest.mark.property)
