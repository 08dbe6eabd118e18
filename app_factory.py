"""
Application Factory

Creates and configures Flask application with all dependencies.
This factory pattern improves testability by allowing dependency injection
and configuration overrides.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS

from codedrop.api.v1.namespaces import get_health_status
from codedrop.application.dependency_container import DependencyContainer
from codedrop.application.event_publisher import EventPublisher
from codedrop.application.notifier import LoggingNotifier, Notifier
from codedrop.application.share_service import ShareService
from codedrop.config.settings import AppConfig
from codedrop.domain.events import DomainEvent, FileDownloadedEvent
from codedrop.domain.file_storage import FileManager, FileRegistry, IFileStorageRepository
from codedrop.infrastructure.event_handlers import (
    LoggingEventHandler,
    NotificationEventHandler,
)
from codedrop.infrastructure.in_memory_file_registry import InMemoryFileRegistry
from codedrop.infrastructure.local_file_storage_repository import (
    LocalFileStorageRepository,
)
from codedrop.tasks.cleanup_task import Reaper

logger = logging.getLogger(__name__)

# Slack for multipart boundaries and form fields on top of the file itself
MULTIPART_OVERHEAD_BYTES = 64 * 1024


def create_app(config: Optional[AppConfig] = None) -> Flask:
    """
    Create and configure Flask application.

    Args:
        config: Application configuration, uses default if None

    Returns:
        Configured Flask application
    """
    if config is None:
        config = AppConfig()

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config.max_upload_bytes + MULTIPART_OVERHEAD_BYTES
    app.config["RESTX_MASK_SWAGGER"] = False
    app.codedrop_config = config

    CORS(
        app,
        resources={
            r"/*": {
                "origins": config.cors_origins,
                "methods": ["GET", "POST", "OPTIONS"],
                "allow_headers": ["Content-Type"],
                "expose_headers": ["Content-Disposition"],
                "max_age": 3600,
            }
        },
    )

    _initialize_services(app, config)
    _initialize_reaper(app, config)
    _register_blueprints(app)
    _register_health_endpoint(app)

    return app


def _initialize_services(app: Flask, config: AppConfig) -> None:
    """
    Initialize application services and attach them to the app.

    1. Create DependencyContainer instance
    2. Register infrastructure adapters (registry, blob storage)
    3. Register domain and application services
    4. Subscribe event handlers
    5. Attach container and commonly-used services to the app

    Args:
        app: Flask application
        config: Application configuration
    """
    try:
        container = DependencyContainer()

        registry = InMemoryFileRegistry()
        storage_repository = LocalFileStorageRepository(config.upload_dir)
        container.register_singleton(FileRegistry, registry)
        container.register_singleton(IFileStorageRepository, storage_repository)

        file_manager = FileManager(
            registry, storage_repository, ttl_seconds=config.ttl_seconds
        )
        container.register_singleton(FileManager, file_manager)

        # Notifications never run on the request thread
        event_publisher = EventPublisher(
            executor=ThreadPoolExecutor(
                max_workers=config.notifier_workers,
                thread_name_prefix="codedrop-events",
            )
        )
        notifier = LoggingNotifier()
        container.register_singleton(EventPublisher, event_publisher)
        container.register_singleton(Notifier, notifier)

        logging_handler = LoggingEventHandler(logging.getLogger("codedrop.events"))
        notification_handler = NotificationEventHandler(notifier)
        event_publisher.subscribe(DomainEvent, logging_handler.handle)
        event_publisher.subscribe(FileDownloadedEvent, notification_handler.handle)

        share_service = ShareService(
            file_manager,
            event_publisher=event_publisher,
            max_upload_bytes=config.max_upload_bytes,
        )
        container.register_singleton(ShareService, share_service)

        app.container = container
        app.file_manager = file_manager
        app.event_publisher = event_publisher

        logger.info(f"Services initialized (upload_dir={config.upload_dir})")

    except Exception as e:
        logger.error(f"Could not initialize services: {e}", exc_info=True)
        app.container = None
        app.file_manager = None
        app.event_publisher = None


def _initialize_reaper(app: Flask, config: AppConfig) -> None:
    """
    Create the cleanup task and start it unless disabled.

    Args:
        app: Flask application
        config: Application configuration
    """
    app.reaper = None
    if app.container is None:
        return

    reaper = Reaper(
        app.container.resolve(FileManager),
        interval_seconds=config.sweep_interval_seconds,
        on_expired=app.container.resolve(ShareService).publish_expired,
    )
    app.container.register_singleton(Reaper, reaper)

    if config.reaper_enabled:
        reaper.start()
        app.reaper = reaper
    else:
        logger.info("Reaper disabled by configuration")


def _register_blueprints(app: Flask) -> None:
    """
    Register API blueprints.

    Args:
        app: Flask application
    """
    from codedrop.api.v1 import api_bp

    app.register_blueprint(api_bp)
    logger.debug("API registered at /api with Swagger UI at /api/docs")


def _register_health_endpoint(app: Flask) -> None:
    """
    Register health check endpoint.

    Args:
        app: Flask application
    """

    @app.route("/health", methods=["GET"])
    def health():
        """
        Health check endpoint.
        Returns overall health status of the registry and the cleanup task.
        """
        health_status, status_code = get_health_status(app)
        return jsonify(health_status), status_code
