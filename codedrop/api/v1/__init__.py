"""
CodeDrop REST API

This module contains the API endpoints with OpenAPI/Swagger documentation.
"""

from flask import Blueprint
from flask_restx import Api

# Create blueprint for the public API
api_bp = Blueprint("api", __name__, url_prefix="/api")

# Initialize Flask-RESTX API with Swagger documentation
api = Api(
    api_bp,
    version="1.0",
    title="CodeDrop API",
    description="Ephemeral file sharing with short codes, passwords and one-time downloads",
    doc="/docs",  # Swagger UI will be available at /api/docs
    license="MIT",
)

# Import namespaces after api is created to avoid circular imports
from .namespaces import file_ns, info_ns, system_ns, upload_ns  # noqa: E402

# Register namespaces
api.add_namespace(upload_ns, path="/upload")
api.add_namespace(info_ns, path="/info")
api.add_namespace(file_ns, path="/file")
api.add_namespace(system_ns, path="/health")
