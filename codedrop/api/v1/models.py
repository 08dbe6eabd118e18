"""
API Models for request/response validation and Swagger documentation
"""

from flask_restx import fields
from werkzeug.datastructures import FileStorage

from . import api

# =============================================================================
# Request Parsers
# =============================================================================

upload_parser = api.parser()
upload_parser.add_argument(
    "file", location="files", type=FileStorage, required=True, help="File to share"
)
upload_parser.add_argument(
    "password", location="form", type=str, required=False,
    help="Optional password required to download",
)
upload_parser.add_argument(
    "oneTime", location="form", type=str, required=False,
    help='"true" destroys the file after its first download',
)
upload_parser.add_argument(
    "maxDownloads", location="form", type=int, required=False,
    help="Optional download quota (ignored when oneTime is set)",
)
upload_parser.add_argument(
    "email", location="form", type=str, required=False,
    help="Optional address notified when the file is downloaded",
)

download_parser = api.parser()
download_parser.add_argument(
    "pwd", location="args", type=str, required=False, help="Password for protected files"
)

# =============================================================================
# Response Models
# =============================================================================

upload_response = api.model(
    "UploadResponse",
    {
        "code": fields.String(description="Share code", example="7KQ2MZ"),
        "expiresAt": fields.Integer(description="Expiry time in epoch milliseconds"),
    },
)

info_response = api.model(
    "FileInfoResponse",
    {
        "code": fields.String(description="Share code"),
        "filename": fields.String(description="Original filename"),
        "size": fields.Integer(description="File size in bytes"),
        "type": fields.String(description="MIME type"),
        "uploadTime": fields.Integer(description="Upload time in epoch milliseconds"),
        "isProtected": fields.Boolean(description="Whether a password is required"),
    },
)

error_response = api.model(
    "ErrorResponse",
    {
        "error": fields.String(description="Error category"),
        "title": fields.String(description="Short error title"),
        "message": fields.String(description="User-facing explanation"),
        "action": fields.String(description="Suggested next step"),
    },
)

health_response = api.model(
    "HealthResponse",
    {
        "status": fields.String(description="Overall health status", enum=["ok", "degraded"]),
        "message": fields.String(description="Health message"),
        "live_files": fields.Integer(description="Number of live shared files"),
        "reaper": fields.String(description="Cleanup task status"),
    },
)
