"""
API Namespaces - Organized endpoint groups
"""

from typing import Optional

from flask import Flask, current_app, request, send_file
from flask_restx import Namespace, Resource
from werkzeug.exceptions import RequestEntityTooLarge

from codedrop.application.share_service import ShareService
from codedrop.domain.errors import (
    ErrorCategory,
    FileGoneError,
    FileNotFoundError as DomainFileNotFoundError,
    InvalidPasswordError,
    PayloadTooLargeError,
    create_error_response,
)
from codedrop.domain.file_storage.services import FileManager

from .models import (
    download_parser,
    error_response,
    health_response,
    info_response,
    upload_parser,
    upload_response,
)

# =============================================================================
# Upload Namespace - File ingress
# =============================================================================

upload_ns = Namespace("upload", description="File upload operations")


@upload_ns.route("")
class Upload(Resource):
    """Share a new file"""

    @upload_ns.doc("upload_file")
    @upload_ns.expect(upload_parser)
    @upload_ns.response(200, "Success", upload_response)
    @upload_ns.response(400, "Bad Request", error_response)
    @upload_ns.response(413, "Payload Too Large", error_response)
    def post(self):
        """
        Upload a file and receive a share code

        The file stays available until it expires or, with oneTime=true,
        until its first download.
        """
        share_service = _get_share_service()
        if share_service is None:
            return _service_unavailable()

        try:
            file = request.files.get("file")
        except RequestEntityTooLarge:
            return create_error_response(
                ErrorCategory.FILE_TOO_LARGE,
                "Request body exceeds MAX_CONTENT_LENGTH",
                status_code=413,
            )

        if file is None or not file.filename:
            return create_error_response(
                ErrorCategory.INVALID_REQUEST,
                "No file uploaded",
                status_code=400,
            )

        try:
            max_downloads = _parse_max_downloads(request.form)
        except ValueError as e:
            return create_error_response(
                ErrorCategory.INVALID_REQUEST,
                str(e),
                status_code=400,
            )

        try:
            result = share_service.upload(
                file.stream,
                filename=file.filename,
                mime_type=file.mimetype or "application/octet-stream",
                password=request.form.get("password") or None,
                max_downloads=max_downloads,
                notify_address=request.form.get("email") or None,
            )
            return result, 200

        except PayloadTooLargeError as e:
            current_app.logger.warning(f"[UPLOAD] Rejected oversized upload: {e}")
            return create_error_response(
                ErrorCategory.FILE_TOO_LARGE,
                str(e),
                status_code=413,
            )
        except Exception as e:
            current_app.logger.exception(f"[UPLOAD] Unexpected error: {e}")
            return create_error_response(
                ErrorCategory.SYSTEM_ERROR,
                f"Unexpected error: {e}",
                status_code=500,
            )


# =============================================================================
# Info Namespace - Public metadata
# =============================================================================

info_ns = Namespace("info", description="Shared file metadata")


@info_ns.route("/<string:code>")
@info_ns.param("code", "The share code (case-insensitive)")
class FileInfo(Resource):
    """Shared file metadata"""

    @info_ns.doc("get_file_info")
    @info_ns.response(200, "Success", info_response)
    @info_ns.response(404, "File Not Found", error_response)
    def get(self, code):
        """
        Get metadata for a share code

        Does not consume a download.
        """
        share_service = _get_share_service()
        if share_service is None:
            return _service_unavailable()

        try:
            return share_service.get_file_info(code), 200

        except DomainFileNotFoundError:
            return create_error_response(
                ErrorCategory.FILE_NOT_FOUND,
                f"No file for code {code}",
                status_code=404,
            )
        except Exception as e:
            current_app.logger.exception(f"[INFO] Error reading {code}: {e}")
            return create_error_response(
                ErrorCategory.SYSTEM_ERROR,
                f"Internal server error: {e}",
                status_code=500,
            )


# =============================================================================
# File Namespace - File egress
# =============================================================================

file_ns = Namespace("file", description="File download operations")


@file_ns.route("/<string:code>")
@file_ns.param("code", "The share code (case-insensitive)")
class FileDownload(Resource):
    """Download a shared file"""

    @file_ns.doc("download_file")
    @file_ns.expect(download_parser)
    @file_ns.response(200, "File content")
    @file_ns.response(403, "Forbidden", error_response)
    @file_ns.response(404, "File Not Found", error_response)
    @file_ns.response(410, "File Gone", error_response)
    def get(self, code):
        """
        Download the file behind a share code

        Every attempt that passes the password check counts against the
        download quota, even if the transfer is interrupted.
        """
        share_service = _get_share_service()
        if share_service is None:
            return _service_unavailable()

        try:
            result = share_service.download(code, request.args.get("pwd"))

        except InvalidPasswordError:
            current_app.logger.info(f"[DOWNLOAD] Incorrect password for {code}")
            return create_error_response(
                ErrorCategory.INVALID_PASSWORD,
                f"Incorrect password for {code}",
                status_code=403,
            )
        except FileGoneError:
            return create_error_response(
                ErrorCategory.FILE_GONE,
                f"Quota exhausted for {code}",
                status_code=410,
            )
        except DomainFileNotFoundError:
            return create_error_response(
                ErrorCategory.FILE_NOT_FOUND,
                f"No file for code {code}",
                status_code=404,
            )
        except Exception as e:
            current_app.logger.exception(f"[DOWNLOAD] Error serving {code}: {e}")
            return create_error_response(
                ErrorCategory.SYSTEM_ERROR,
                f"Internal server error: {e}",
                status_code=500,
            )

        current_app.logger.info(f"[DOWNLOAD] Serving {code}")
        response = send_file(
            result.open_stream(),
            as_attachment=True,
            download_name=result.filename,
            mimetype=result.mime_type,
            max_age=0,
        )
        if response.content_length is None:
            response.content_length = result.size_bytes
        return response


# =============================================================================
# System Namespace - System health
# =============================================================================

system_ns = Namespace("system", description="System health operations")


@system_ns.route("")
class Health(Resource):
    """System health check"""

    @system_ns.doc("health_check")
    @system_ns.response(200, "Success", health_response)
    @system_ns.response(503, "Service Degraded", health_response)
    def get(self):
        """Check registry and cleanup task status"""
        return get_health_status(current_app)


# =============================================================================
# Helper Functions
# =============================================================================

def get_health_status(app: Flask) -> tuple[dict, int]:
    """
    Get health status of the registry and the cleanup task.

    Returns:
        Tuple of (health_status_dict, http_status_code)
    """
    health_status = {
        "status": "ok",
        "message": "backend ready",
        "live_files": 0,
        "reaper": "unknown",
    }

    file_manager = _resolve(app, FileManager)
    if file_manager is None:
        health_status["status"] = "degraded"
        health_status["message"] = "share service not initialized"
    else:
        health_status["live_files"] = len(file_manager.registry)

    reaper = getattr(app, "reaper", None)
    if reaper is None:
        health_status["reaper"] = "disabled"
    elif reaper.is_running:
        health_status["reaper"] = "running"
    else:
        health_status["reaper"] = "stopped"
        health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "ok" else 503
    return health_status, status_code


def _resolve(app: Flask, interface):
    container = getattr(app, "container", None)
    if container is None or not container.is_registered(interface):
        return None
    return container.resolve(interface)


def _get_share_service() -> Optional[ShareService]:
    return _resolve(current_app, ShareService)


def _service_unavailable():
    return create_error_response(
        ErrorCategory.SYSTEM_ERROR,
        "Share service not initialized",
        status_code=503,
    )


def _parse_max_downloads(form) -> Optional[int]:
    """
    Derive the download quota from form fields.

    oneTime=true means a quota of one; otherwise an optional positive
    maxDownloads applies.
    """
    if form.get("oneTime") == "true":
        return 1

    raw = form.get("maxDownloads")
    if raw is None or raw == "":
        return None

    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"maxDownloads must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError("maxDownloads must be positive")
    return value
