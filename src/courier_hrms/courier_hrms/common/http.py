from __future__ import annotations

import logging
from pathlib import Path

from flask import jsonify, request

from ..core.constants import ALLOWED_UPLOAD_EXTENSIONS
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    SpreadsheetError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS = (
    (NotFoundError, 404),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (SpreadsheetError, 400),
    (ValidationError, 400),
)


def error_response(e: Exception):
    """JSON error body with a status derived from the exception type."""
    for exc_type, status in _STATUS:
        if isinstance(e, exc_type):
            return jsonify({"error": str(e)}), status
    if isinstance(e, DomainError):
        logger.warning("Request failed: %s", e)
        return jsonify({"error": str(e)}), 500
    logger.exception("Unhandled error on %s %s", request.method, request.path)
    return jsonify({"error": "Internal server error."}), 500


def json_body() -> dict:
    return request.get_json(silent=True) or {}


def uploaded_file() -> tuple[bytes, str]:
    """Return (content, filename) of the ``file`` form field."""
    file = request.files.get("file")
    if file is None or not file.filename:
        raise ValidationError("No file uploaded.")
    if Path(file.filename).suffix.lower() not in ALLOWED_UPLOAD_EXTENSIONS:
        raise ValidationError("Only .xlsx, .xls and .csv files are accepted.")
    return file.read(), file.filename
