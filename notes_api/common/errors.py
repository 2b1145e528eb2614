import logging
from flask import jsonify, g
from flask_limiter import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

logger = logging.getLogger("notes_api.error")

def _json_error(message, status, code, details=None):
    return jsonify({
        "error": {"code": code, "message": message, "details": details or {}}
    }), status

def register_error_handlers(app):
    @app.errorhandler(RateLimitExceeded)
    def handle_rate_limit(e):
        return _json_error("Rate limit exceeded.", 429, "rate_limited")

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        # Ex: 404, 405, 413…
        return _json_error(e.description or "HTTP error", e.code or 500, "http_error")

    @app.errorhandler(SQLAlchemyError)
    def handle_storage_error(e: SQLAlchemyError):
        # déjà journalisé par le NoteStore avec son contexte
        return _json_error("Storage error.", 500, "storage_error")

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception(
            "unhandled_exception",
            extra={"request_id": getattr(g, "request_id", "-")},
        )
        return _json_error("Internal server error.", 500, "internal_error")
