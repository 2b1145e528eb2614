# notes_api/common/logging.py
import logging, sys, time, uuid
from pythonjsonlogger.json import JsonFormatter
from flask import g, has_request_context, request

ACCESS_LOGGER = "notes_api.request"


class RequestIdFilter(logging.Filter):
    """Ajoute request_id à chaque record, y compris ceux du NoteStore."""

    def filter(self, record):
        if not hasattr(record, "request_id"):
            record.request_id = g.get("request_id", "-") if has_request_context() else "-"
        return True


def setup_json_logging(app):
    root = logging.getLogger()
    root.handlers = []
    root.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(request_id)s",
        rename_fields={"levelname": "level", "name": "logger"},
    ))
    root.addHandler(handler)


def register_request_logging(app):
    @app.before_request
    def _start_request():
        g.request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
        g.started_at = time.perf_counter()

    @app.after_request
    def _log_request(resp):
        resp.headers.setdefault("X-Request-Id", g.get("request_id", "-"))
        started = g.get("started_at")
        logging.getLogger(ACCESS_LOGGER).info(
            "http_request",
            extra={
                "method": request.method,
                "path": request.path,
                "status": resp.status_code,
                "latency_ms": round((time.perf_counter() - started) * 1000, 1) if started else None,
            },
        )
        return resp
