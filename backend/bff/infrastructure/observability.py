"""Structured Logging — JSON lines correlated by request id.

Invariants:
    - Every line carries timestamp, level, logger, message
    - request_id of the in-flight request attached to every line logged while it runs
    - Known extra= fields copied only when set; unknown extras never leak into the line
    - LOG_FORMAT other than "json" falls back to a single-line human format

Design Decisions:
    - request id held in a ContextVar: survives awaits and asyncio.gather fan-out
      without threading it through every service signature
    - Same id forwarded upstream as X-Request-ID so one browser action can be
      followed across BFF, Orchestrator and Offchain API logs
"""

import json
import logging
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone

REQUEST_ID_HEADER = "X-Request-ID"

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)

_EXTRA_FIELDS = (
    "method", "path", "status_code", "duration_ms", "error_code",
    "service", "upstream_status", "matricula_id", "transfer_id", "user_id",
)


def bind_request_id(incoming: str | None = None) -> str:
    """Adopt the caller's id (or mint one) for the current request context."""
    request_id = incoming or uuid.uuid4().hex
    _request_id.set(request_id)
    return request_id


def current_request_id() -> str | None:
    return _request_id.get()


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = current_request_id()
        if request_id:
            entry["request_id"] = request_id
        entry.update({
            key: getattr(record, key)
            for key in _EXTRA_FIELDS
            if getattr(record, key, None) is not None
        })
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install one stdout handler on the root logger (idempotent across reloads)."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if getattr(h, "_bff_handler", False)]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler._bff_handler = True
    handler.setFormatter(
        JSONFormatter() if fmt == "json"
        else logging.Formatter("%(asctime)s %(levelname)-7s %(name)s | %(message)s")
    )
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
