"""
JSON logging setup and per-request log context.
"""

from __future__ import annotations

import logging
import uuid
from contextvars import ContextVar

from pythonjsonlogger.json import JsonFormatter

from . import config

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


class RequestContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        # The formatter references request_id unconditionally, so it must
        # exist even for startup logs.
        record.request_id = request_id_ctx.get() or ""
        return True


def setup_logging() -> None:
    root = logging.getLogger()
    root.setLevel(config.log_level())
    root.handlers = []
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s %(request_id)s"))
    handler.addFilter(RequestContextFilter())
    root.addHandler(handler)


def bind_request_id(req_id: str | None = None) -> str:
    rid = req_id or str(uuid.uuid4())
    request_id_ctx.set(rid)
    return rid
