"""JSON log lines for the delivery worker, tagged with the delivery in flight.

``delivery_context`` binds fields (normally ``delivery_id``) for the span of
one fallback chain. Every record logged inside that span, by the orchestrator
or by any provider it calls, carries those fields without each call site
passing them in ``extra``.
"""

import json
import logging
import sys
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

_delivery_fields: ContextVar[dict[str, Any]] = ContextVar(
    "delivery_fields", default={}
)

# Present on every LogRecord, so not treated as caller-supplied fields.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
    | {"message", "asctime", "taskName"}
)


@contextmanager
def delivery_context(**fields: Any) -> Iterator[None]:
    """Stamp *fields* on every record logged until the block exits.

    Nested blocks see the outer fields merged with their own.
    """
    token = _delivery_fields.set({**_delivery_fields.get(), **fields})
    try:
        yield
    finally:
        _delivery_fields.reset(token)


def current_delivery_fields() -> dict[str, Any]:
    return dict(_delivery_fields.get())


class JsonFormatter(logging.Formatter):
    """One JSON object per line.

    Key precedence, lowest first: bound delivery fields, then ``extra``
    fields from the call. ``service`` is added when given. Enums, UUIDs and
    other non-JSON values go through ``str``.
    """

    def __init__(self, service: str | None = None) -> None:
        super().__init__()
        self._service = service

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if self._service:
            entry["service"] = self._service

        entry.update(_delivery_fields.get())
        entry.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS
        )

        if record.exc_info and record.exc_info[1]:
            entry["error_type"] = type(record.exc_info[1]).__name__
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(
    level: str = "INFO",
    suppress: Sequence[str] = (),
    service: str | None = None,
) -> None:
    """Replace root handlers with a single stdout JSON handler.

    Loggers named in *suppress* (SMTP, Kafka and Celery internals) are held
    at WARNING. An unknown *level* name falls back to INFO.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter(service=service))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in suppress:
        logging.getLogger(name).setLevel(logging.WARNING)
