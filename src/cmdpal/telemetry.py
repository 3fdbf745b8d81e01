"""Tracing and structured logs for the interactive palette.

Each interaction leaves OpenTelemetry spans: ``palette.rank`` for every
recompute of the result list and ``palette.activate`` around the
selection callback (an exception raised by the callback is recorded on
that span before it propagates). Log lines go through
:meth:`Telemetry.event`, which renders its fields as ``key=value`` text
for console handlers and keeps them as a ``fields`` object in the
JSON-lines file written by :func:`configure_file_logging`.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Generator, Mapping

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

LOGGER_NAME = "cmdpal"

RANK_SPAN = "palette.rank"
ACTIVATE_SPAN = "palette.activate"

_NO_TRACE = "0" * 32
_NO_SPAN = "0" * 16


class _Span:
    """Span handle whose attribute setter never raises."""

    def __init__(self, span: trace.Span) -> None:
        self._span = span

    def set_attribute(self, key: str, value: object) -> None:
        try:
            self._span.set_attribute(key, value)  # type: ignore[arg-type]
        except Exception:
            pass


class _TraceLogAdapter(logging.LoggerAdapter):
    """Stamps records with the ids of the span that is current when logging."""

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:  # type: ignore[override]
        ctx = trace.get_current_span().get_span_context()
        extra = kwargs.setdefault("extra", {})
        if ctx.is_valid:
            extra["trace_id"] = format(ctx.trace_id, "032x")
            extra["span_id"] = format(ctx.span_id, "016x")
        return msg, kwargs


def _render_fields(fields: Mapping[str, Any]) -> str:
    return " ".join(
        f"{key}={value!r}" if isinstance(value, str) else f"{key}={value}"
        for key, value in fields.items()
    )


class Telemetry:
    """Tracer plus trace-aware logger for one palette front-end."""

    def __init__(self, tracer: trace.Tracer) -> None:
        self._tracer = tracer
        self.log = _TraceLogAdapter(logging.getLogger(LOGGER_NAME), {})

    @contextmanager
    def span(
        self,
        name: str,
        attributes: Mapping[str, Any] | None = None,
    ) -> Generator[_Span, None, None]:
        """Open span *name* with *attributes* already set.

        Exceptions leaving the block are recorded on the span and re-raised.
        """
        with self._tracer.start_as_current_span(name, attributes=attributes) as otel_span:
            yield _Span(otel_span)

    def event(self, message: str, **fields: Any) -> None:
        """Log *message* at INFO, e.g. ``palette opened commands=6``."""
        text = f"{message} {_render_fields(fields)}" if fields else message
        self.log.info(text, extra={"event": message, "fields": fields})

    @classmethod
    def for_testing(cls) -> tuple[Telemetry, InMemorySpanExporter]:
        """Telemetry exporting into memory; read ``exporter.get_finished_spans()``."""
        exporter = InMemorySpanExporter()
        provider = TracerProvider()
        provider.add_span_processor(SimpleSpanProcessor(exporter))
        return cls(provider.get_tracer(LOGGER_NAME)), exporter

    @classmethod
    def noop(cls) -> Telemetry:
        return cls(trace.NoOpTracer())


_active: Telemetry | None = None


def get_telemetry() -> Telemetry:
    """Return the Telemetry installed by the front-end (no-op by default)."""
    global _active
    if _active is None:
        _active = Telemetry.noop()
    return _active


def set_telemetry(tel: Telemetry) -> None:
    global _active
    _active = tel


class _JsonLinesFormatter(logging.Formatter):
    """One JSON object per record; ``fields`` only for :meth:`Telemetry.event`."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "trace": getattr(record, "trace_id", _NO_TRACE),
            "span": getattr(record, "span_id", _NO_SPAN),
            "msg": record.getMessage(),
        }
        if hasattr(record, "event"):
            entry["event"] = record.event
            entry["fields"] = getattr(record, "fields", {})
        return json.dumps(entry, ensure_ascii=False, default=str)


def configure_file_logging(log_dir: str = "logs") -> str:
    """Append ``cmdpal`` records to ``{log_dir}/cmdpal-YYYYMMDD.log``.

    Only one file handler is ever attached; later calls return the new
    path without adding another.
    """
    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    log_path = directory / f"cmdpal-{datetime.now():%Y%m%d}.log"

    logger = logging.getLogger(LOGGER_NAME)
    if any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        return str(log_path)

    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(_JsonLinesFormatter())
    logger.setLevel(logging.DEBUG)
    logger.addHandler(handler)
    return str(log_path)
