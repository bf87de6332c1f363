"""Structured events for flag dispatch, parsing and README updates.

Events are written to stderr, one line each, so stdout only ever carries
help, version and command output.

Environment:
    HANDY_CLI_LOG_FORMAT: ``text`` (default) or ``json``.
    HANDY_CLI_DEBUG: ``1`` lets debug events through.
    HANDY_CLI_LOG_SILENT: ``1`` drops every event.
    HANDY_CLI_RUN_ID: fixed run id shared by all events of the process.
"""

import json
import os
import sys
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional

from handy_cli.core.services.error_codes import ErrorCode, HandyCliError

_current_run_id: Optional[str] = None


def run_id() -> str:
    global _current_run_id
    if _current_run_id is None:
        _current_run_id = os.environ.get("HANDY_CLI_RUN_ID") or uuid.uuid4().hex[:12]
    return _current_run_id


def is_debug_enabled() -> bool:
    return os.environ.get("HANDY_CLI_DEBUG") == "1"


def is_log_silenced() -> bool:
    return os.environ.get("HANDY_CLI_LOG_SILENT") == "1"


@dataclass
class LogEvent:
    """One event; ``log_operation`` fills in outcome and timing as it goes."""

    operation: str
    level: str = "info"
    success: bool = True
    duration_ms: Optional[float] = None
    error_code: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def to_record(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "run_id": run_id(),
            "level": self.level,
            "operation": self.operation,
            "success": self.success,
        }
        if self.duration_ms is not None:
            record["duration_ms"] = round(self.duration_ms, 2)
        if self.error_code:
            record["error_code"] = self.error_code
        if self.details:
            record["details"] = self.details
        return record


def _as_text(record: Dict[str, Any]) -> str:
    parts = [
        f"[{record['run_id']}]",
        record["timestamp"],
        record["level"].upper(),
        record["operation"],
        "OK" if record["success"] else "FAILED",
    ]
    if "duration_ms" in record:
        parts.append(f"({record['duration_ms']:.2f}ms)")
    if "error_code" in record:
        parts.append(f"[{record['error_code']}]")
    if "details" in record:
        parts.append(json.dumps(record["details"], default=str))
    return " ".join(parts)


def emit(event: LogEvent) -> None:
    if is_log_silenced():
        return
    if event.level == "debug" and not is_debug_enabled():
        return
    record = event.to_record()
    if os.environ.get("HANDY_CLI_LOG_FORMAT", "text") == "json":
        line = json.dumps(record, separators=(",", ":"), default=str)
    else:
        line = _as_text(record)
    print(line, file=sys.stderr, flush=True)


def log_debug(
    operation: str,
    details: Optional[Dict[str, Any]] = None,
    duration_ms: Optional[float] = None,
) -> None:
    emit(LogEvent(operation, level="debug", duration_ms=duration_ms, details=dict(details or {})))


@contextmanager
def log_operation(operation: str, **details: Any) -> Iterator[LogEvent]:
    """Time a block and emit one event for it when it ends.

    The yielded event's ``details`` can be extended inside the block. An
    exception marks the event failed, with the ``ErrorCode`` of a
    ``HandyCliError`` or ``UNKNOWN_ERROR``, and is re-raised.
    """
    event = LogEvent(operation, details=details)
    started = time.monotonic()
    try:
        yield event
    except Exception as exc:
        event.success = False
        code = exc.code if isinstance(exc, HandyCliError) else ErrorCode.UNKNOWN_ERROR
        event.error_code = code.value
        raise
    finally:
        event.duration_ms = (time.monotonic() - started) * 1000
        emit(event)
