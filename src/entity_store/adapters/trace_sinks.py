from __future__ import annotations

import json
import sys
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path
from threading import Lock
from typing import TextIO

from entity_store.domain.trace import TraceEvent
from entity_store.ports.trace_sink import TraceSink


class JsonlTraceSink(TraceSink):
    # JsonlTraceSink appends one TraceEvent per line.
    def __init__(self, *, path: Path, flush_every_n: int = 1) -> None:
        self._path = path
        self._flush_every_n = max(1, flush_every_n)
        self._emit_count = 0
        self._lock = Lock()
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = self._path.open("a", encoding="utf-8")

    def emit(self, event: TraceEvent) -> None:
        line = _encode(event)
        # Store adapters emit from several threads; keep lines whole.
        with self._lock:
            self._write_lines([line])
            self._emit_count += 1
            if self._emit_count % self._flush_every_n == 0:
                self._handle.flush()

    def flush(self) -> None:
        with self._lock:
            self._handle.flush()

    def close(self) -> None:
        # Always flush pending data before releasing the descriptor.
        with self._lock:
            if self._handle.closed:
                return
            self._handle.flush()
            self._handle.close()

    def _write_lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self._handle.write(line + "\n")


class StdoutTraceSink(TraceSink):
    # StdoutTraceSink prints one JSON record per line; stream defaults to sys.stdout.
    def __init__(self, *, stream: TextIO | None = None) -> None:
        self._stream = stream

    def emit(self, event: TraceEvent) -> None:
        self._target().write(_encode(event) + "\n")

    def flush(self) -> None:
        self._target().flush()

    def _target(self) -> TextIO:
        # Resolved per call so a replaced sys.stdout is honoured.
        return self._stream if self._stream is not None else sys.stdout

    def close(self) -> None:
        self.flush()


class InMemoryTraceSink(TraceSink):
    # Collects events for inspection; used by tests and embedding callers.
    def __init__(self) -> None:
        self._events: list[TraceEvent] = []
        self._lock = Lock()

    @property
    def events(self) -> list[TraceEvent]:
        with self._lock:
            return list(self._events)

    def kinds(self) -> list[str]:
        return [event.kind for event in self.events]

    def emit(self, event: TraceEvent) -> None:
        with self._lock:
            self._events.append(event)

    def flush(self) -> None:
        return None

    def close(self) -> None:
        return None


def trace_to_dict(event: TraceEvent) -> dict[str, object]:
    # Stable key order keeps trace files diffable.
    return {
        "kind": event.kind,
        "subject": event.subject,
        "fields": event.fields,
        "timestamp": _format_dt(event.timestamp),
    }


def _encode(event: TraceEvent) -> str:
    return json.dumps(
        trace_to_dict(event),
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )


def _format_dt(value: datetime) -> str:
    # RFC3339 UTC format with Z suffix.
    return value.astimezone(UTC).isoformat().replace("+00:00", "Z")
