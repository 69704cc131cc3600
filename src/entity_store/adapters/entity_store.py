from __future__ import annotations

from threading import Lock

from entity_store.domain.trace import TraceEvent, TraceKind
from entity_store.ports.entity_store import EntityStore
from entity_store.ports.trace_sink import TraceSink


class InMemoryEntityStore(EntityStore):
    # In-memory adapter is the reference implementation of the store port.
    # A dict keeps insertion order for enumeration; values are unused.
    def __init__(self, *, trace_sink: TraceSink | None = None) -> None:
        self._entities: dict[str, None] = {}
        self._lock = Lock()
        self._trace_sink = trace_sink

    def add(self, entity: str) -> bool:
        with self._lock:
            changed = entity not in self._entities
            if changed:
                self._entities[entity] = None
        self._trace("store.inserted", entity, changed)
        return changed

    def remove(self, entity: str) -> bool:
        with self._lock:
            changed = entity in self._entities
            if changed:
                del self._entities[entity]
        self._trace("store.removed", entity, changed)
        return changed

    def contains(self, entity: str) -> bool:
        with self._lock:
            return entity in self._entities

    def enumerate(self) -> list[str]:
        # Copy under the lock so callers never observe a half-applied mutation.
        with self._lock:
            return list(self._entities)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entities)

    def _trace(self, kind: TraceKind, entity: str, changed: bool) -> None:
        # Emitted outside the lock; a slow sink must not stall readers. Concurrent
        # writes to one entity may therefore reach the sink out of mutation order.
        if self._trace_sink is None:
            return
        self._trace_sink.emit(TraceEvent(kind=kind, subject=entity, fields={"changed": changed}))
