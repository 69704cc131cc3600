from __future__ import annotations

import math
import threading
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from entity_store.domain.query import WILDCARD
from entity_store.ports.dao import Dao

TimerFactory = Callable[[float, Callable[[], None]], threading.Timer]


@dataclass(frozen=True, slots=True)
class _PendingWrite:
    op: Literal["put", "delete"]
    entity: str


class EventuallyConsistentDao(Dao):
    """Dao decorator whose writes become visible after a fixed delay.

    put/delete answer immediately from a write-side view, so their boolean
    results keep the usual idempotence semantics. The mutation itself reaches
    the inner Dao later, on a background timer, which is what readers see
    through get/query. Writes are applied to the inner Dao in issue order.
    """

    def __init__(
        self,
        inner: Dao,
        *,
        visibility_delay_seconds: float = 0.0,
        timer_factory: TimerFactory = threading.Timer,
    ) -> None:
        if not (math.isfinite(visibility_delay_seconds) and visibility_delay_seconds >= 0):
            raise ValueError("visibility_delay_seconds must be a finite number >= 0")
        self._inner = inner
        self._delay = float(visibility_delay_seconds)
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        # Held while applying so two timers never reorder writes for one entity.
        self._apply_lock = threading.Lock()
        self._written: set[str] = set(inner.query(WILDCARD))
        self._pending: deque[_PendingWrite] = deque()
        self._timers: list[threading.Timer] = []
        self._closed = False

    @property
    def visibility_delay_seconds(self) -> float:
        return self._delay

    def put(self, entity: str) -> bool:
        with self._lock:
            changed = entity not in self._written
            self._written.add(entity)
            self._pending.append(_PendingWrite(op="put", entity=entity))
        self._schedule()
        return changed

    def delete(self, entity: str) -> bool:
        with self._lock:
            changed = entity in self._written
            self._written.discard(entity)
            self._pending.append(_PendingWrite(op="delete", entity=entity))
        self._schedule()
        return changed

    def get(self, entity: str) -> str | None:
        return self._inner.get(entity)

    def query(self, query: str) -> list[str]:
        return self._inner.query(query)

    def pending(self) -> int:
        # Number of writes accepted but not yet visible to readers.
        with self._lock:
            return len(self._pending)

    def flush(self) -> None:
        # Make every accepted write visible now, in issue order.
        while self._apply_next():
            pass

    def close(self) -> None:
        with self._lock:
            self._closed = True
            timers, self._timers = self._timers, []
        for timer in timers:
            timer.cancel()
        self.flush()

    def _schedule(self) -> None:
        if self._delay == 0 or self._closed:
            self.flush()
            return
        # One timer per write; each firing applies the oldest pending write.
        timer = self._timer_factory(self._delay, self._apply_next)
        timer.daemon = True
        with self._lock:
            self._timers = [item for item in self._timers if item.is_alive()]
            self._timers.append(timer)
        timer.start()

    def _apply_next(self) -> bool:
        with self._apply_lock:
            with self._lock:
                if not self._pending:
                    return False
                write = self._pending.popleft()
            if write.op == "put":
                self._inner.put(write.entity)
            else:
                self._inner.delete(write.entity)
            return True
