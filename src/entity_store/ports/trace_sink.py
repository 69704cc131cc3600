from __future__ import annotations

from typing import Protocol, runtime_checkable

from entity_store.domain.trace import TraceEvent


# TraceSink is a port-like interface for diagnostic adapters.
@runtime_checkable
class TraceSink(Protocol):
    def emit(self, event: TraceEvent) -> None:
        """Consume one TraceEvent."""
        raise NotImplementedError("TraceSink is a port; use a concrete adapter.")

    def flush(self) -> None:
        """Flush buffered trace output if supported."""
        raise NotImplementedError("TraceSink is a port; use a concrete adapter.")

    def close(self) -> None:
        """Close the sink and release resources."""
        raise NotImplementedError("TraceSink is a port; use a concrete adapter.")
