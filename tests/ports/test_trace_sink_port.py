from __future__ import annotations

import pytest

from entity_store.adapters.trace_sinks import InMemoryTraceSink, StdoutTraceSink
from entity_store.domain.trace import TraceEvent
from entity_store.ports.trace_sink import TraceSink


def test_trace_sink_adapters_conform_to_port() -> None:
    assert isinstance(StdoutTraceSink(), TraceSink)
    assert isinstance(InMemoryTraceSink(), TraceSink)


def test_trace_sink_port_default_raises() -> None:
    class _PortOnly(TraceSink):
        pass

    port = _PortOnly()  # type: ignore[misc]
    with pytest.raises(NotImplementedError):
        port.emit(TraceEvent(kind="store.inserted", subject="abc"))
    with pytest.raises(NotImplementedError):
        port.flush()
    with pytest.raises(NotImplementedError):
        port.close()
