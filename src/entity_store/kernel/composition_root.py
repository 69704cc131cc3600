from __future__ import annotations

from dataclasses import dataclass
from typing import TextIO

from entity_store.adapters.eventual_dao import EventuallyConsistentDao
from entity_store.adapters.factory import dao_from_config, trace_sink_from_config, waiter_from_config
from entity_store.config.models import AppConfig
from entity_store.ports.dao import Dao
from entity_store.ports.trace_sink import TraceSink
from entity_store.services.polling import PollingWaiter


@dataclass(frozen=True, slots=True)
class AppRuntime:
    # AppRuntime bundles the wired dao, waiter and optional trace sink.
    dao: Dao
    waiter: PollingWaiter
    trace_sink: TraceSink | None = None

    def close(self) -> None:
        # Pending delayed writes are applied before the sink is closed.
        if isinstance(self.dao, EventuallyConsistentDao):
            self.dao.close()
        if self.trace_sink is not None:
            self.trace_sink.close()


def build_runtime(config: AppConfig, *, trace_stream: TextIO | None = None) -> AppRuntime:
    # Composition root wires adapters from typed config; nothing else builds them.
    # trace_stream redirects the stdout sink, e.g. to stderr when stdout carries results.
    trace_sink = trace_sink_from_config(config.tracing, stream=trace_stream)
    dao = dao_from_config(config.store, config.query, trace_sink=trace_sink)
    waiter = waiter_from_config(config.polling, trace_sink=trace_sink)
    return AppRuntime(dao=dao, waiter=waiter, trace_sink=trace_sink)
