from __future__ import annotations

from pathlib import Path
from typing import TextIO

from entity_store.adapters.dao import InMemoryDao
from entity_store.adapters.entity_store import InMemoryEntityStore
from entity_store.adapters.eventual_dao import EventuallyConsistentDao
from entity_store.adapters.trace_sinks import JsonlTraceSink, StdoutTraceSink
from entity_store.config.models import PollingConfig, QueryConfig, StoreConfig, TracingConfig
from entity_store.domain.query import QueryEvaluator
from entity_store.ports.dao import Dao
from entity_store.ports.trace_sink import TraceSink
from entity_store.services.polling import PollingWaiter


def trace_sink_from_config(config: TracingConfig, *, stream: TextIO | None = None) -> TraceSink | None:
    # Disabled tracing or a missing sink section means no diagnostics at all.
    if not config.enabled or config.sink is None:
        return None
    if config.sink.kind == "jsonl":
        assert config.sink.jsonl is not None
        return JsonlTraceSink(
            path=Path(config.sink.jsonl.path),
            flush_every_n=config.sink.jsonl.flush_every_n,
        )
    return StdoutTraceSink(stream=stream)


def dao_from_config(
    store: StoreConfig,
    query: QueryConfig,
    *,
    trace_sink: TraceSink | None = None,
) -> Dao:
    dao = InMemoryDao(
        store=InMemoryEntityStore(trace_sink=trace_sink),
        evaluator=QueryEvaluator(token_shape=query.token_shape),
    )
    if store.backend == "eventual":
        return EventuallyConsistentDao(dao, visibility_delay_seconds=store.visibility_delay_seconds)
    return dao


def waiter_from_config(config: PollingConfig, *, trace_sink: TraceSink | None = None) -> PollingWaiter:
    return PollingWaiter(
        timeout_seconds=config.timeout_seconds,
        poll_interval_seconds=config.poll_interval_seconds,
        poll_delay_seconds=config.poll_delay_seconds,
        trace_sink=trace_sink,
    )
