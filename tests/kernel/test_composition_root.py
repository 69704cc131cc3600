from __future__ import annotations

import io
from pathlib import Path

from entity_store.adapters.dao import InMemoryDao
from entity_store.adapters.eventual_dao import EventuallyConsistentDao
from entity_store.adapters.trace_sinks import JsonlTraceSink, StdoutTraceSink
from entity_store.config.loader import parse_config
from entity_store.config.models import AppConfig
from entity_store.kernel.composition_root import build_runtime


def test_default_runtime_is_plain_in_memory_without_tracing() -> None:
    runtime = build_runtime(AppConfig())
    assert isinstance(runtime.dao, InMemoryDao)
    assert runtime.trace_sink is None
    assert runtime.waiter.timeout_seconds == 10.0
    assert runtime.waiter.poll_interval_seconds == 0.1
    runtime.close()


def test_runtime_applies_query_shape() -> None:
    runtime = build_runtime(parse_config({"query": {"token_shape": "alphanumeric"}}))
    runtime.dao.put("a1")
    assert runtime.dao.query("a1") == ["a1"]


def test_eventual_backend_wraps_in_memory_dao() -> None:
    runtime = build_runtime(
        parse_config({"store": {"backend": "eventual", "visibility_delay_seconds": 30}})
    )
    assert isinstance(runtime.dao, EventuallyConsistentDao)
    runtime.dao.put("abc")
    assert runtime.dao.get("abc") is None
    # close() flushes pending writes instead of waiting for the timers.
    runtime.close()
    assert runtime.dao.get("abc") == "abc"


def test_enabled_tracing_without_sink_stays_silent() -> None:
    runtime = build_runtime(parse_config({"tracing": {"enabled": True}}))
    assert runtime.trace_sink is None


def test_stdout_tracing_is_shared_by_store_and_waiter() -> None:
    runtime = build_runtime(parse_config({"tracing": {"enabled": True, "sink": {"kind": "stdout"}}}))
    assert isinstance(runtime.trace_sink, StdoutTraceSink)
    assert runtime.waiter.trace_sink is runtime.trace_sink


def test_jsonl_tracing_records_store_writes(tmp_path: Path) -> None:
    path = tmp_path / "trace.jsonl"
    runtime = build_runtime(
        parse_config(
            {"tracing": {"enabled": True, "sink": {"kind": "jsonl", "jsonl": {"path": str(path)}}}}
        )
    )
    assert isinstance(runtime.trace_sink, JsonlTraceSink)
    runtime.dao.put("abc")
    runtime.waiter.poll(lambda: runtime.dao.get("abc") == "abc")
    runtime.close()
    text = path.read_text(encoding="utf-8")
    assert '"kind":"store.inserted"' in text
    assert '"kind":"await.satisfied"' in text


def test_trace_stream_redirects_stdout_sink() -> None:
    stream = io.StringIO()
    runtime = build_runtime(
        parse_config({"tracing": {"enabled": True, "sink": {"kind": "stdout"}}}),
        trace_stream=stream,
    )
    runtime.dao.put("abc")
    runtime.close()
    assert '"kind":"store.inserted"' in stream.getvalue()
