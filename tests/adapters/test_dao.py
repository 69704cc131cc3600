from __future__ import annotations

from entity_store.adapters.dao import InMemoryDao
from entity_store.adapters.entity_store import InMemoryEntityStore
from entity_store.adapters.trace_sinks import InMemoryTraceSink
from entity_store.domain.query import QueryEvaluator


def test_new_dao_is_empty() -> None:
    assert InMemoryDao().query("*") == []


def test_put_get_delete_roundtrip() -> None:
    dao = InMemoryDao()
    assert dao.put("abc") is True
    assert dao.get("abc") == "abc"
    assert dao.delete("abc") is True
    assert dao.get("abc") is None


def test_put_and_delete_are_idempotent() -> None:
    dao = InMemoryDao()
    assert dao.put("abc") is True
    assert dao.put("abc") is False
    assert dao.delete("abc") is True
    assert dao.delete("abc") is False


def test_get_of_absent_entity_returns_none() -> None:
    assert InMemoryDao().get("missing") is None


def test_wildcard_returns_exactly_the_stored_entities() -> None:
    dao = InMemoryDao()
    dao.put("abc")
    dao.put("def")
    dao.put("abc")
    results = dao.query("*")
    assert sorted(results) == ["abc", "def"]
    assert len(results) == len(set(results))


def test_or_query_matches_stored_terms_in_query_order() -> None:
    dao = InMemoryDao()
    dao.put("abc")
    dao.put("def")
    assert dao.query("abc def") == ["abc", "def"]
    assert dao.query("abc xyz") == ["abc"]


def test_digit_terms_outside_zero_and_nine_never_match() -> None:
    dao = InMemoryDao()
    dao.put("a1")
    dao.put("a9")
    assert dao.get("a1") == "a1"
    assert dao.query("a1 a9") == ["a9"]


def test_dao_uses_injected_evaluator() -> None:
    dao = InMemoryDao(evaluator=QueryEvaluator(token_shape="alphanumeric"))
    dao.put("a1")
    assert dao.query("a1") == ["a1"]


def test_separate_daos_do_not_share_state() -> None:
    first = InMemoryDao()
    second = InMemoryDao()
    first.put("abc")
    assert second.get("abc") is None


def test_dao_writes_reach_the_trace_sink() -> None:
    sink = InMemoryTraceSink()
    dao = InMemoryDao(store=InMemoryEntityStore(trace_sink=sink))
    dao.put("abc")
    dao.delete("abc")
    dao.query("*")
    assert sink.kinds() == ["store.inserted", "store.removed"]
