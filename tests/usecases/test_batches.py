from __future__ import annotations

import pytest

from entity_store.adapters.dao import InMemoryDao
from entity_store.adapters.eventual_dao import EventuallyConsistentDao
from entity_store.services.polling import ConditionTimeoutError, PollingWaiter
from entity_store.usecases.batches import all_visible, delete_all, none_visible, put_all, staged_entities, visible


def _fast_waiter() -> PollingWaiter:
    return PollingWaiter(timeout_seconds=5.0, poll_interval_seconds=0.01)


class _BlackHoleDao(InMemoryDao):
    # Accepts writes but never makes them visible.
    def put(self, entity: str) -> bool:
        return True


def test_visible_keeps_order_and_drops_missing() -> None:
    dao = InMemoryDao()
    dao.put("def")
    dao.put("abc")
    assert visible(dao, ["abc", "xyz", "def"]) == ["abc", "def"]


def test_put_all_waits_for_every_entity() -> None:
    dao = InMemoryDao()
    outcome = put_all(dao, ["abc", "def"], _fast_waiter())
    assert outcome.satisfied
    assert sorted(dao.query("*")) == ["abc", "def"]


def test_delete_all_waits_until_none_visible() -> None:
    dao = InMemoryDao()
    put_all(dao, ["abc", "def"], _fast_waiter())
    outcome = delete_all(dao, ["abc", "def"], _fast_waiter())
    assert outcome.satisfied
    assert dao.query("*") == []


def test_put_all_tolerates_delayed_visibility() -> None:
    dao = EventuallyConsistentDao(InMemoryDao(), visibility_delay_seconds=0.05)
    try:
        put_all(dao, ["abc", "def"], _fast_waiter())
        assert sorted(dao.query("*")) == ["abc", "def"]
        delete_all(dao, ["abc", "def"], _fast_waiter())
        assert dao.query("*") == []
    finally:
        dao.close()


def test_put_all_times_out_when_writes_never_land() -> None:
    waiter = PollingWaiter(timeout_seconds=0.05, poll_interval_seconds=0.01)
    with pytest.raises(ConditionTimeoutError) as excinfo:
        put_all(_BlackHoleDao(), ["abc"], waiter)
    assert isinstance(excinfo.value.cause, AssertionError)


def test_staged_entities_puts_then_cleans_up() -> None:
    dao = InMemoryDao()
    with staged_entities(dao, ["abc", "def"], _fast_waiter()) as entities:
        assert entities == ["abc", "def"]
        results = dao.query("*")
        assert sorted(results) == sorted(entities)
        assert len(results) == 2
    assert dao.query("*") == []


def test_staged_entities_cleans_up_when_block_fails() -> None:
    dao = InMemoryDao()
    with pytest.raises(RuntimeError):
        with staged_entities(dao, ["abc"], _fast_waiter()):
            raise RuntimeError("block failed")
    assert dao.get("abc") is None


def test_all_visible_condition_raises_explicitly_until_every_entity_lands() -> None:
    # The failure is a raised AssertionError, not an assert statement, so it survives python -O.
    dao = InMemoryDao()
    dao.put("abc")
    condition = all_visible(dao, ["abc", "def"])
    with pytest.raises(AssertionError, match="def"):
        condition()
    dao.put("def")
    assert condition() is None


def test_none_visible_condition_raises_explicitly_while_any_entity_remains() -> None:
    dao = InMemoryDao()
    dao.put("abc")
    condition = none_visible(dao, ["abc", "def"])
    with pytest.raises(AssertionError, match="abc"):
        condition()
    dao.delete("abc")
    assert condition() is None


def test_put_all_timeout_cause_names_missing_entities() -> None:
    waiter = PollingWaiter(timeout_seconds=0.05, poll_interval_seconds=0.01)
    with pytest.raises(ConditionTimeoutError) as excinfo:
        put_all(_BlackHoleDao(), ["abc"], waiter)
    assert "not yet visible: ['abc']" in str(excinfo.value.cause)
