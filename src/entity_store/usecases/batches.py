from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager

from entity_store.ports.dao import Dao
from entity_store.services.polling import PollingWaiter, PollOutcome

# A batch of puts is not atomic; awaiting a visibility check is how callers
# observe "all N entities present" (or absent) before asserting.


def visible(dao: Dao, entities: Sequence[str]) -> list[str]:
    # Entities currently readable through get(), in the given order.
    return [value for value in map(dao.get, entities) if value is not None]


def all_visible(dao: Dao, entities: Sequence[str]) -> Callable[[], None]:
    """Build a waiter condition that fails until every entity is readable."""
    expected = list(entities)

    def _check() -> None:
        seen = visible(dao, expected)
        if seen != expected:
            missing = [entity for entity in expected if entity not in seen]
            raise AssertionError(f"not yet visible: {missing!r}")

    return _check


def none_visible(dao: Dao, entities: Sequence[str]) -> Callable[[], None]:
    """Build a waiter condition that fails while any entity is still readable."""
    expected = list(entities)

    def _check() -> None:
        seen = visible(dao, expected)
        if seen:
            raise AssertionError(f"still visible: {seen!r}")

    return _check


def put_all(dao: Dao, entities: Sequence[str], waiter: PollingWaiter) -> PollOutcome:
    expected = list(entities)
    for entity in expected:
        dao.put(entity)
    return waiter.until(all_visible(dao, expected), description=f"all of {expected!r} visible")


def delete_all(dao: Dao, entities: Sequence[str], waiter: PollingWaiter) -> PollOutcome:
    expected = list(entities)
    for entity in expected:
        dao.delete(entity)
    return waiter.until(none_visible(dao, expected), description=f"none of {expected!r} visible")


@contextmanager
def staged_entities(dao: Dao, entities: Sequence[str], waiter: PollingWaiter) -> Iterator[list[str]]:
    """Put entities, hand them to the block, and delete them afterwards.

    Cleanup runs even when the block fails, so later tests start from a
    store without these entities.
    """
    staged = list(entities)
    put_all(dao, staged, waiter)
    try:
        yield list(staged)
    finally:
        delete_all(dao, staged, waiter)
