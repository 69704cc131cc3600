from __future__ import annotations

import math
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Literal

from entity_store.domain.trace import TraceEvent
from entity_store.ports.trace_sink import TraceSink

PollStatus = Literal["satisfied", "timeout"]

# A condition is satisfied when it returns without raising and does not return False.
Condition = Callable[[], object]

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_POLL_INTERVAL_SECONDS = 0.1


@dataclass(frozen=True, slots=True)
class PollOutcome:
    # Terminal result of one waiter run; cause is the last failure seen.
    status: PollStatus
    attempts: int
    elapsed_seconds: float
    cause: BaseException | None = None

    @property
    def satisfied(self) -> bool:
        return self.status == "satisfied"

    def raise_for_timeout(self, description: str | None = None) -> None:
        """Raise ConditionTimeoutError unless the condition was satisfied."""
        if self.satisfied:
            return
        raise ConditionTimeoutError(self, description=description) from self.cause


class ConditionTimeoutError(TimeoutError):
    # Raised by PollingWaiter.until; carries the outcome for diagnostics.
    def __init__(self, outcome: PollOutcome, *, description: str | None = None) -> None:
        self.outcome = outcome
        self.description = description
        super().__init__(_timeout_message(outcome, description))

    @property
    def cause(self) -> BaseException | None:
        return self.outcome.cause


@dataclass(frozen=True, slots=True)
class PollingWaiter:
    """Re-evaluate a condition until it holds or the timeout elapses.

    The waiter runs on the caller's thread and never sleeps past the deadline.
    It always evaluates the condition at least once, and once more at the
    deadline, even when the poll interval is longer than the timeout.
    Exceptions outside ``ignore_exceptions`` are not retried and propagate.
    """

    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    poll_delay_seconds: float = 0.0
    ignore_exceptions: tuple[type[BaseException], ...] = (Exception,)
    now_fn: Callable[[], float] = time.monotonic
    sleep_fn: Callable[[float], None] = time.sleep
    trace_sink: TraceSink | None = None

    def __post_init__(self) -> None:
        _require_positive("timeout_seconds", self.timeout_seconds)
        _require_positive("poll_interval_seconds", self.poll_interval_seconds)
        if not (math.isfinite(self.poll_delay_seconds) and self.poll_delay_seconds >= 0):
            raise ValueError("poll_delay_seconds must be a finite number >= 0")

    def at_most(self, seconds: float) -> PollingWaiter:
        return replace(self, timeout_seconds=seconds)

    def poll_every(self, seconds: float) -> PollingWaiter:
        return replace(self, poll_interval_seconds=seconds)

    def with_delay(self, seconds: float) -> PollingWaiter:
        return replace(self, poll_delay_seconds=seconds)

    def poll(
        self,
        condition: Condition,
        *,
        timeout_seconds: float | None = None,
        poll_interval_seconds: float | None = None,
        description: str | None = None,
    ) -> PollOutcome:
        """Run the condition to completion and report the outcome; never raises on timeout."""
        timeout = self.timeout_seconds if timeout_seconds is None else timeout_seconds
        interval = self.poll_interval_seconds if poll_interval_seconds is None else poll_interval_seconds
        _require_positive("timeout_seconds", timeout)
        _require_positive("poll_interval_seconds", interval)

        started = self.now_fn()
        deadline = started + timeout
        if self.poll_delay_seconds > 0:
            self.sleep_fn(min(self.poll_delay_seconds, timeout))

        attempts = 0
        while True:
            attempts += 1
            ok, cause = self._attempt(condition)
            now = self.now_fn()
            if ok:
                return self._finish(PollOutcome("satisfied", attempts, now - started), description)
            remaining = deadline - now
            if remaining <= 0:
                return self._finish(PollOutcome("timeout", attempts, now - started, cause), description)
            self.sleep_fn(min(interval, remaining))

    def until(
        self,
        condition: Condition,
        *,
        timeout_seconds: float | None = None,
        poll_interval_seconds: float | None = None,
        description: str | None = None,
    ) -> PollOutcome:
        """Like poll(), but raise ConditionTimeoutError when the deadline passes."""
        outcome = self.poll(
            condition,
            timeout_seconds=timeout_seconds,
            poll_interval_seconds=poll_interval_seconds,
            description=description,
        )
        outcome.raise_for_timeout(description)
        return outcome

    def _attempt(self, condition: Condition) -> tuple[bool, BaseException | None]:
        try:
            result = condition()
        except self.ignore_exceptions as exc:
            return False, exc
        if result is False:
            return False, None
        return True, None

    def _finish(self, outcome: PollOutcome, description: str | None) -> PollOutcome:
        if self.trace_sink is not None:
            fields: dict[str, object] = {
                "attempts": outcome.attempts,
                "elapsed_seconds": round(outcome.elapsed_seconds, 6),
            }
            if outcome.cause is not None:
                fields["cause"] = repr(outcome.cause)
            kind = "await.satisfied" if outcome.satisfied else "await.timeout"
            self.trace_sink.emit(TraceEvent(kind=kind, subject=description, fields=fields))
        return outcome


def await_condition(
    condition: Condition,
    *,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
) -> PollOutcome:
    # One-shot helper for callers that do not keep a configured waiter around.
    waiter = PollingWaiter(timeout_seconds=timeout_seconds, poll_interval_seconds=poll_interval_seconds)
    return waiter.until(condition)


def _require_positive(name: str, value: float) -> None:
    # NaN compares false both ways and inf never expires; both would poll forever.
    if not (math.isfinite(value) and value > 0):
        raise ValueError(f"{name} must be a finite number > 0")


def _timeout_message(outcome: PollOutcome, description: str | None) -> str:
    subject = f"Condition {description!r}" if description else "Condition"
    message = (
        f"{subject} was not satisfied within {outcome.elapsed_seconds:.3f}s "
        f"after {outcome.attempts} attempt(s)"
    )
    if outcome.cause is None:
        return message + ": condition returned False"
    return message + f": {type(outcome.cause).__name__}: {outcome.cause}"
