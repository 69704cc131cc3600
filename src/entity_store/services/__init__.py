from .polling import (
    ConditionTimeoutError,
    PollingWaiter,
    PollOutcome,
    await_condition,
)

# Service exports; the waiter is the only stateful-by-time collaborator.
__all__ = ["ConditionTimeoutError", "PollOutcome", "PollingWaiter", "await_condition"]
