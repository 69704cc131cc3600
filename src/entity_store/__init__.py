from .adapters.dao import InMemoryDao
from .domain.query import WILDCARD, QueryEvaluator
from .ports.dao import Dao
from .services.polling import ConditionTimeoutError, PollingWaiter, PollOutcome, await_condition

# Top-level exports cover the in-process API: dao, query dialect and waiter.
__all__ = [
    "ConditionTimeoutError",
    "Dao",
    "InMemoryDao",
    "PollOutcome",
    "PollingWaiter",
    "QueryEvaluator",
    "WILDCARD",
    "await_condition",
]
