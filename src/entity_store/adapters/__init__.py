from .dao import InMemoryDao
from .entity_store import InMemoryEntityStore
from .eventual_dao import EventuallyConsistentDao
from .trace_sinks import InMemoryTraceSink, JsonlTraceSink, StdoutTraceSink

# Public adapter exports are optional but make wiring simpler.
__all__ = [
    "EventuallyConsistentDao",
    "InMemoryDao",
    "InMemoryEntityStore",
    "InMemoryTraceSink",
    "JsonlTraceSink",
    "StdoutTraceSink",
]
