from .dao import Dao
from .entity_store import EntityStore
from .trace_sink import TraceSink

# Public port exports keep wiring explicit at composition time.
__all__ = [
    "Dao",
    "EntityStore",
    "TraceSink",
]
