from .query import WILDCARD, QueryEvaluator, TokenShape, split_terms
from .trace import TraceEvent, TraceKind

# Public domain exports keep imports explicit across layers.
__all__ = [
    "QueryEvaluator",
    "TokenShape",
    "TraceEvent",
    "TraceKind",
    "WILDCARD",
    "split_terms",
]
