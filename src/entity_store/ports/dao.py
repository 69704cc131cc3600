from __future__ import annotations

from typing import Protocol, runtime_checkable


# Dao is the stable public contract; adapters may be in-memory, delayed or remote.
@runtime_checkable
class Dao(Protocol):
    def put(self, entity: str) -> bool:
        """Store entity; False when it was already present."""
        raise NotImplementedError("Dao is a port; use a concrete adapter.")

    def delete(self, entity: str) -> bool:
        """Remove entity; False when it was already absent."""
        raise NotImplementedError("Dao is a port; use a concrete adapter.")

    def get(self, entity: str) -> str | None:
        """Return entity itself when present, None otherwise."""
        raise NotImplementedError("Dao is a port; use a concrete adapter.")

    def query(self, query: str) -> list[str]:
        """Evaluate a wildcard or OR query and return matches in query order."""
        raise NotImplementedError("Dao is a port; use a concrete adapter.")
