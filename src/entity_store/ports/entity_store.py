from __future__ import annotations

from typing import Protocol, runtime_checkable


# EntityStore port owns the identifier set; every operation is atomic on its own.
@runtime_checkable
class EntityStore(Protocol):
    def add(self, entity: str) -> bool:
        """Insert entity; return True only when it was absent."""
        raise NotImplementedError("EntityStore is a port; use a concrete adapter.")

    def remove(self, entity: str) -> bool:
        """Remove entity; return True only when it was present."""
        raise NotImplementedError("EntityStore is a port; use a concrete adapter.")

    def contains(self, entity: str) -> bool:
        """Return True if entity is currently stored."""
        raise NotImplementedError("EntityStore is a port; use a concrete adapter.")

    def enumerate(self) -> list[str]:
        """Return a consistent snapshot of all stored entities."""
        raise NotImplementedError("EntityStore is a port; use a concrete adapter.")
