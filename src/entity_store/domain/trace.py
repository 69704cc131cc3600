from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Literal

TraceKind = Literal["store.inserted", "store.removed", "await.satisfied", "await.timeout"]


@dataclass(frozen=True, slots=True)
class TraceEvent:
    # Diagnostic record for store mutations and waiter outcomes; no semantic effect.
    kind: TraceKind
    subject: str | None = None
    fields: dict[str, object] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

    def __post_init__(self) -> None:
        if not self.kind:
            raise ValueError("TraceEvent requires a non-empty kind")
