from __future__ import annotations

from dataclasses import dataclass, field

from entity_store.adapters.entity_store import InMemoryEntityStore
from entity_store.domain.query import QueryEvaluator
from entity_store.ports.dao import Dao
from entity_store.ports.entity_store import EntityStore


@dataclass
class InMemoryDao(Dao):
    # Facade over one exclusively owned store plus the query evaluator.
    store: EntityStore = field(default_factory=InMemoryEntityStore)
    evaluator: QueryEvaluator = field(default_factory=QueryEvaluator)

    def put(self, entity: str) -> bool:
        return self.store.add(entity)

    def delete(self, entity: str) -> bool:
        return self.store.remove(entity)

    def get(self, entity: str) -> str | None:
        # Membership check shaped like a fetch: the id is the only payload.
        if self.store.contains(entity):
            return entity
        return None

    def query(self, query: str) -> list[str]:
        return self.evaluator.evaluate(query, self.store)
