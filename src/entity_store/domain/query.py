from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Literal, Protocol

WILDCARD = "*"

TokenShape = Literal["compat", "alphanumeric"]

# "compat" keeps the historical shape: letters plus the digits 0 and 9 only.
# "alphanumeric" is the corrected shape and must be selected explicitly.
_TOKEN_SHAPES: dict[str, re.Pattern[str]] = {
    "compat": re.compile(r"[a-zA-Z09]+"),
    "alphanumeric": re.compile(r"[a-zA-Z0-9]+"),
}


class MembershipView(Protocol):
    # Read-only slice of the store contract used by query evaluation.
    def contains(self, entity: str) -> bool:
        ...

    def enumerate(self) -> list[str]:
        ...


def split_terms(query: str) -> list[str]:
    # Any whitespace run separates terms; empty terms are dropped.
    return query.split()


class QueryEvaluator:
    # Evaluates the wildcard / OR-list dialect against a store snapshot.
    def __init__(self, *, token_shape: TokenShape = "compat") -> None:
        if token_shape not in _TOKEN_SHAPES:
            raise ValueError(f"Unknown token shape: {token_shape!r}")
        self._token_shape = token_shape
        self._pattern = _TOKEN_SHAPES[token_shape]

    @property
    def token_shape(self) -> TokenShape:
        return self._token_shape

    def accepts(self, term: str) -> bool:
        """Return True when term has an acceptable shape for an OR query."""
        return self._pattern.fullmatch(term) is not None

    def evaluate(self, query: str, store: MembershipView) -> list[str]:
        # Exact comparison: " * " is an OR query with one term, not the wildcard.
        if query == WILDCARD:
            return store.enumerate()
        return [term for term in self._candidates(split_terms(query)) if store.contains(term)]

    def _candidates(self, terms: Iterable[str]) -> Iterable[str]:
        # Shape filter runs before membership so rejected terms never touch the store.
        return (term for term in terms if self.accepts(term))
