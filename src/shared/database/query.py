"""
Typed Cypher queries.

A CypherQuery pairs the query text with the decoder that turns one raw
result row into a typed record, so callers never read alias strings.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Protocol, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CypherQuery(Generic[T]):
    """A named Cypher statement and its row decoder."""

    name: str
    text: str
    decode: Callable[[dict[str, Any]], T]


class GraphStore(Protocol):
    """What the repositories need from a graph database connection."""

    async def fetch(self, query: CypherQuery[T], params: dict[str, Any] | None = None) -> list[T]:
        ...

    async def create_unique_constraint(self, label: str, prop: str) -> bool:
        ...
