"""
Shared fixtures.

InMemoryGraphStore stands in for Neo4jHandler: it answers each named
query from AnswerRepository the way the Cypher would, including the
unique answername constraint, so repository and gateway behaviour can
be tested without a database.
"""

import pytest
from neo4j.exceptions import ConstraintError

from src.answers import AnswerRepository


class InMemoryGraphStore:
    """Dict-backed graph: node id -> properties, plus (from, to) follows edges."""

    def __init__(self):
        self.nodes: dict[int, dict] = {}
        self.edges: set[tuple[int, int]] = set()
        self.constraints: set[tuple[str, str]] = set()
        self.calls: list[tuple[str, dict]] = []
        self._next_id = 0

    # ─── GraphStore interface ──────────────────────────────

    async def fetch(self, query, params=None):
        params = params or {}
        self.calls.append((query.name, params))
        rows = getattr(self, f"_{query.name}")(**params)
        return [query.decode(row) for row in rows]

    async def create_unique_constraint(self, label, prop):
        created = (label, prop) not in self.constraints
        self.constraints.add((label, prop))
        return created

    # ─── Helpers ───────────────────────────────────────────

    def _find(self, answername):
        return next(
            (i for i, p in self.nodes.items() if p.get("answername") == answername), None
        )

    def _row(self, alias, node_id):
        return {alias: dict(self.nodes[node_id]), "element_id": f"4:test:{node_id}"}

    def _check_unique(self, answername, exclude=None):
        existing = self._find(answername)
        if answername is not None and existing is not None and existing != exclude:
            raise ConstraintError(
                f"Node({existing}) already exists with label `Answer` "
                f"and property `answername` = '{answername}'"
            )

    # ─── Queries ───────────────────────────────────────────

    def _get_answer(self, answername):
        node_id = self._find(answername)
        return [] if node_id is None else [self._row("answer", node_id)]

    def _get_all_answers(self):
        return [self._row("answer", i) for i in self.nodes]

    def _create_answer(self, props):
        self._check_unique(props.get("answername"))
        node_id = self._next_id
        self._next_id += 1
        self.nodes[node_id] = dict(props)
        return [self._row("answer", node_id)]

    def _patch_answer(self, answername, props):
        node_id = self._find(answername)
        if node_id is None:
            return []
        self._check_unique(props.get("answername"), exclude=node_id)
        self.nodes[node_id].update(props)
        return [self._row("answer", node_id)]

    def _delete_answer(self, answername):
        node_id = self._find(answername)
        if node_id is None:
            return [{"deleted": 0}]
        del self.nodes[node_id]
        self.edges = {e for e in self.edges if node_id not in e}
        return [{"deleted": 1}]

    def _follow(self, answername, other):
        a, b = self._find(answername), self._find(other)
        if a is None or b is None:
            return []
        self.edges.add((a, b))
        return [{"answername": answername}]

    def _unfollow(self, answername, other):
        a, b = self._find(answername), self._find(other)
        if a is None or b is None:
            return []
        self.edges.discard((a, b))
        return [{"answername": answername}]

    def _following_and_others(self, answername):
        subject = self._find(answername)
        if subject is None:
            return []
        rows = [
            {
                **self._row("other", i),
                "follows": (subject, i) in self.edges,
            }
            for i in self.nodes
            if i != subject
        ]
        return rows or [{"other": None, "element_id": None, "follows": False}]


@pytest.fixture
def store():
    return InMemoryGraphStore()


@pytest.fixture
def repository(store):
    return AnswerRepository(store)
