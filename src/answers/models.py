"""
Answer entity and typed query records.

Rows coming back from Neo4j are decoded into the record dataclasses
below; the repository builds Answer objects from those records only.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class AnswerRecord:
    """One answer node as returned by a query."""

    node: dict[str, Any]
    element_id: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "AnswerRecord":
        return cls(node=dict(row["answer"]), element_id=row.get("element_id"))


@dataclass(frozen=True)
class FollowRecord:
    """Another answer, and whether the subject follows it.

    ``node`` is None when the subject is the only answer in the graph.
    """

    node: dict[str, Any] | None
    element_id: str | None = None
    follows: bool = False

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "FollowRecord":
        other = row.get("other")
        return cls(
            node=dict(other) if other is not None else None,
            element_id=row.get("element_id"),
            follows=bool(row.get("follows")),
        )


@dataclass(frozen=True)
class KeyRecord:
    """An answername echoed back by a write, proving the match succeeded."""

    answername: str

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "KeyRecord":
        return cls(answername=row["answername"])


@dataclass(frozen=True)
class DeleteRecord:
    """How many answer nodes a delete removed (0 or 1)."""

    deleted: int

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "DeleteRecord":
        return cls(deleted=int(row["deleted"]))


@dataclass
class FollowingAndOthers:
    """Every other answer, split by whether the subject follows it."""

    following: list["Answer"] = field(default_factory=list)
    others: list["Answer"] = field(default_factory=list)

    def __iter__(self):
        # Allows ``following, others = await repo.get_following_and_others(a)``
        return iter((self.following, self.others))


class Answer:
    """
    A user-like account in the follow graph.

    Wraps the property bag of one persisted node. Only ``answername`` is
    interpreted; every other property passes through untouched. Instances
    are built by AnswerRepository from query results, never by callers.
    """

    def __init__(self, node: dict[str, Any], element_id: str | None = None):
        self._node = dict(node)
        self._element_id = element_id

    @classmethod
    def from_record(cls, record: AnswerRecord | FollowRecord) -> "Answer":
        return cls(record.node or {}, record.element_id)

    def _replace(self, record: AnswerRecord) -> None:
        """Swap in the server's latest copy of this node."""
        self._node = dict(record.node)
        if record.element_id is not None:
            self._element_id = record.element_id

    @property
    def answername(self) -> str | None:
        """The answer's identity key, e.g. 'aseemk'."""
        return self._node.get("answername")

    @property
    def element_id(self) -> str | None:
        """Store-assigned node identity."""
        return self._element_id

    @property
    def properties(self) -> dict[str, Any]:
        """A copy of every property on the node."""
        return dict(self._node)

    def to_dict(self) -> dict[str, Any]:
        return {**self._node, "element_id": self._element_id}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Answer):
            return NotImplemented
        return self.answername == other.answername

    # patch() renames in place, so the identity key cannot back a hash.
    __hash__ = None

    def __repr__(self) -> str:
        return f"Answer(answername={self.answername!r})"
