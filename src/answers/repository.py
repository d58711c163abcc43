"""
Answer Repository

Data access for Answer nodes and the ``follows`` relationships between
them. Every public method is one Cypher query against the injected graph
store:

- get / get_all
- create / patch / delete
- follow / unfollow
- get_following_and_others
- ensure_schema (startup)

Input is validated before any query is sent. Unique-key rejections from
the server are rewritten as ValidationError; every other driver error
propagates unchanged.
"""

import logging
from typing import Any

from src.answers import queries
from src.answers.models import Answer, FollowingAndOthers
from src.answers.validation import validate
from src.shared.database import GraphStore, is_constraint_violation
from src.shared.exceptions import NotFoundError, SchemaSetupError, ValidationError

logger = logging.getLogger("answers.repository")


def _key(answer: Answer | str) -> str:
    """Accept either an Answer or its answername."""
    return answer.answername if isinstance(answer, Answer) else answer


def _taken(props: dict[str, Any]) -> ValidationError:
    # Assumes answername is the only unique constraint on Answer.
    return ValidationError(
        f"The answername '{props.get(queries.KEY)}' is taken.", field=queries.KEY
    )


class AnswerRepository:
    """CRUD and follow-graph operations over Answer nodes."""

    def __init__(self, store: GraphStore):
        self._store = store

    # ─── Schema ────────────────────────────────────────────

    async def ensure_schema(self) -> bool:
        """Register the unique answername constraint.

        Must be awaited once at startup, before serving requests.

        Returns:
            True if the constraint was created now, False if it existed.

        Raises:
            SchemaSetupError: If the constraint could not be registered.
        """
        try:
            created = await self._store.create_unique_constraint(queries.LABEL, queries.KEY)
        except Exception as e:
            raise SchemaSetupError(
                f"Could not register unique {queries.KEY} constraint: {e}"
            ) from e

        if created:
            logger.info("Registered unique answernames constraint.")
        return created

    # ─── Reads ─────────────────────────────────────────────

    async def get(self, answername: str) -> Answer:
        """Fetch the answer with the given answername.

        Raises:
            NotFoundError: If no such answer exists.
        """
        records = await self._store.fetch(queries.GET_ANSWER, {"answername": answername})
        if not records:
            raise NotFoundError(
                f"No such answer with answername: {answername}", answername=answername
            )
        return Answer.from_record(records[0])

    async def get_all(self) -> list[Answer]:
        """Fetch every answer, in store order."""
        records = await self._store.fetch(queries.GET_ALL_ANSWERS)
        return [Answer.from_record(record) for record in records]

    async def get_following_and_others(self, answer: Answer | str) -> FollowingAndOthers:
        """Split every other answer by whether ``answer`` follows it.

        The subject never appears in either list. Order within each list is
        whatever the store returns.

        Raises:
            NotFoundError: If the subject does not exist.
        """
        answername = _key(answer)
        records = await self._store.fetch(
            queries.FOLLOWING_AND_OTHERS, {"answername": answername}
        )
        if not records:
            raise NotFoundError(
                f"No such answer with answername: {answername}", answername=answername
            )

        result = FollowingAndOthers()
        for record in records:
            if record.node is None:
                continue
            other = Answer.from_record(record)
            if other.answername == answername:
                continue
            if record.follows:
                result.following.append(other)
            else:
                result.others.append(other)
        return result

    # ─── Writes ────────────────────────────────────────────

    async def create(self, props: dict[str, Any]) -> Answer:
        """Validate ``props`` and persist a new answer.

        Raises:
            ValidationError: If a required field is missing or invalid, or
                the answername is already taken.
        """
        safe_props = validate(props, required=True)

        try:
            records = await self._store.fetch(queries.CREATE_ANSWER, {"props": safe_props})
        except Exception as e:
            if is_constraint_violation(e):
                raise _taken(safe_props) from e
            raise

        answer = Answer.from_record(records[0])
        logger.info("Created answer %s", answer.answername)
        return answer

    async def patch(self, answer: Answer, props: dict[str, Any]) -> Answer:
        """Apply a partial update to ``answer`` in the graph and in memory.

        Only validated, known fields are written. On success the in-memory
        node is replaced wholesale by the server's copy.

        Returns:
            The same Answer instance, refreshed.

        Raises:
            ValidationError: If a present field is invalid or the new
                answername is taken.
            NotFoundError: If the answer has been deleted.
        """
        safe_props = validate(props)
        answername = answer.answername

        try:
            records = await self._store.fetch(
                queries.PATCH_ANSWER, {"answername": answername, "props": safe_props}
            )
        except Exception as e:
            if is_constraint_violation(e):
                raise _taken(safe_props) from e
            raise

        if not records:
            raise NotFoundError(
                f"Answer has been deleted! Answername: {answername}", answername=answername
            )

        answer._replace(records[0])
        logger.info("Patched answer %s (fields: %s)", answername, sorted(safe_props))
        return answer

    async def delete(self, answer: Answer | str) -> None:
        """Delete the answer and every follows edge touching it.

        Deleting an answer that is already gone is not an error.
        """
        answername = _key(answer)
        records = await self._store.fetch(queries.DELETE_ANSWER, {"answername": answername})
        if records and records[0].deleted:
            logger.info("Deleted answer %s", answername)
        else:
            logger.debug("Answer %s already deleted", answername)

    async def follow(self, answer: Answer | str, other: Answer | str) -> None:
        """Make ``answer`` follow ``other``. Following twice is a no-op.

        Raises:
            NotFoundError: If either answer does not exist.
        """
        await self._link(queries.FOLLOW, answer, other)

    async def unfollow(self, answer: Answer | str, other: Answer | str) -> None:
        """Remove the follows edge from ``answer`` to ``other``, if any.

        Raises:
            NotFoundError: If either answer does not exist.
        """
        await self._link(queries.UNFOLLOW, answer, other)

    async def _link(self, query, answer: Answer | str, other: Answer | str) -> None:
        params = {"answername": _key(answer), "other": _key(other)}
        records = await self._store.fetch(query, params)
        if not records:
            raise NotFoundError(
                f"No such answer: {params['answername']} or {params['other']}"
            )
        logger.debug("%s %s -> %s", query.name, params["answername"], params["other"])
