"""
Neo4j Connection Handler

Centralised Neo4j driver management.
Reads credentials from AppSettings (environment / .env) and exposes an
async driver that is created once per process and injected into the
repositories.
"""

import logging
import re
from typing import Any, TypeVar

from neo4j import AsyncDriver, AsyncGraphDatabase
from neo4j.exceptions import ClientError, ConstraintError

from src.shared.config import AppSettings
from src.shared.database.query import CypherQuery
from src.shared.exceptions import DatabaseConnectionError

logger = logging.getLogger("answer-graph.neo4j_handler")

T = TypeVar("T")

# Codes the server has used for unique-constraint rejections across versions.
_CONSTRAINT_CODES = frozenset({
    "Neo.ClientError.Schema.ConstraintValidationFailed",
    "Neo.ClientError.Schema.ConstraintViolation",
})

# Labels and property names are interpolated into schema statements.
_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def is_constraint_violation(exc: BaseException) -> bool:
    """Return True if ``exc`` is the server rejecting a duplicate unique key."""
    if isinstance(exc, ConstraintError):
        return True
    return isinstance(exc, ClientError) and getattr(exc, "code", None) in _CONSTRAINT_CODES


class Neo4jHandler:
    """
    Manages a single async Neo4j driver.

    Usage
    -----
    handler = Neo4jHandler()          # reads from .env / environment
    await handler.connect()
    rows = await handler.run("MATCH (n) RETURN n LIMIT 5")
    await handler.close()

    The handler can also be used as an async context-manager:

        async with Neo4jHandler() as handler:
            await handler.run(...)
    """

    def __init__(
        self,
        uri: str | None = None,
        username: str | None = None,
        password: str | None = None,
        database: str | None = None,
        settings: AppSettings | None = None,
    ):
        settings = settings or AppSettings()
        self._uri = uri or settings.neo4j_uri
        self._username = username or settings.neo4j_username
        self._password = password or settings.neo4j_password
        self._database = database or settings.neo4j_database
        self._driver: AsyncDriver | None = None

        if not self._uri:
            raise ValueError("NEO4J_URI is not set (env or argument)")
        if not self._username:
            raise ValueError("NEO4J_USERNAME is not set (env or argument)")

    # ─── Lifecycle ──────────────────────────────────────────

    async def connect(self) -> "Neo4jHandler":
        """Create the async driver and verify connectivity.

        Returns:
            Self for method chaining.

        Raises:
            DatabaseConnectionError: If Neo4j cannot be reached or rejects the credentials.
        """
        if self._driver is not None:
            return self

        self._driver = AsyncGraphDatabase.driver(
            self._uri, auth=(self._username, self._password)
        )
        try:
            await self._driver.verify_connectivity()
        except Exception as e:
            logger.error("Failed to connect to Neo4j at %s", self._uri)
            await self._driver.close()
            self._driver = None
            raise DatabaseConnectionError(
                f"Could not connect to Neo4j at {self._uri}: {e}"
            ) from e
        logger.info("Connected to Neo4j at %s (db=%s)", self._uri, self._database)
        return self

    async def close(self) -> None:
        """Close the underlying driver."""
        if self._driver:
            await self._driver.close()
            self._driver = None
            logger.info("Neo4j connection closed")

    async def __aenter__(self) -> "Neo4jHandler":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # ─── Properties ─────────────────────────────────────────

    @property
    def driver(self) -> AsyncDriver:
        """Return the raw async driver.

        Raises:
            RuntimeError: If handler is not connected (call connect() first).
        """
        if self._driver is None:
            raise RuntimeError("Neo4jHandler is not connected: call connect() first")
        return self._driver

    @property
    def database(self) -> str:
        """Return the configured database name."""
        return self._database

    @property
    def uri(self) -> str:
        """Return the configured Neo4j URI."""
        return self._uri

    # ─── Query Helpers ──────────────────────────────────────

    async def run(self, query: str, params: dict[str, Any] | None = None) -> list[dict]:
        """Execute a Cypher query and return all results as dicts.

        Nodes in the result are converted to plain property dicts.

        Raises:
            RuntimeError: If handler is not connected (call connect() first).
            neo4j.exceptions.Neo4jError: If the server rejects the query.
        """
        async with self.driver.session(database=self._database) as session:
            result = await session.run(query, params or {})
            return [record.data() async for record in result]

    async def run_single(self, query: str, params: dict[str, Any] | None = None) -> dict | None:
        """Execute a Cypher query and return the first result, or None."""
        results = await self.run(query, params)
        return results[0] if results else None

    async def fetch(self, query: CypherQuery[T], params: dict[str, Any] | None = None) -> list[T]:
        """Execute a typed query and decode every row into its record type."""
        rows = await self.run(query.text, params)
        logger.debug("Query %s returned %d row(s)", query.name, len(rows))
        return [query.decode(row) for row in rows]

    # ─── Schema ─────────────────────────────────────────────

    async def create_unique_constraint(self, label: str, prop: str) -> bool:
        """Register a uniqueness constraint on ``(:label).prop``.

        Returns:
            True if the constraint was created, False if it already existed.

        Raises:
            ValueError: If label or prop is not a plain identifier.
            neo4j.exceptions.Neo4jError: If the server rejects the statement.
        """
        if not _IDENTIFIER.match(label) or not _IDENTIFIER.match(prop):
            raise ValueError(f"Invalid constraint target: {label}.{prop}")

        name = f"{label.lower()}_{prop}_unique"
        statement = (
            f"CREATE CONSTRAINT {name} IF NOT EXISTS "
            f"FOR (n:{label}) REQUIRE n.{prop} IS UNIQUE"
        )
        async with self.driver.session(database=self._database) as session:
            result = await session.run(statement)
            summary = await result.consume()
        return summary.counters.constraints_added > 0

    async def verify(self) -> bool:
        """Quick health-check: returns True if the database is reachable."""
        if self._driver is None:
            return False
        try:
            await self._driver.verify_connectivity()
            return True
        except Exception:
            return False
