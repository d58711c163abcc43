"""
Custom exception hierarchy for the answer-graph service.

All domain errors inherit from AnswerGraphError so they can be caught
uniformly at the gateway level. Neo4j driver errors that are not
recognised constraint violations are never wrapped: they propagate as-is.
"""


class AnswerGraphError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(AnswerGraphError):
    """Caller input was missing, malformed, or collides with a unique key."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class NotFoundError(AnswerGraphError):
    """The requested answer does not exist (or was deleted concurrently)."""

    def __init__(self, message: str, answername: str | None = None):
        self.answername = answername
        super().__init__(message)


class DatabaseConnectionError(AnswerGraphError):
    """Failed to connect to Neo4j."""
    pass


class SchemaSetupError(AnswerGraphError):
    """Registering a schema constraint failed. Fatal at startup."""
    pass
