"""
Base configuration for the answer-graph service.

Uses Pydantic Settings for environment-based configuration.
The gateway extends AppSettings with its own prefixed fields.
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """Settings shared by every entry point (gateway, bootstrap script)."""

    app_name: str = "answer-graph"

    # Neo4j connection. NEO4J_URL / GRAPHENEDB_URL are accepted for
    # hosted setups that only export a single URL variable.
    neo4j_uri: str = Field(
        "bolt://localhost:7687",
        validation_alias=AliasChoices("NEO4J_URI", "NEO4J_URL", "GRAPHENEDB_URL"),
    )
    neo4j_username: str = Field(
        "neo4j", validation_alias=AliasChoices("NEO4J_USERNAME", "NEO4J_USER")
    )
    neo4j_password: str = Field("neo4j", validation_alias="NEO4J_PASSWORD")
    neo4j_database: str = Field("neo4j", validation_alias="NEO4J_DATABASE")

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
        populate_by_name = True
