"""
Database package: centralised connection handlers.
"""

from .neo4j_handler import Neo4jHandler, is_constraint_violation
from .query import CypherQuery, GraphStore

__all__ = ["CypherQuery", "GraphStore", "Neo4jHandler", "is_constraint_violation"]
