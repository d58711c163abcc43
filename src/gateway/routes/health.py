"""
Health route: GET /api/health.
"""

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from src.shared.logging import setup_logging

logger = setup_logging("gateway.routes.health", level="INFO")

router = APIRouter()


class HealthResponse(BaseModel):
    """Response model for GET /api/health."""

    status: str = Field(..., description="healthy or degraded")
    neo4j: str = Field(..., description="reachable, unreachable, or not configured")
    service: str = Field("answer-graph", description="Service name")
    version: str = Field("0.1.0", description="Service version")


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    """Health check.

    Reports whether the shared Neo4j handler can still reach the
    database. Useful for load balancers and uptime monitors.
    """
    handler = getattr(request.app.state, "neo4j", None)
    if handler is None:
        return HealthResponse(status="healthy", neo4j="not configured")

    if await handler.verify():
        return HealthResponse(status="healthy", neo4j="reachable")

    logger.warning("Health check: Neo4j unreachable")
    return HealthResponse(status="degraded", neo4j="unreachable")
