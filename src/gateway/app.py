"""
FastAPI Gateway: HTTP API layer.

External interface for the answer-graph service. Owns the process-wide
Neo4j handler: connects and registers the schema on startup, closes on
shutdown. Domain errors are mapped to HTTP statuses here.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.answers import AnswerRepository
from src.gateway.config import GatewaySettings
from src.gateway.routes import answers, health
from src.shared.database import Neo4jHandler
from src.shared.exceptions import NotFoundError, ValidationError
from src.shared.logging import generate_correlation_id, setup_logging

settings = GatewaySettings()

logger = setup_logging("gateway.app", level=settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for the FastAPI app.

    Connects to Neo4j and registers the unique answername constraint
    before serving. Either failing aborts startup. A repository injected
    through create_app() skips all of this.
    """
    if getattr(app.state, "repository", None) is not None:
        yield
        return

    logger.info("Starting answer-graph gateway")

    handler = Neo4jHandler(settings=settings)
    await handler.connect()
    repository = AnswerRepository(handler)
    try:
        await repository.ensure_schema()
    except Exception:
        await handler.close()
        raise

    app.state.neo4j = handler
    app.state.repository = repository
    logger.info("Gateway initialized successfully")

    yield

    logger.info("Shutting down answer-graph gateway")
    await handler.close()
    app.state.repository = None
    app.state.neo4j = None


# ─── Error mapping ──────────────────────────────────────────


async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": exc.message, "field": exc.field})


async def _not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": exc.message})


def create_app(repository: AnswerRepository | None = None) -> FastAPI:
    """Build the gateway app.

    Args:
        repository: Pre-built repository to serve (tests). When omitted the
            lifespan connects to Neo4j using GatewaySettings.
    """
    app = FastAPI(
        title="Answer Graph",
        description="Answers and who follows whom, backed by Neo4j",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.repository = repository

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or generate_correlation_id()
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Request-ID"] = request_id
        logger.info(
            f"[{request_id}] {request.method} {request.url.path} "
            f"-> {response.status_code} ({elapsed_ms:.1f}ms)"
        )
        return response

    app.add_exception_handler(ValidationError, _validation_error_handler)
    app.add_exception_handler(NotFoundError, _not_found_handler)

    app.include_router(answers.router, prefix="/api", tags=["Answers"])
    app.include_router(health.router, prefix="/api", tags=["Health"])

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with basic info."""
        return {
            "name": "Answer Graph",
            "version": "0.1.0",
            "status": "operational",
            "endpoints": {
                "answers": "/api/answers",
                "health": "/api/health",
            },
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.gateway.app:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level="info",
    )
