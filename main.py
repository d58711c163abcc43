"""
Entry point: bootstraps the Neo4j schema directly.

Connects with the configured credentials, registers the unique
answername constraint and reports how many answers exist. Exits
non-zero if either step fails.

Usage:
    python main.py

For the HTTP gateway:
    python -m src.gateway.app
"""

import asyncio
import sys

from src.answers import AnswerRepository
from src.shared.config import AppSettings
from src.shared.database import Neo4jHandler
from src.shared.exceptions import AnswerGraphError
from src.shared.logging import setup_logging


async def main() -> int:
    settings = AppSettings()
    logger = setup_logging("answer-graph.bootstrap", level=settings.log_level)

    try:
        async with Neo4jHandler(settings=settings) as handler:
            repository = AnswerRepository(handler)
            created = await repository.ensure_schema()
            if not created:
                logger.info("Unique answername constraint already present")
            answers = await repository.get_all()
    except AnswerGraphError as e:
        logger.error("Bootstrap failed: %s", e.message)
        return 1

    print(f"Schema ready; {len(answers)} answer(s) in the graph.")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
