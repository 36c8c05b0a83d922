"""FastAPI dependency injection module.

Provides singleton instances of services for API routes.
Uses lifespan events for initialization and cleanup.
"""

import logging
from pathlib import Path
from typing import Annotated

from fastapi import Depends

from vocaflash.config import get_database_path
from vocaflash.infrastructure.flashcard_repository import FlashcardRepository

logger = logging.getLogger(__name__)


# Singletons stored at module level
_flashcard_repository: FlashcardRepository | None = None


async def init_dependencies() -> None:
    """Initialize all singleton dependencies.

    Called during FastAPI lifespan startup.
    """
    global _flashcard_repository

    db_path = get_database_path()
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    _flashcard_repository = FlashcardRepository(db_path)
    logger.info(f"Flashcard database ready: {db_path}")


async def cleanup_dependencies() -> None:
    """Cleanup dependencies on shutdown.

    Called during FastAPI lifespan shutdown.
    """
    global _flashcard_repository
    _flashcard_repository = None


def get_flashcard_repository() -> FlashcardRepository:
    """Dependency: Get FlashcardRepository instance."""
    if _flashcard_repository is None:
        raise RuntimeError("Dependencies not initialized. Call init_dependencies first.")
    return _flashcard_repository


# Type aliases for dependency injection
FlashcardRepositoryDep = Annotated[FlashcardRepository, Depends(get_flashcard_repository)]
