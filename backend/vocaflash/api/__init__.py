"""API layer - FastAPI routes and dependencies."""

from .dependencies import (
    FlashcardRepositoryDep,
    cleanup_dependencies,
    get_flashcard_repository,
    init_dependencies,
)
from .routes import flashcards_router, study_router

__all__ = [
    # Routes
    "flashcards_router",
    "study_router",
    # Dependencies
    "init_dependencies",
    "cleanup_dependencies",
    "get_flashcard_repository",
    # Type aliases
    "FlashcardRepositoryDep",
]
