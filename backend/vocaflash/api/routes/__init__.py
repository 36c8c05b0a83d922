"""API routes module."""

from .flashcards import router as flashcards_router
from .study import router as study_router

__all__ = ["flashcards_router", "study_router"]
