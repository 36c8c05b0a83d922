"""Infrastructure layer - persistence and resilience."""

from .flashcard_repository import FlashcardNotFoundError, FlashcardRepository
from .retry import retry_operation

__all__ = [
    "FlashcardNotFoundError",
    "FlashcardRepository",
    "retry_operation",
]
