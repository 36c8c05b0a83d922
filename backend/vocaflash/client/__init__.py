"""Voice client data access."""

from .flashcard_store import FlashcardStore, FlashcardStoreError, FlashcardValidationError

__all__ = ["FlashcardStore", "FlashcardStoreError", "FlashcardValidationError"]
