"""Domain entities."""

from .flashcard import Flashcard, FlashcardDict
from .study_session import StudySession

__all__ = ["Flashcard", "FlashcardDict", "StudySession"]
