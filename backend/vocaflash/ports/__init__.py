# Ports layer - Interface definitions (Protocols)

from .flashcard_service import FlashcardService
from .speech import RecognitionError, RecognitionListener, SpeechRecognizer, SpeechSynthesizer

__all__ = [
    "FlashcardService",
    "RecognitionError",
    "RecognitionListener",
    "SpeechRecognizer",
    "SpeechSynthesizer",
]
