# Domain layer - Business logic (NO external dependencies)

from .entities import Flashcard, StudySession
from .value_objects import (
    ListeningState,
    QuizScore,
    RecognitionErrorKind,
    RecognitionResult,
    TranscriptSegment,
)

__all__ = [
    "Flashcard",
    "ListeningState",
    "QuizScore",
    "RecognitionErrorKind",
    "RecognitionResult",
    "StudySession",
    "TranscriptSegment",
]
