"""Domain value objects."""

from .quiz_score import QuizScore
from .recognition import ListeningState, RecognitionErrorKind
from .transcript import RecognitionResult, TranscriptSegment

__all__ = [
    "ListeningState",
    "QuizScore",
    "RecognitionErrorKind",
    "RecognitionResult",
    "TranscriptSegment",
]
