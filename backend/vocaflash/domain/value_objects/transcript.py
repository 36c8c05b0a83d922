"""Speech recognition value objects."""

from dataclasses import dataclass
from typing import Self


@dataclass(frozen=True)
class TranscriptSegment:
    """One recognized span of speech.

    Interim segments may still change; final segments are complete.
    """

    text: str
    is_final: bool
    confidence: float = 1.0


@dataclass(frozen=True)
class RecognitionResult:
    """A batch of segments delivered by one recognition result event."""

    segments: tuple[TranscriptSegment, ...]

    @classmethod
    def final(cls, text: str, confidence: float = 1.0) -> Self:
        """Result holding a single finalized segment."""
        return cls(segments=(TranscriptSegment(text=text, is_final=True, confidence=confidence),))

    @classmethod
    def interim(cls, text: str, confidence: float = 1.0) -> Self:
        """Result holding a single interim segment."""
        return cls(segments=(TranscriptSegment(text=text, is_final=False, confidence=confidence),))

    @property
    def display_text(self) -> str:
        """Interim and final text concatenated, as shown to the user."""
        return "".join(segment.text for segment in self.segments)

    @property
    def final_text(self) -> str:
        """Only the finalized portion of the batch."""
        return "".join(segment.text for segment in self.segments if segment.is_final)

    @property
    def command_text(self) -> str:
        """Finalized text normalized for command matching (lower-cased)."""
        return self.final_text.lower()
