"""Port interfaces for speech services (recognition / synthesis)."""

from typing import Protocol, runtime_checkable

from vocaflash.domain.value_objects.recognition import RecognitionErrorKind
from vocaflash.domain.value_objects.transcript import RecognitionResult


class RecognitionError(Exception):
    """Raised by a recognizer that cannot start or continue."""

    def __init__(self, kind: RecognitionErrorKind | str, message: str = ""):
        self.kind = kind
        super().__init__(message or str(kind))


@runtime_checkable
class RecognitionListener(Protocol):
    """Receiver of recognition events (the command dispatcher)."""

    async def on_result(self, result: RecognitionResult) -> None:
        """Handle one batch of interim/final segments."""
        ...

    async def on_error(self, kind: RecognitionErrorKind | str) -> None:
        """Handle a recognition error reported by the engine."""
        ...

    async def on_end(self) -> None:
        """Handle recognition ending on its own (e.g. silence timeout)."""
        ...


@runtime_checkable
class SpeechRecognizer(Protocol):
    """Continuous speech-to-text port.

    Implementations deliver events to the attached listener in the order
    the engine produces them.
    """

    def attach(self, listener: RecognitionListener) -> None:
        """Set the event receiver."""
        ...

    async def start(self) -> None:
        """Begin continuous recognition.

        Raises:
            RecognitionError: If recognition cannot start
        """
        ...

    async def stop(self) -> None:
        """End recognition. Results already in flight may still arrive."""
        ...


@runtime_checkable
class SpeechSynthesizer(Protocol):
    """Text-to-speech port interface."""

    async def speak(self, text: str) -> None:
        """Speak text; returns when the utterance has finished."""
        ...

    def cancel(self) -> None:
        """Cancel the utterance in progress, if any."""
        ...
