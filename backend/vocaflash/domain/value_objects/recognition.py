"""Recognition error kinds and listening state."""

from enum import StrEnum


class RecognitionErrorKind(StrEnum):
    """Error kinds reported by a speech recognizer.

    Values follow the browser SpeechRecognition error codes.
    """

    NO_SPEECH = "no-speech"
    NETWORK = "network"
    ABORTED = "aborted"
    AUDIO_CAPTURE = "audio-capture"
    NOT_ALLOWED = "not-allowed"
    SERVICE_NOT_ALLOWED = "service-not-allowed"
    LANGUAGE_NOT_SUPPORTED = "language-not-supported"
    BAD_GRAMMAR = "bad-grammar"

    @classmethod
    def parse(cls, value: "str | RecognitionErrorKind") -> "RecognitionErrorKind | None":
        """Map a raw error code to a kind; None for unknown codes."""
        try:
            return cls(value)
        except ValueError:
            return None

    def is_transient(self) -> bool:
        """Check if recognition should restart automatically after this error."""
        return self in (RecognitionErrorKind.NO_SPEECH, RecognitionErrorKind.NETWORK)


class ListeningState(StrEnum):
    """Dispatcher listening states.

    State machine:
        IDLE --start_listening--> LISTENING
        LISTENING --stop_listening / fatal error / recognition end--> IDLE
        LISTENING --transient error--> IDLE --(1s delayed restart)--> LISTENING
    """

    IDLE = "idle"
    LISTENING = "listening"
