# Adapters layer - Concrete speech implementations (console)

from .console_speech import ConsoleSpeechRecognizer, ConsoleSpeechSynthesizer

__all__ = [
    "ConsoleSpeechRecognizer",
    "ConsoleSpeechSynthesizer",
]
