"""
Composition Root.

Centralized dependency wiring for the voice client.
All factory functions that instantiate adapters belong here to maintain
hexagonal architecture (domain NEVER imports from adapters).
"""

from rich.console import Console

from vocaflash.adapters.console_speech import ConsoleSpeechRecognizer, ConsoleSpeechSynthesizer
from vocaflash.client.flashcard_store import FlashcardStore
from vocaflash.domain.services.command_dispatcher import CommandDispatcher
from vocaflash.ports.flashcard_service import FlashcardService
from vocaflash.views.navigator import Navigator


def create_flashcard_store(base_url: str | None = None) -> FlashcardStore:
    """Create FlashcardStore for the configured REST API.

    Args:
        base_url: API root; defaults to API_BASE_URL

    Returns:
        FlashcardStore with a lazily created HTTP client
    """
    return FlashcardStore(base_url=base_url)


def create_console_dispatcher(
    console: Console,
    simulate_speech_duration: bool = False,
) -> tuple[CommandDispatcher, ConsoleSpeechRecognizer]:
    """Create a CommandDispatcher wired to console speech adapters.

    Typed lines entered while recognition is off toggle listening back on,
    like pressing the microphone button.

    Returns:
        The dispatcher and its recognizer (callers await `recognizer.closed`)
    """
    recognizer = ConsoleSpeechRecognizer()
    synthesizer = ConsoleSpeechSynthesizer(console, simulate_duration=simulate_speech_duration)
    dispatcher = CommandDispatcher(recognizer, synthesizer)

    async def resume_listening(_line: str) -> None:
        await dispatcher.toggle_listening()

    recognizer.on_idle_line = resume_listening
    return dispatcher, recognizer


def create_navigator(dispatcher: CommandDispatcher, store: FlashcardService) -> Navigator:
    """Create Navigator mounting views against dispatcher and store."""
    return Navigator(dispatcher, store)
