"""Domain services - voice command matching and dispatch."""

from .command_dispatcher import (
    CommandDispatcher,
    CommandHandler,
    HandlerRegistration,
)
from .command_vocabulary import (
    CommandAction,
    CommandMatch,
    CommandVocabulary,
    VoiceCommand,
)

__all__ = [
    # Command dispatcher
    "CommandDispatcher",
    "CommandHandler",
    "HandlerRegistration",
    # Command vocabulary
    "CommandAction",
    "CommandMatch",
    "CommandVocabulary",
    "VoiceCommand",
]
