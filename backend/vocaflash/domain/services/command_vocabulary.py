"""
Voice Command Vocabulary.

Matches finalized transcripts against an ordered list of spoken phrases.
Matching is plain substring containment: the first command (in declared
order) with any phrase contained in the transcript wins. Declared order is
the only tie-break, e.g. "incorrect" must be declared before "correct".
"""

import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

CommandAction = Callable[[], Awaitable[None]]
CommandGuard = Callable[[], bool]


@dataclass(frozen=True)
class VoiceCommand:
    """One vocabulary entry: phrases that trigger an action.

    Attributes:
        name: Identifier used in logs and tests
        phrases: Lower-case phrases checked by substring containment
        action: Coroutine function run on match
        when: Optional guard; the command is skipped while it returns False
    """

    name: str
    phrases: tuple[str, ...]
    action: CommandAction
    when: CommandGuard | None = None

    def is_enabled(self) -> bool:
        return self.when is None or self.when()

    def find_phrase(self, transcript: str) -> str | None:
        """Return the first phrase contained in the transcript."""
        for phrase in self.phrases:
            if phrase in transcript:
                return phrase
        return None


@dataclass(frozen=True)
class CommandMatch:
    """Result of matching a transcript (immutable value object)."""

    command: VoiceCommand
    phrase: str
    transcript: str


class CommandVocabulary:
    """Ordered set of voice commands for one screen."""

    def __init__(self, commands: Iterable[VoiceCommand]) -> None:
        self._commands = tuple(commands)

    @property
    def commands(self) -> tuple[VoiceCommand, ...]:
        return self._commands

    def match(self, transcript: str) -> CommandMatch | None:
        """
        Find the command for a transcript.

        Args:
            transcript: Finalized, lower-cased transcript

        Returns:
            First enabled matching command, or None if nothing matches
        """
        for command in self._commands:
            if not command.is_enabled():
                continue
            phrase = command.find_phrase(transcript)
            if phrase is not None:
                return CommandMatch(command=command, phrase=phrase, transcript=transcript)
        return None

    async def dispatch(self, transcript: str) -> CommandMatch | None:
        """Match a transcript and run the winning command's action."""
        match = self.match(transcript)
        if match is None:
            logger.debug("No command matched", extra={"transcript": transcript})
            return None

        logger.info(
            "Voice command matched",
            extra={"command": match.command.name, "phrase": match.phrase},
        )
        await match.command.action()
        return match
