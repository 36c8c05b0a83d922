"""Base class for screens that interpret voice commands."""

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from vocaflash.domain.services.command_dispatcher import CommandDispatcher, HandlerRegistration
from vocaflash.domain.services.command_vocabulary import CommandVocabulary, VoiceCommand
from vocaflash.ports.flashcard_service import FlashcardService

if TYPE_CHECKING:
    from vocaflash.views.navigator import Navigator

logger = logging.getLogger(__name__)

HOME_ROUTE = "/"


class View(ABC):
    """
    A screen with its own command vocabulary.

    Mounting registers the view's handler with the dispatcher; unmounting
    cancels that registration, so a later view's handler is never cleared
    by an earlier one.
    """

    route: ClassVar[str]

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        store: FlashcardService,
        navigator: "Navigator",
    ) -> None:
        self._dispatcher = dispatcher
        self._store = store
        self._navigator = navigator
        self._registration: HandlerRegistration | None = None
        self.vocabulary = CommandVocabulary([*self.build_commands(), *self._shell_commands()])

    @abstractmethod
    def build_commands(self) -> list[VoiceCommand]:
        """Screen-specific commands, in match priority order."""

    def _shell_commands(self) -> list[VoiceCommand]:
        """Commands every screen shares, matched after its own."""
        commands = [
            VoiceCommand("stop_listening", ("stop listening", "stop"), self._dispatcher.stop_listening),
        ]
        if self.route != HOME_ROUTE:
            commands.insert(
                0, VoiceCommand("go_home", ("go home", "dashboard"), self.go_home)
            )
        return commands

    @property
    def is_mounted(self) -> bool:
        return self._registration is not None and self._registration.is_active

    async def mount(self) -> None:
        """Register the command handler and run screen setup."""
        self._registration = self._dispatcher.register_command_handler(self.handle_command)
        logger.debug("View mounted", extra={"route": self.route})
        await self.on_mount()

    async def unmount(self) -> None:
        if self._registration is not None:
            self._registration.cancel()
            self._registration = None
        logger.debug("View unmounted", extra={"route": self.route})

    async def on_mount(self) -> None:
        """Load data and announce the screen."""

    async def handle_command(self, transcript: str) -> None:
        await self.vocabulary.dispatch(transcript)

    def speak(self, text: str) -> None:
        self._dispatcher.speak(text)

    async def go_home(self) -> None:
        await self._navigator.navigate(HOME_ROUTE)
