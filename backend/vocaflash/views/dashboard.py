"""Dashboard: collection summary and entry point to the other screens."""

import logging

from vocaflash.client.flashcard_store import FlashcardStoreError
from vocaflash.domain.constants import SpokenMessages
from vocaflash.domain.entities.flashcard import Flashcard
from vocaflash.domain.services.command_vocabulary import VoiceCommand
from vocaflash.views.base import View

logger = logging.getLogger(__name__)

RECENT_CARD_LIMIT = 5


class DashboardView(View):
    route = "/"

    def build_commands(self) -> list[VoiceCommand]:
        return [
            VoiceCommand("create", ("create",), self.open_creator),
            VoiceCommand("view", ("view", "browse", "show cards"), self.open_viewer),
            VoiceCommand("study", ("study", "quiz"), self.open_study),
            VoiceCommand("statistics", ("statistics", "stats"), self.announce_statistics),
            VoiceCommand("help", ("help",), self.announce_help),
        ]

    @property
    def total_cards(self) -> int:
        return len(self._store.flashcards)

    @property
    def category_count(self) -> int:
        return len({card.category for card in self._store.flashcards})

    @property
    def studied_count(self) -> int:
        """Cards reviewed at least once."""
        return sum(1 for card in self._store.flashcards if card.review_count > 0)

    @property
    def recent_cards(self) -> list[Flashcard]:
        return self._store.flashcards[:RECENT_CARD_LIMIT]

    async def on_mount(self) -> None:
        try:
            await self._store.list_flashcards()
        except FlashcardStoreError as e:
            logger.warning(f"Loading flashcards failed: {e}")
            self.speak(SpokenMessages.LOAD_FAILED)
            return

        if self._dispatcher.is_listening:
            self.speak(
                f"Dashboard loaded. You have {self.total_cards} flashcards. "
                'Say "create new flashcard" to start creating'
            )

    async def open_creator(self) -> None:
        await self._navigator.navigate("/create")

    async def open_viewer(self) -> None:
        await self._navigator.navigate("/view")

    async def open_study(self) -> None:
        await self._navigator.navigate("/study")

    async def announce_statistics(self) -> None:
        try:
            total_cards, total_sessions = await self._store.get_statistics()
        except FlashcardStoreError as e:
            logger.warning(f"Loading statistics failed: {e}")
            self.speak(SpokenMessages.STATISTICS_FAILED)
            return
        self.speak(f"You have {total_cards} flashcards and {total_sessions} study sessions")

    async def announce_help(self) -> None:
        self._dispatcher.announce_help()
