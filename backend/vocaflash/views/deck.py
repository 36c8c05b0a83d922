"""Shared card navigation for the viewer and study screens."""

import logging

from vocaflash.client.flashcard_store import FlashcardStoreError
from vocaflash.domain.constants import ALL_CATEGORIES, SpokenMessages
from vocaflash.domain.entities.flashcard import Flashcard
from vocaflash.domain.services.command_vocabulary import VoiceCommand
from vocaflash.views.base import View

logger = logging.getLogger(__name__)


class CardDeckView(View):
    """
    A screen that steps through the cached cards one at a time.

    State:
        current_index: Position in the filtered cards, kept in [0, len-1]
        is_flipped: True while the back side is shown
        selected_category: Category filter ("all" for none)
    """

    def __init__(self, *args, **kwargs) -> None:
        self.current_index = 0
        self.is_flipped = False
        self.selected_category = ALL_CATEGORIES
        super().__init__(*args, **kwargs)

    def navigation_commands(self) -> list[VoiceCommand]:
        return [
            VoiceCommand("next", ("next",), self.next_card),
            VoiceCommand("previous", ("previous", "back"), self.previous_card),
            VoiceCommand("flip", ("flip",), self.flip_card),
            VoiceCommand("read", ("read",), self.read_card),
        ]

    # =========================================================================
    # Derived state
    # =========================================================================

    @property
    def cards(self) -> list[Flashcard]:
        """Cached cards matching the category filter."""
        if self.selected_category == ALL_CATEGORIES:
            return list(self._store.flashcards)
        return [card for card in self._store.flashcards if card.category == self.selected_category]

    @property
    def categories(self) -> list[str]:
        """Filter choices: "all" followed by categories in first-seen order."""
        return [ALL_CATEGORIES, *dict.fromkeys(card.category for card in self._store.flashcards)]

    @property
    def current_card(self) -> Flashcard | None:
        cards = self.cards
        if 0 <= self.current_index < len(cards):
            return cards[self.current_index]
        return None

    # =========================================================================
    # Actions
    # =========================================================================

    async def load_cards(self) -> bool:
        """Refresh the cache from the server; speaks on failure."""
        try:
            await self._store.list_flashcards()
        except FlashcardStoreError as e:
            logger.warning(f"Loading flashcards failed: {e}")
            self.speak(SpokenMessages.LOAD_FAILED)
            return False
        self._clamp_index()
        return True

    def select_category(self, category: str) -> None:
        self.selected_category = category
        self.current_index = 0
        self.is_flipped = False
        self.on_card_changed()

    async def next_card(self) -> None:
        count = len(self.cards)
        if count == 0:
            self.speak(SpokenMessages.NO_CARDS)
            return
        if self.current_index >= count - 1:
            self.speak(SpokenMessages.LAST_CARD)
            return

        self.current_index += 1
        self.is_flipped = False
        self.on_card_changed()
        self.speak(f"Card {self.current_index + 1} of {count}")

    async def previous_card(self) -> None:
        count = len(self.cards)
        if count == 0:
            self.speak(SpokenMessages.NO_CARDS)
            return
        if self.current_index <= 0:
            self.speak(SpokenMessages.FIRST_CARD)
            return

        self.current_index -= 1
        self.is_flipped = False
        self.on_card_changed()
        self.speak(f"Card {self.current_index + 1} of {count}")

    async def flip_card(self) -> None:
        """Toggle the shown side and speak it."""
        card = self.current_card
        if card is None:
            self.speak(SpokenMessages.NO_CARDS)
            return
        self.is_flipped = not self.is_flipped
        self.speak(card.side(self.is_flipped))

    async def read_card(self) -> None:
        """Speak the shown side without flipping."""
        card = self.current_card
        if card is None:
            self.speak(SpokenMessages.NO_CARDS)
            return
        self.speak(card.side(self.is_flipped))

    def on_card_changed(self) -> None:
        """Hook for subclasses; called whenever a different card is shown."""

    def _clamp_index(self) -> None:
        count = len(self.cards)
        if self.current_index > count - 1:
            self.current_index = max(0, count - 1)
            self.is_flipped = False
            self.on_card_changed()
