"""Flashcard creator: fill in a card by voice or by direct input."""

import logging
from enum import StrEnum

from vocaflash.client.flashcard_store import FlashcardStoreError
from vocaflash.domain.constants import CREATOR_CATEGORIES, DEFAULT_CATEGORY, SpokenMessages
from vocaflash.domain.services.command_vocabulary import VoiceCommand
from vocaflash.views.base import View

logger = logging.getLogger(__name__)


class CreatorField(StrEnum):
    FRONT = "front"
    BACK = "back"


class FlashcardCreatorView(View):
    """
    Build a new card from spoken input.

    Saying "front"/"question" or "answer" arms that field: the next finalized
    transcript becomes its value instead of being matched as a command.
    "back" is matched by the earlier cancel command, so only "answer" arms
    the back field.
    """

    route = "/create"

    def __init__(self, *args, **kwargs) -> None:
        self.front = ""
        self.back = ""
        self.category = DEFAULT_CATEGORY
        self.active_field: CreatorField | None = None
        super().__init__(*args, **kwargs)

    def build_commands(self) -> list[VoiceCommand]:
        return [
            VoiceCommand("save", ("save", "create"), self.save),
            VoiceCommand("cancel", ("cancel", "back"), self.cancel),
            VoiceCommand("front", ("front", "question"), self.arm_front),
            VoiceCommand("answer", ("back", "answer"), self.arm_back),
            *(
                VoiceCommand(f"category_{name.lower()}", (name.lower(),), self._category_setter(name))
                for name in CREATOR_CATEGORIES
            ),
            VoiceCommand("help", ("help",), self.announce_help),
        ]

    def _category_setter(self, name: str):
        async def set_category() -> None:
            self.set_category(name)
            self.speak(f"Category set to {name}")

        return set_category

    @property
    def can_save(self) -> bool:
        return bool(self.front.strip() and self.back.strip())

    async def handle_command(self, transcript: str) -> None:
        if self.active_field is None:
            await super().handle_command(transcript)
            return

        # Finalized words only, in their spoken casing
        value = self._dispatcher.final_transcript.strip() or transcript
        field, self.active_field = self.active_field, None
        if field is CreatorField.FRONT:
            self.set_front(value)
        else:
            self.set_back(value)
        self._dispatcher.clear_transcript()
        logger.debug("Creator field captured", extra={"field": str(field)})

    # =========================================================================
    # Direct input
    # =========================================================================

    def set_front(self, text: str) -> None:
        self.front = text

    def set_back(self, text: str) -> None:
        self.back = text

    def set_category(self, category: str) -> None:
        self.category = category

    # =========================================================================
    # Voice actions
    # =========================================================================

    async def arm_front(self) -> None:
        self.active_field = CreatorField.FRONT
        self._dispatcher.clear_transcript()
        self.speak(SpokenMessages.SPEAK_FRONT)

    async def arm_back(self) -> None:
        self.active_field = CreatorField.BACK
        self._dispatcher.clear_transcript()
        self.speak(SpokenMessages.SPEAK_BACK)

    async def announce_help(self) -> None:
        self.speak(SpokenMessages.CREATOR_HELP)

    async def cancel(self) -> None:
        await self._navigator.back()

    async def save(self) -> None:
        """Create the card; on success reset the form and go back."""
        if not self.can_save:
            self.speak(SpokenMessages.MISSING_CONTENT)
            return

        try:
            card = await self._store.create(self.front.strip(), self.back.strip(), self.category)
        except FlashcardStoreError as e:
            logger.warning(f"Creating flashcard failed: {e}")
            self.speak(SpokenMessages.CREATE_FAILED)
            return

        logger.info("Flashcard created", extra={"card_id": card.id, "category": card.category})
        self.front = ""
        self.back = ""
        self.category = DEFAULT_CATEGORY
        self.speak(SpokenMessages.CREATED)
        await self._navigator.back()
