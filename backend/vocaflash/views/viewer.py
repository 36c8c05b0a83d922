"""Flashcard viewer: browse cards and delete them by voice."""

import logging

from vocaflash.client.flashcard_store import FlashcardStoreError
from vocaflash.domain.constants import SpokenMessages
from vocaflash.domain.services.command_vocabulary import CommandVocabulary, VoiceCommand
from vocaflash.views.deck import CardDeckView

logger = logging.getLogger(__name__)


class FlashcardViewerView(CardDeckView):
    """
    Browse cards with next / previous / flip / read, and delete with a
    spoken confirmation.

    Saying "delete" swaps in a one-shot confirmation handler: the next
    finalized transcript is matched only against yes/confirm and no/cancel
    (anything else cancels), then the viewer's own handler is restored.
    """

    route = "/view"

    def __init__(self, *args, **kwargs) -> None:
        self.pending_delete_id: str | None = None
        super().__init__(*args, **kwargs)
        self.confirmation_vocabulary = CommandVocabulary(
            [
                VoiceCommand("confirm_delete", ("yes", "confirm"), self._delete_confirmed),
                VoiceCommand("cancel_delete", ("no", "cancel"), self._delete_cancelled),
            ]
        )

    def build_commands(self) -> list[VoiceCommand]:
        return [
            *self.navigation_commands(),
            VoiceCommand("delete", ("delete",), self.request_delete),
            VoiceCommand("help", ("help",), self.announce_help),
        ]

    @property
    def is_confirming_delete(self) -> bool:
        return self.pending_delete_id is not None

    async def on_mount(self) -> None:
        if not await self.load_cards():
            return
        count = len(self.cards)
        if self._dispatcher.is_listening and count > 0:
            self.speak(
                f"Viewing flashcard {self.current_index + 1} of {count}. "
                'Voice commands: "next card", "previous card", "flip card", '
                '"read card", "delete card", "help"'
            )

    async def announce_help(self) -> None:
        self.speak(SpokenMessages.VIEWER_HELP)

    # =========================================================================
    # Delete with confirmation
    # =========================================================================

    async def request_delete(self) -> None:
        """Ask for confirmation before deleting the current card."""
        card = self.current_card
        if card is None:
            self.speak(SpokenMessages.NO_CARDS)
            return

        self.pending_delete_id = card.id
        self._registration = self._dispatcher.register_command_handler(self.handle_confirmation)
        self.speak(
            f"Are you sure you want to delete the flashcard: {card.front}? "
            'Say "yes" to confirm or "no" to cancel'
        )

    async def handle_confirmation(self, transcript: str) -> None:
        """One-shot handler active while a delete awaits confirmation."""
        self._registration = self._dispatcher.register_command_handler(self.handle_command)
        match = await self.confirmation_vocabulary.dispatch(transcript)
        if match is None:
            await self._delete_cancelled()

    async def _delete_confirmed(self) -> None:
        card_id, self.pending_delete_id = self.pending_delete_id, None
        if card_id is None:
            return
        await self.delete_card(card_id)

    async def _delete_cancelled(self) -> None:
        self.pending_delete_id = None
        self.speak(SpokenMessages.DELETE_CANCELLED)

    async def delete_card(self, card_id: str) -> None:
        """Delete without confirmation (used once the user has confirmed)."""
        try:
            await self._store.delete(card_id)
        except FlashcardStoreError as e:
            logger.warning(f"Deleting flashcard {card_id} failed: {e}")
            self.speak(SpokenMessages.DELETE_FAILED)
            return

        self.speak(SpokenMessages.DELETED)
        self._clamp_index()
