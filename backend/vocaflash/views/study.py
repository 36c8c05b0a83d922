"""Study mode: review cards and run a scored quiz."""

import logging
import time

from vocaflash.client.flashcard_store import FlashcardStoreError
from vocaflash.domain.constants import SpokenMessages
from vocaflash.domain.services.command_vocabulary import VoiceCommand
from vocaflash.domain.value_objects.quiz_score import QuizScore
from vocaflash.views.deck import CardDeckView

logger = logging.getLogger(__name__)


class StudyModeView(CardDeckView):
    """
    Review cards; in quiz mode each card is marked correct or incorrect.

    Every mark records a study session for the card (result and seconds
    spent on it) before moving on.
    """

    route = "/study"

    def __init__(self, *args, **kwargs) -> None:
        self.is_quiz_mode = False
        self.score = QuizScore()
        self._card_shown_at = time.monotonic()
        super().__init__(*args, **kwargs)

    def build_commands(self) -> list[VoiceCommand]:
        in_quiz = lambda: self.is_quiz_mode  # noqa: E731
        return [
            VoiceCommand("start_quiz", ("start quiz",), self.start_quiz),
            VoiceCommand("end_quiz", ("end quiz", "stop quiz"), self.end_quiz),
            # "incorrect" contains "correct": keep it first
            VoiceCommand("mark_incorrect", ("incorrect", "wrong"), self.mark_incorrect, when=in_quiz),
            VoiceCommand("mark_correct", ("correct", "right"), self.mark_correct, when=in_quiz),
            *self.navigation_commands(),
            VoiceCommand("help", ("help",), self.announce_help),
        ]

    async def on_mount(self) -> None:
        if not await self.load_cards():
            return
        count = len(self.cards)
        if self._dispatcher.is_listening and count > 0:
            mode = "quiz" if self.is_quiz_mode else "study"
            self.speak(
                f"{mode} mode. Card {self.current_index + 1} of {count}. "
                'Say "flip card" to see the answer'
            )

    async def announce_help(self) -> None:
        self.speak(SpokenMessages.STUDY_HELP)

    def on_card_changed(self) -> None:
        self._card_shown_at = time.monotonic()

    # =========================================================================
    # Quiz
    # =========================================================================

    async def start_quiz(self) -> None:
        self.is_quiz_mode = True
        self.score = QuizScore()
        self.current_index = 0
        self.is_flipped = False
        self.on_card_changed()
        self.speak(SpokenMessages.QUIZ_STARTED)

    async def end_quiz(self) -> None:
        self.is_quiz_mode = False
        self.speak(
            f"Quiz ended. You got {self.score.correct} out of {self.score.total} correct. "
            f"That's {self.score.percentage} percent"
        )

    async def mark_correct(self) -> None:
        self.score = self.score.mark_correct()
        await self._record_result("correct")
        self.speak(SpokenMessages.MARKED_CORRECT)
        await self.next_card()

    async def mark_incorrect(self) -> None:
        self.score = self.score.mark_incorrect()
        await self._record_result("incorrect")
        self.speak(SpokenMessages.MARKED_INCORRECT)
        await self.next_card()

    async def _record_result(self, result: str) -> None:
        card = self.current_card
        if card is None:
            return
        time_spent = int(time.monotonic() - self._card_shown_at)
        try:
            await self._store.record_study_session(card.id, result, time_spent)
        except FlashcardStoreError as e:
            # The score is kept locally even when the server is unreachable
            logger.warning(f"Recording study session for {card.id} failed: {e}")
