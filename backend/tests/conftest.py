import asyncio

import pytest

from vocaflash.client.flashcard_store import FlashcardStoreError, FlashcardValidationError
from vocaflash.domain.entities.flashcard import Flashcard
from vocaflash.domain.services.command_dispatcher import CommandDispatcher
from vocaflash.domain.value_objects.transcript import RecognitionResult
from vocaflash.ports.speech import RecognitionError, RecognitionListener
from vocaflash.views.navigator import Navigator


class FakeRecognizer:
    """Recognizer driven by the test: say() delivers one final result."""

    def __init__(self):
        self.listener: RecognitionListener | None = None
        self.start_calls = 0
        self.stop_calls = 0
        self.start_error: str | None = None

    def attach(self, listener):
        self.listener = listener

    async def start(self):
        self.start_calls += 1
        if self.start_error is not None:
            raise RecognitionError(self.start_error)

    async def stop(self):
        self.stop_calls += 1

    async def say(self, text):
        await self.listener.on_result(RecognitionResult.final(text))

    async def fail(self, kind):
        await self.listener.on_error(kind)


class FakeSynthesizer:
    """Records every utterance that actually started."""

    def __init__(self):
        self.spoken: list[str] = []
        self.cancel_calls = 0
        self.hold: asyncio.Event | None = None

    async def speak(self, text):
        self.spoken.append(text)
        if self.hold is not None:
            await self.hold.wait()

    def cancel(self):
        self.cancel_calls += 1


class FakeFlashcardStore:
    """In-memory FlashcardService; set `fail_with` to make every call fail."""

    def __init__(self, cards=None):
        self._server_cards: list[Flashcard] = list(cards or [])
        self.flashcards: list[Flashcard] = []
        self.error: str | None = None
        self.fail_with: str | None = None
        self.sessions: list[tuple[str, str, int]] = []
        self._next_id = len(self._server_cards) + 1

    def _check(self):
        if self.fail_with is not None:
            self.error = self.fail_with
            raise FlashcardStoreError(self.fail_with, status_code=500)
        self.error = None

    async def list_flashcards(self, category=None):
        self._check()
        self.flashcards = [
            card for card in self._server_cards
            if category in (None, "all") or card.category == category
        ]
        return list(self.flashcards)

    async def create(self, front, back, category):
        if not front.strip() or not back.strip():
            raise FlashcardValidationError("Front and back content are required")
        self._check()
        card = Flashcard(id=str(self._next_id), front=front, back=back, category=category)
        self._next_id += 1
        self._server_cards.insert(0, card)
        self.flashcards = [card, *self.flashcards]
        return card

    async def update(self, card_id, front, back, category):
        self._check()
        updated = None
        for cards in (self._server_cards, self.flashcards):
            for i, card in enumerate(cards):
                if card.id == card_id:
                    updated = card.with_content(front, back, category)
                    cards[i] = updated
        if updated is None:
            raise FlashcardStoreError("Flashcard not found", status_code=404)
        return updated

    async def delete(self, card_id):
        self._check()
        self._server_cards = [card for card in self._server_cards if card.id != card_id]
        self.flashcards = [card for card in self.flashcards if card.id != card_id]

    async def list_categories(self):
        self._check()
        return sorted({card.category for card in self._server_cards})

    async def record_study_session(self, flashcard_id, result, time_spent):
        self._check()
        self.sessions.append((flashcard_id, result, time_spent))
        self.flashcards = [
            card.bump_review() if card.id == flashcard_id else card for card in self.flashcards
        ]

    async def get_statistics(self):
        self._check()
        return len(self._server_cards), len(self.sessions)


def make_cards(count, category="General"):
    return [
        Flashcard(id=str(i), front=f"Question {i}", back=f"Answer {i}", category=category)
        for i in range(1, count + 1)
    ]


@pytest.fixture
def recognizer():
    return FakeRecognizer()


@pytest.fixture
def synthesizer():
    return FakeSynthesizer()


@pytest.fixture
def dispatcher(recognizer, synthesizer):
    return CommandDispatcher(recognizer, synthesizer, restart_delay=0.01)


@pytest.fixture
def store():
    return FakeFlashcardStore(make_cards(3))


@pytest.fixture
def navigator(dispatcher, store):
    return Navigator(dispatcher, store)
