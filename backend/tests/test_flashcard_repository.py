import pytest

from vocaflash.infrastructure.flashcard_repository import (
    FlashcardNotFoundError,
    FlashcardRepository,
)


@pytest.fixture
def repository(tmp_path):
    return FlashcardRepository(str(tmp_path / "cards.db"))


async def test_create_and_get(repository):
    card = await repository.create_flashcard("Hola", "Hello", "Language")
    loaded = await repository.get_flashcard(card.id)

    assert loaded.front == "Hola"
    assert loaded.category == "Language"
    assert loaded.review_count == 0
    assert loaded.last_reviewed is None
    assert loaded.created_at is not None


async def test_get_missing_raises(repository):
    with pytest.raises(FlashcardNotFoundError):
        await repository.get_flashcard("missing")


async def test_list_orders_newest_first(repository):
    first = await repository.create_flashcard("1", "one", "General")
    second = await repository.create_flashcard("2", "two", "General")
    cards = await repository.list_flashcards()
    assert [card.id for card in cards] == [second.id, first.id]


async def test_update_and_delete_missing(repository):
    with pytest.raises(FlashcardNotFoundError):
        await repository.update_flashcard("missing", "a", "b", "General")
    with pytest.raises(FlashcardNotFoundError):
        await repository.delete_flashcard("missing")


async def test_session_for_unknown_card_is_still_recorded(repository):
    await repository.record_study_session("ghost", "correct", 1)
    assert await repository.get_statistics() == (0, 1)


async def test_data_survives_reopen(tmp_path):
    path = str(tmp_path / "cards.db")
    card = await FlashcardRepository(path).create_flashcard("Q", "A", "Math")
    reopened = FlashcardRepository(path)
    assert (await reopened.get_flashcard(card.id)).back == "A"
