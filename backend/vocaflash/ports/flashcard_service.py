"""Port interface for the flashcard store used by the views."""

from typing import Protocol, runtime_checkable

from vocaflash.domain.entities.flashcard import Flashcard


@runtime_checkable
class FlashcardService(Protocol):
    """Port for flashcard operations.

    Abstracts the REST-backed store so views don't know about HTTP.
    Implementations cache the most recently listed cards in `flashcards`.
    """

    flashcards: list[Flashcard]
    error: str | None

    async def list_flashcards(self, category: str | None = None) -> list[Flashcard]:
        """Replace the cached list with the server's cards.

        Args:
            category: Category filter; None or "all" for every card

        Returns:
            Cards, newest first
        """
        ...

    async def create(self, front: str, back: str, category: str) -> Flashcard:
        """Create a card and prepend it to the cached list."""
        ...

    async def update(self, card_id: str, front: str, back: str, category: str) -> Flashcard:
        """Update a card and replace it in the cached list."""
        ...

    async def delete(self, card_id: str) -> None:
        """Delete a card and remove it from the cached list."""
        ...

    async def list_categories(self) -> list[str]:
        """Get distinct category names, sorted."""
        ...

    async def record_study_session(
        self, flashcard_id: str, result: str, time_spent: int
    ) -> None:
        """Record one review event for a card."""
        ...

    async def get_statistics(self) -> tuple[int, int]:
        """Get (total cards, total study sessions)."""
        ...
