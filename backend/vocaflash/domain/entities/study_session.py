"""Study session entity: one review event against a flashcard."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4


@dataclass(frozen=True)
class StudySession:
    """Review event (immutable once recorded).

    Attributes:
        flashcard_id: Reviewed flashcard (not enforced by the store)
        result: Free-form label, e.g. "correct" / "incorrect"
        time_spent: Seconds spent on the card
        id: Unique identifier (UUID4)
        session_date: When the review happened
    """

    flashcard_id: str
    result: str | None
    time_spent: int | None
    id: str = field(default_factory=lambda: str(uuid4()))
    session_date: datetime = field(default_factory=lambda: datetime.now(UTC))
