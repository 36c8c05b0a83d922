"""Flashcard entity representing one question/answer study unit."""

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Any, Self, TypedDict

from vocaflash.domain.constants import DEFAULT_CATEGORY, DEFAULT_DIFFICULTY_LEVEL


class FlashcardDict(TypedDict):
    """Flashcard data structure for serialization."""

    id: str
    front: str
    back: str
    category: str
    created_at: str | None
    last_reviewed: str | None
    review_count: int
    difficulty_level: int


def _parse_timestamp(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


@dataclass(frozen=True)
class Flashcard:
    """Flashcard entity.

    Attributes:
        id: Unique identifier (UUID4 string), immutable
        front: Question/prompt side of the card
        back: Answer side of the card
        category: Free-text grouping label
        created_at: Creation timestamp (absent in create/update echoes)
        last_reviewed: Timestamp of the most recent study session
        review_count: Number of recorded study sessions
        difficulty_level: Stored but unused by any algorithm
    """

    id: str
    front: str
    back: str
    category: str = DEFAULT_CATEGORY
    created_at: datetime | None = None
    last_reviewed: datetime | None = None
    review_count: int = 0
    difficulty_level: int = DEFAULT_DIFFICULTY_LEVEL

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Build a flashcard from a JSON object or database row."""
        return cls(
            id=str(data["id"]),
            front=data["front"],
            back=data["back"],
            category=data.get("category") or DEFAULT_CATEGORY,
            created_at=_parse_timestamp(data.get("created_at")),
            last_reviewed=_parse_timestamp(data.get("last_reviewed")),
            review_count=int(data.get("review_count") or 0),
            difficulty_level=int(data.get("difficulty_level") or DEFAULT_DIFFICULTY_LEVEL),
        )

    def with_content(self, front: str, back: str, category: str) -> Self:
        """Return a copy with edited content; identity and history are kept."""
        return replace(self, front=front, back=back, category=category)

    def bump_review(self) -> Self:
        """Return a copy reflecting one more recorded study session."""
        return replace(self, review_count=self.review_count + 1, last_reviewed=datetime.now(UTC))

    def side(self, flipped: bool) -> str:
        """Text of the side currently shown."""
        return self.back if flipped else self.front

    def to_dict(self) -> FlashcardDict:
        """Convert flashcard to a JSON-compatible dictionary."""
        return {
            "id": self.id,
            "front": self.front,
            "back": self.back,
            "category": self.category,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "last_reviewed": self.last_reviewed.isoformat() if self.last_reviewed else None,
            "review_count": self.review_count,
            "difficulty_level": self.difficulty_level,
        }
