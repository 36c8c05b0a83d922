"""SQLite-based flashcard repository.

Persists flashcards and study sessions for the REST service.
Uses async-safe operations with threading.
"""

import asyncio
import sqlite3
from datetime import UTC, datetime
from pathlib import Path
from uuid import uuid4

from vocaflash.domain.constants import ALL_CATEGORIES, DEFAULT_CATEGORY
from vocaflash.domain.entities.flashcard import Flashcard
from vocaflash.domain.entities.study_session import StudySession


class FlashcardNotFoundError(Exception):
    """Raised when no flashcard has the requested id."""

    def __init__(self, card_id: str):
        self.card_id = card_id
        super().__init__(f"Flashcard {card_id} not found")


class FlashcardRepository:
    """SQLite-based flashcard store.

    Thread-safe async operations using asyncio.Lock and to_thread.
    """

    def __init__(self, db_path: str = "flashcards.db"):
        """Initialize repository.

        Args:
            db_path: Path to SQLite database file

        Database tables are created synchronously on construction.
        """
        self._db_path = Path(db_path)
        self._lock = asyncio.Lock()
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        """Create SQLite connection with row access by column name."""
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA synchronous=NORMAL")
        return conn

    def _init_db(self) -> None:
        """Initialize database schema."""
        with self._connect() as conn:
            # WAL mode persists to database file (only needs to be set once)
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS flashcards (
                    id TEXT PRIMARY KEY,
                    front TEXT NOT NULL,
                    back TEXT NOT NULL,
                    category TEXT DEFAULT 'General',
                    created_at TEXT NOT NULL,
                    last_reviewed TEXT,
                    review_count INTEGER DEFAULT 0,
                    difficulty_level INTEGER DEFAULT 1
                )
            """
            )
            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_flashcards_category
                ON flashcards(category)
            """
            )
            # flashcard_id is not enforced: sessions may outlive their card
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS study_sessions (
                    id TEXT PRIMARY KEY,
                    flashcard_id TEXT,
                    session_date TEXT NOT NULL,
                    result TEXT,
                    time_spent INTEGER,
                    FOREIGN KEY (flashcard_id) REFERENCES flashcards (id)
                )
            """
            )

    # =========================================================================
    # Flashcards
    # =========================================================================

    async def list_flashcards(self, category: str | None = None) -> list[Flashcard]:
        """Get flashcards newest first, optionally filtered by category."""
        async with self._lock:
            return await asyncio.to_thread(self._list_sync, category)

    def _list_sync(self, category: str | None) -> list[Flashcard]:
        with self._connect() as conn:
            if category and category != ALL_CATEGORIES:
                rows = conn.execute(
                    """
                    SELECT * FROM flashcards WHERE category = ?
                    ORDER BY created_at DESC, rowid DESC
                    """,
                    (category,),
                ).fetchall()
            else:
                rows = conn.execute(
                    "SELECT * FROM flashcards ORDER BY created_at DESC, rowid DESC"
                ).fetchall()
            return [Flashcard.from_dict(dict(row)) for row in rows]

    async def get_flashcard(self, card_id: str) -> Flashcard:
        """Get one flashcard.

        Raises:
            FlashcardNotFoundError: If no card has this id
        """
        async with self._lock:
            return await asyncio.to_thread(self._get_sync, card_id)

    def _get_sync(self, card_id: str) -> Flashcard:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM flashcards WHERE id = ?", (card_id,)).fetchone()
            if row is None:
                raise FlashcardNotFoundError(card_id)
            return Flashcard.from_dict(dict(row))

    async def create_flashcard(
        self, front: str, back: str, category: str = DEFAULT_CATEGORY
    ) -> Flashcard:
        """Insert a new flashcard with a generated UUID4 id."""
        async with self._lock:
            return await asyncio.to_thread(self._create_sync, front, back, category)

    def _create_sync(self, front: str, back: str, category: str) -> Flashcard:
        card = Flashcard(
            id=str(uuid4()),
            front=front,
            back=back,
            category=category,
            created_at=datetime.now(UTC),
        )
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO flashcards (id, front, back, category, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (card.id, card.front, card.back, card.category, card.created_at.isoformat()),
            )
        return card

    async def update_flashcard(self, card_id: str, front: str, back: str, category: str) -> None:
        """Replace a flashcard's content.

        Raises:
            FlashcardNotFoundError: If no row changed
        """
        async with self._lock:
            await asyncio.to_thread(self._update_sync, card_id, front, back, category)

    def _update_sync(self, card_id: str, front: str, back: str, category: str) -> None:
        with self._connect() as conn:
            cursor = conn.execute(
                "UPDATE flashcards SET front = ?, back = ?, category = ? WHERE id = ?",
                (front, back, category, card_id),
            )
            if cursor.rowcount == 0:
                raise FlashcardNotFoundError(card_id)

    async def delete_flashcard(self, card_id: str) -> None:
        """Delete a flashcard.

        Raises:
            FlashcardNotFoundError: If no row was deleted
        """
        async with self._lock:
            await asyncio.to_thread(self._delete_sync, card_id)

    def _delete_sync(self, card_id: str) -> None:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM flashcards WHERE id = ?", (card_id,))
            if cursor.rowcount == 0:
                raise FlashcardNotFoundError(card_id)

    async def list_categories(self) -> list[str]:
        """Get distinct categories in use, sorted."""
        async with self._lock:
            return await asyncio.to_thread(self._categories_sync)

    def _categories_sync(self) -> list[str]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT DISTINCT category FROM flashcards ORDER BY category"
            ).fetchall()
            return [row["category"] for row in rows]

    # =========================================================================
    # Study sessions
    # =========================================================================

    async def record_study_session(
        self,
        flashcard_id: str,
        result: str | None,
        time_spent: int | None,
    ) -> StudySession:
        """Record a review and bump the card's review count.

        The card update is skipped silently when the id is unknown.
        """
        async with self._lock:
            return await asyncio.to_thread(
                self._record_session_sync, flashcard_id, result, time_spent
            )

    def _record_session_sync(
        self,
        flashcard_id: str,
        result: str | None,
        time_spent: int | None,
    ) -> StudySession:
        session = StudySession(flashcard_id=flashcard_id, result=result, time_spent=time_spent)
        reviewed_at = session.session_date.isoformat()
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO study_sessions (id, flashcard_id, session_date, result, time_spent)
                VALUES (?, ?, ?, ?, ?)
                """,
                (session.id, flashcard_id, reviewed_at, result, time_spent),
            )
            conn.execute(
                """
                UPDATE flashcards
                SET review_count = review_count + 1, last_reviewed = ?
                WHERE id = ?
                """,
                (reviewed_at, flashcard_id),
            )
        return session

    async def get_statistics(self) -> tuple[int, int]:
        """Get (total flashcards, total study sessions)."""
        async with self._lock:
            return await asyncio.to_thread(self._statistics_sync)

    def _statistics_sync(self) -> tuple[int, int]:
        with self._connect() as conn:
            total_cards = conn.execute("SELECT COUNT(*) FROM flashcards").fetchone()[0]
            total_sessions = conn.execute("SELECT COUNT(*) FROM study_sessions").fetchone()[0]
            return total_cards, total_sessions
