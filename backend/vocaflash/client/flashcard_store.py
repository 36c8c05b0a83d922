"""REST-backed flashcard store for the voice client.

Each operation performs one HTTP call and keeps an in-memory copy of the
most recently listed cards in sync with successful writes.
"""

import logging
from typing import Any

import httpx

from vocaflash.config import get_api_base_url, get_api_timeout
from vocaflash.domain.constants import ALL_CATEGORIES
from vocaflash.domain.entities.flashcard import Flashcard
from vocaflash.infrastructure.retry import retry_operation

logger = logging.getLogger(__name__)


class FlashcardStoreError(Exception):
    """A store operation failed; the message is safe to show or speak."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class FlashcardValidationError(FlashcardStoreError):
    """Rejected client-side before any network call."""


class FlashcardStore:
    """HTTP client for the Voca-Flash REST API implementing FlashcardService.

    Attributes:
        flashcards: Cached cards from the last list, kept in sync with writes
        loading: True while a request is in flight
        error: Message of the last failed operation (cleared on each call)

    Uses lazy client initialization for connection reuse.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize store.

        Args:
            base_url: API root, e.g. http://localhost:5000/api
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use MockTransport)
        """
        self._base_url = (base_url or get_api_base_url()).rstrip("/")
        self._timeout = timeout if timeout is not None else get_api_timeout()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

        self.flashcards: list[Flashcard] = []
        self.loading = False
        self.error: str | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Lazy client initialization for connection reuse."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        failure_message: str,
        **kwargs: Any,
    ) -> Any:
        """Send one request and decode the JSON body.

        Args:
            method: HTTP method
            path: Path relative to the API root
            failure_message: Generic message used when the body has no `error`
            **kwargs: Passed to httpx (json, params)

        Raises:
            FlashcardStoreError: On transport failure, non-2xx status or a
                body that is not JSON
        """
        client = await self._get_client()
        self.loading = True
        self.error = None
        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            self.error = failure_message
            raise FlashcardStoreError(failure_message) from e
        finally:
            self.loading = False

        if response.is_error:
            message = self._error_message(response) or failure_message
            logger.warning(
                f"{method} {path} returned {response.status_code}",
                extra={"status_code": response.status_code, "error": message},
            )
            self.error = message
            raise FlashcardStoreError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError:
            # e.g. an HTML page from a server that is not the flashcard API
            logger.warning(f"{method} {path} returned a non-JSON body")
            self.error = failure_message
            raise FlashcardStoreError(failure_message, status_code=response.status_code) from None

    @staticmethod
    def _error_message(response: httpx.Response) -> str | None:
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict) and isinstance(body.get("error"), str):
            return body["error"]
        return None

    # =========================================================================
    # Flashcards
    # =========================================================================

    async def list_flashcards(self, category: str | None = None) -> list[Flashcard]:
        """Fetch cards and replace the cached list wholesale."""
        params = {"category": category} if category and category != ALL_CATEGORIES else {}
        data = await self._request(
            "GET", "/flashcards", "Failed to fetch flashcards", params=params
        )
        self.flashcards = [Flashcard.from_dict(item) for item in data]
        return list(self.flashcards)

    async def get(self, card_id: str) -> Flashcard:
        """Fetch a single card (cache untouched)."""
        data = await self._request("GET", f"/flashcards/{card_id}", "Failed to fetch flashcard")
        return Flashcard.from_dict(data)

    async def create(self, front: str, back: str, category: str) -> Flashcard:
        """Create a card and prepend it to the cache.

        Raises:
            FlashcardValidationError: If front or back is blank (no request sent)
        """
        if not front.strip() or not back.strip():
            self.error = "Front and back content are required"
            raise FlashcardValidationError(self.error)

        data = await self._request(
            "POST",
            "/flashcards",
            "Failed to create flashcard",
            json={"front": front, "back": back, "category": category},
        )
        card = Flashcard.from_dict(data)
        self.flashcards = [card, *self.flashcards]
        return card

    async def update(self, card_id: str, front: str, back: str, category: str) -> Flashcard:
        """Update a card and replace it in the cache.

        The server echoes only content fields, so a cached card keeps its
        timestamps and review count.
        """
        data = await self._request(
            "PUT",
            f"/flashcards/{card_id}",
            "Failed to update flashcard",
            json={"front": front, "back": back, "category": category},
        )
        existing = next((card for card in self.flashcards if card.id == card_id), None)
        if existing is not None:
            updated = existing.with_content(data["front"], data["back"], data["category"])
        else:
            updated = Flashcard.from_dict(data)

        self.flashcards = [updated if card.id == card_id else card for card in self.flashcards]
        return updated

    async def delete(self, card_id: str) -> None:
        """Delete a card and drop it from the cache."""
        await self._request("DELETE", f"/flashcards/{card_id}", "Failed to delete flashcard")
        self.flashcards = [card for card in self.flashcards if card.id != card_id]

    async def list_categories(self) -> list[str]:
        return await self._request("GET", "/categories", "Failed to fetch categories")

    # =========================================================================
    # Study sessions / statistics
    # =========================================================================

    async def record_study_session(
        self, flashcard_id: str, result: str, time_spent: int
    ) -> None:
        """Record one review; the server bumps the card's review count."""
        await self._request(
            "POST",
            "/study-sessions",
            "Failed to record study session",
            json={"flashcard_id": flashcard_id, "result": result, "time_spent": time_spent},
        )
        self.flashcards = [
            card.bump_review() if card.id == flashcard_id else card for card in self.flashcards
        ]

    async def get_statistics(self) -> tuple[int, int]:
        data = await self._request("GET", "/statistics", "Failed to fetch statistics")
        return int(data["totalCards"]), int(data["totalSessions"])

    # =========================================================================
    # Connectivity
    # =========================================================================

    async def check_health(self) -> None:
        """Raise FlashcardStoreError unless the API reports ok."""
        data = await self._request("GET", "/health", "Flashcard service unavailable")
        if not isinstance(data, dict) or data.get("status") != "ok":
            raise FlashcardStoreError("Flashcard service unavailable")

    async def wait_for_service(
        self,
        max_attempts: int = 10,
        initial_wait: float = 0.5,
        max_wait: float = 2.0,
    ) -> bool:
        """Wait for the REST service to become available with retries.

        Returns:
            True if the health check passed, False if all attempts failed
        """
        try:
            await retry_operation(
                self.check_health,
                max_attempts=max_attempts,
                initial_wait=initial_wait,
                max_wait=max_wait,
                retry_on=(FlashcardStoreError,),
            )
        except FlashcardStoreError as e:
            logger.error(f"Flashcard service unavailable after {max_attempts} attempts: {e}")
            return False

        logger.info(f"Flashcard service ready: {self._base_url}")
        return True
