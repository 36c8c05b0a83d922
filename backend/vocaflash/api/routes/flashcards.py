"""Flashcard management API routes."""

import logging

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from vocaflash.api.dependencies import FlashcardRepositoryDep
from vocaflash.domain.constants import DEFAULT_CATEGORY
from vocaflash.domain.entities.flashcard import Flashcard
from vocaflash.infrastructure.flashcard_repository import FlashcardNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["flashcards"])

MISSING_CONTENT_MESSAGE = "Front and back content are required"
NOT_FOUND_MESSAGE = "Flashcard not found"


# =============================================================================
# Request/Response Models
# =============================================================================


class CreateFlashcardRequest(BaseModel):
    """Request body for creating a flashcard.

    Fields are optional so missing content is reported as a 400, not a 422.
    """

    front: str | None = None
    back: str | None = None
    category: str | None = None


class UpdateFlashcardRequest(BaseModel):
    """Request body for updating a flashcard."""

    front: str
    back: str
    category: str = DEFAULT_CATEGORY


class FlashcardResponse(BaseModel):
    """Flashcard in API response."""

    id: str
    front: str
    back: str
    category: str
    created_at: str | None = None
    last_reviewed: str | None = None
    review_count: int = 0
    difficulty_level: int = 1

    @classmethod
    def from_entity(cls, card: Flashcard) -> "FlashcardResponse":
        return cls(**card.to_dict())


class FlashcardContentResponse(BaseModel):
    """Echo of written content plus id (create/update)."""

    id: str
    front: str
    back: str
    category: str


class MessageResponse(BaseModel):
    message: str


# =============================================================================
# Routes
# =============================================================================


@router.get("/flashcards", response_model=list[FlashcardResponse])
async def list_flashcards(
    repository: FlashcardRepositoryDep,
    category: str | None = None,
) -> list[FlashcardResponse]:
    """List flashcards newest first.

    Pass `category=all` (or omit it) for every card.
    """
    cards = await repository.list_flashcards(category)
    return [FlashcardResponse.from_entity(card) for card in cards]


@router.get(
    "/flashcards/{card_id}",
    response_model=FlashcardResponse,
    responses={404: {"description": "Flashcard not found"}},
)
async def get_flashcard(card_id: str, repository: FlashcardRepositoryDep) -> FlashcardResponse:
    """Get a single flashcard."""
    try:
        card = await repository.get_flashcard(card_id)
    except FlashcardNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE
        ) from None
    return FlashcardResponse.from_entity(card)


@router.post(
    "/flashcards",
    response_model=FlashcardContentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Front or back missing"}},
)
async def create_flashcard(
    request: CreateFlashcardRequest,
    repository: FlashcardRepositoryDep,
) -> FlashcardContentResponse:
    """Create a flashcard. Category defaults to "General"."""
    if not request.front or not request.back:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MISSING_CONTENT_MESSAGE)

    card = await repository.create_flashcard(
        front=request.front,
        back=request.back,
        category=request.category or DEFAULT_CATEGORY,
    )
    logger.info("Flashcard created", extra={"card_id": card.id, "category": card.category})

    return FlashcardContentResponse(
        id=card.id, front=card.front, back=card.back, category=card.category
    )


@router.put(
    "/flashcards/{card_id}",
    response_model=FlashcardContentResponse,
    responses={404: {"description": "Flashcard not found"}},
)
async def update_flashcard(
    card_id: str,
    request: UpdateFlashcardRequest,
    repository: FlashcardRepositoryDep,
) -> FlashcardContentResponse:
    """Replace a flashcard's front, back and category."""
    try:
        await repository.update_flashcard(card_id, request.front, request.back, request.category)
    except FlashcardNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE
        ) from None

    return FlashcardContentResponse(
        id=card_id, front=request.front, back=request.back, category=request.category
    )


@router.delete(
    "/flashcards/{card_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Flashcard not found"}},
)
async def delete_flashcard(card_id: str, repository: FlashcardRepositoryDep) -> MessageResponse:
    """Delete a flashcard. Its study sessions are kept."""
    try:
        await repository.delete_flashcard(card_id)
    except FlashcardNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE
        ) from None

    logger.info("Flashcard deleted", extra={"card_id": card_id})
    return MessageResponse(message="Flashcard deleted successfully")


@router.get("/categories", response_model=list[str])
async def list_categories(repository: FlashcardRepositoryDep) -> list[str]:
    """Distinct categories in use, sorted."""
    return await repository.list_categories()
