"""Study session and statistics API routes."""

import logging

from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from vocaflash.api.dependencies import FlashcardRepositoryDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["study"])


class RecordStudySessionRequest(BaseModel):
    """Request body for recording a review."""

    flashcard_id: str
    result: str | None = None
    time_spent: int | None = Field(default=None, ge=0)


class StudySessionResponse(BaseModel):
    id: str
    flashcard_id: str
    result: str | None
    time_spent: int | None


class StatisticsResponse(BaseModel):
    """Totals across the store (camelCase on the wire)."""

    totalCards: int
    totalSessions: int


@router.post(
    "/study-sessions",
    response_model=StudySessionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_study_session(
    request: RecordStudySessionRequest,
    repository: FlashcardRepositoryDep,
) -> StudySessionResponse:
    """Record a review; bumps the card's review_count and last_reviewed."""
    session = await repository.record_study_session(
        flashcard_id=request.flashcard_id,
        result=request.result,
        time_spent=request.time_spent,
    )
    logger.info(
        "Study session recorded",
        extra={"card_id": request.flashcard_id, "result": request.result},
    )
    return StudySessionResponse(
        id=session.id,
        flashcard_id=session.flashcard_id,
        result=session.result,
        time_spent=session.time_spent,
    )


@router.get("/statistics", response_model=StatisticsResponse)
async def get_statistics(repository: FlashcardRepositoryDep) -> StatisticsResponse:
    """Total flashcards and total study sessions."""
    total_cards, total_sessions = await repository.get_statistics()
    return StatisticsResponse(totalCards=total_cards, totalSessions=total_sessions)
