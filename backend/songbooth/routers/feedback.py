"""Feedback API routes. Write-only: there is no GET."""
from fastapi import APIRouter, Depends, status

from songbooth.deps import get_store
from songbooth.schemas.error import ErrorOut
from songbooth.schemas.feedback import FeedbackCreate, FeedbackOut
from songbooth.services import request_service
from songbooth.storage.base import RequestStore

router = APIRouter()


@router.post(
    "",
    response_model=FeedbackOut,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorOut}},
)
async def submit_feedback(payload: FeedbackCreate, store: RequestStore = Depends(get_store)):
    """Submit a free-text message to the operator."""
    return await request_service.create_feedback(store, payload)
