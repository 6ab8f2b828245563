"""Song request API routes — delegates to request_service."""
import logging
from fastapi import APIRouter, Depends, status

from songbooth.deps import get_store
from songbooth.schemas.error import ErrorOut
from songbooth.schemas.song_request import DeleteResult, RequestCreate, RequestOut, RequestStatusUpdate
from songbooth.services import request_service
from songbooth.storage.base import RequestStore

logger = logging.getLogger(__name__)
router = APIRouter()

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorOut}}
_INVALID = {status.HTTP_400_BAD_REQUEST: {"model": ErrorOut}}


@router.get("", response_model=list[RequestOut])
async def list_requests(store: RequestStore = Depends(get_store)):
    """List every request, most recent first."""
    return await request_service.list_requests(store)


@router.post("", response_model=RequestOut, status_code=status.HTTP_201_CREATED, responses=_INVALID)
async def create_request(payload: RequestCreate, store: RequestStore = Depends(get_store)):
    """Submit a song request. New requests start untriaged (status null)."""
    return await request_service.create_request(store, payload)


@router.get("/{request_id}", response_model=RequestOut, responses=_NOT_FOUND)
async def get_request(request_id: str, store: RequestStore = Depends(get_store)):
    return await request_service.get_request(store, request_id)


@router.patch(
    "/{request_id}/status",
    response_model=RequestOut,
    responses={**_INVALID, **_NOT_FOUND},
)
async def update_request_status(
    request_id: str,
    payload: RequestStatusUpdate,
    store: RequestStore = Depends(get_store),
):
    """Set the triage status. Null moves the request back to new."""
    return await request_service.update_status(store, request_id, payload)


@router.delete("/{request_id}", response_model=DeleteResult, responses=_NOT_FOUND)
async def delete_request(request_id: str, store: RequestStore = Depends(get_store)):
    removed = await request_service.delete_request(store, request_id)
    return DeleteResult(message="Request deleted successfully", deleted_request=removed)
