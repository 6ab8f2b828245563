"""Song request service: validation and the triage status model.

Status is a free graph over four labels: ``None`` (new), ``played``,
``coming-up`` and ``maybe``. Any label may move to any other, including
back to ``None``; no label is terminal and no history is kept.

Input is validated before the store is touched. Store faults are not
caught here; transports turn them into 500s.
"""
import logging
from datetime import datetime, timezone
from typing import Any

from songbooth.errors import RequestNotFound
from songbooth.schemas.feedback import FeedbackCreate, FeedbackOut
from songbooth.schemas.song_request import RequestCreate, RequestOut, RequestStatusUpdate
from songbooth.schemas.validation import parse_payload
from songbooth.storage.base import RequestStore

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _label(status) -> str:
    return status.value if status else "new"


async def list_requests(store: RequestStore) -> list[RequestOut]:
    """All requests, newest first. Empty list when there are none."""
    return await store.list_requests()


async def create_request(store: RequestStore, data: Any) -> RequestOut:
    """Create an untriaged request stamped with the current time."""
    payload = parse_payload(RequestCreate, data)
    request = await store.create_request(payload, requested_at=_now())
    logger.info("Created request %s (%s - %s)", request.id, request.artist, request.title)
    return request


async def get_request(store: RequestStore, request_id: str) -> RequestOut:
    request = await store.get_request(request_id)
    if request is None:
        raise RequestNotFound(request_id)
    return request


async def update_status(store: RequestStore, request_id: str, data: Any) -> RequestOut:
    """Move a request to a new label, overwriting the previous one."""
    payload = parse_payload(RequestStatusUpdate, data)
    updated = await store.update_status(request_id, payload.status)
    if updated is None:
        logger.warning("Status update for unknown request %s", request_id)
        raise RequestNotFound(request_id)
    logger.info("Request %s status -> %s", request_id, _label(updated.status))
    return updated


async def delete_request(store: RequestStore, request_id: str) -> RequestOut:
    """Remove exactly one request; unknown ids are a 404 on every transport."""
    removed = await store.delete_request(request_id)
    if removed is None:
        logger.warning("Delete for unknown request %s", request_id)
        raise RequestNotFound(request_id)
    logger.info("Deleted request %s (%s - %s)", removed.id, removed.artist, removed.title)
    return removed


async def create_feedback(store: RequestStore, data: Any) -> FeedbackOut:
    """Persist a feedback message. There is no read path for feedback."""
    payload = parse_payload(FeedbackCreate, data)
    entry = await store.create_feedback(payload, submitted_at=_now())
    logger.info("Stored feedback %s (%d chars)", entry.id, len(entry.message))
    return entry
