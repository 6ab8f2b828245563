"""Process-local store. Contents vanish on restart."""
import itertools
import logging
import uuid
from datetime import datetime
from typing import Optional

from songbooth.models.song_request import RequestStatus
from songbooth.schemas.feedback import FeedbackCreate, FeedbackOut
from songbooth.schemas.song_request import RequestCreate, RequestOut
from songbooth.storage.base import RequestStore

logger = logging.getLogger(__name__)


class MemoryRequestStore(RequestStore):
    """Keeps requests and feedback in dicts keyed by id.

    Records are handed out as copies, so a caller editing a returned model
    never changes what is stored. Concurrent status updates on the same id
    are last-write-wins.
    """

    def __init__(self) -> None:
        self._requests: dict[str, RequestOut] = {}
        self._feedback: dict[str, FeedbackOut] = {}
        self._insert_order: dict[str, int] = {}
        self._counter = itertools.count()
        logger.info("Using in-memory request store; data will not survive a restart")

    async def list_requests(self) -> list[RequestOut]:
        # Same timestamp: later insert sorts first
        ordered = sorted(
            self._requests.values(),
            key=lambda r: (r.requested_at, self._insert_order[r.id]),
            reverse=True,
        )
        return [r.model_copy() for r in ordered]

    async def create_request(self, data: RequestCreate, requested_at: datetime) -> RequestOut:
        request = RequestOut(
            id=str(uuid.uuid4()),
            artist=data.artist,
            title=data.title,
            status=None,
            requested_at=requested_at,
        )
        self._requests[request.id] = request
        self._insert_order[request.id] = next(self._counter)
        return request.model_copy()

    async def get_request(self, request_id: str) -> Optional[RequestOut]:
        request = self._requests.get(request_id)
        return request.model_copy() if request else None

    async def update_status(
        self, request_id: str, status: Optional[RequestStatus]
    ) -> Optional[RequestOut]:
        request = self._requests.get(request_id)
        if request is None:
            return None
        updated = request.model_copy(update={"status": status})
        self._requests[request_id] = updated
        return updated.model_copy()

    async def delete_request(self, request_id: str) -> Optional[RequestOut]:
        request = self._requests.pop(request_id, None)
        self._insert_order.pop(request_id, None)
        return request.model_copy() if request else None

    async def create_feedback(self, data: FeedbackCreate, submitted_at: datetime) -> FeedbackOut:
        entry = FeedbackOut(id=str(uuid.uuid4()), message=data.message, submitted_at=submitted_at)
        self._feedback[entry.id] = entry
        return entry.model_copy()
