"""Store contract shared by the in-memory and SQL-backed implementations."""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from songbooth.models.song_request import RequestStatus
from songbooth.schemas.feedback import FeedbackCreate, FeedbackOut
from songbooth.schemas.song_request import RequestCreate, RequestOut


class RequestStore(ABC):
    """Persistence for song requests and feedback.

    Lookups and mutations by id return ``None`` for unknown ids instead of
    raising; deciding what "not found" means is the caller's job.
    """

    @abstractmethod
    async def list_requests(self) -> list[RequestOut]:
        """All requests, most recently requested first."""

    @abstractmethod
    async def create_request(self, data: RequestCreate, requested_at: datetime) -> RequestOut:
        ...

    @abstractmethod
    async def get_request(self, request_id: str) -> Optional[RequestOut]:
        ...

    @abstractmethod
    async def update_status(
        self, request_id: str, status: Optional[RequestStatus]
    ) -> Optional[RequestOut]:
        ...

    @abstractmethod
    async def delete_request(self, request_id: str) -> Optional[RequestOut]:
        """Remove one request and return it as it was."""

    @abstractmethod
    async def create_feedback(self, data: FeedbackCreate, submitted_at: datetime) -> FeedbackOut:
        ...

    async def close(self) -> None:
        """Release held resources. Nothing to do by default."""
