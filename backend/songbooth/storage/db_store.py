"""Relational store backed by SQLAlchemy (PostgreSQL in production, SQLite in dev/tests)."""
import logging
from datetime import datetime
from typing import Optional

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from songbooth.database import Base, create_db_engine
from songbooth.models.feedback import Feedback
from songbooth.models.song_request import RequestStatus, SongRequest
from songbooth.models.user import User  # noqa: F401
from songbooth.schemas.feedback import FeedbackCreate, FeedbackOut
from songbooth.schemas.song_request import RequestCreate, RequestOut
from songbooth.storage.base import RequestStore

logger = logging.getLogger(__name__)


class DatabaseRequestStore(RequestStore):
    """One engine for the store's lifetime, one short session per call.

    Session work is blocking, so each coroutine hands it to the threadpool.
    """

    def __init__(self, database_url: str, echo: bool = False) -> None:
        self._engine = create_db_engine(database_url, echo=echo)
        self._sessions = sessionmaker(bind=self._engine, autoflush=False, expire_on_commit=False)
        # Dev mode: PostgreSQL schemas are owned by the Alembic migrations
        if database_url.startswith("sqlite"):
            Base.metadata.create_all(bind=self._engine)
        logger.info("Using database request store (%s)", self._engine.url.render_as_string(hide_password=True))

    @property
    def engine(self) -> Engine:
        return self._engine

    async def list_requests(self) -> list[RequestOut]:
        return await run_in_threadpool(self._list_requests)

    async def create_request(self, data: RequestCreate, requested_at: datetime) -> RequestOut:
        return await run_in_threadpool(self._create_request, data, requested_at)

    async def get_request(self, request_id: str) -> Optional[RequestOut]:
        return await run_in_threadpool(self._get_request, request_id)

    async def update_status(
        self, request_id: str, status: Optional[RequestStatus]
    ) -> Optional[RequestOut]:
        return await run_in_threadpool(self._update_status, request_id, status)

    async def delete_request(self, request_id: str) -> Optional[RequestOut]:
        return await run_in_threadpool(self._delete_request, request_id)

    async def create_feedback(self, data: FeedbackCreate, submitted_at: datetime) -> FeedbackOut:
        return await run_in_threadpool(self._create_feedback, data, submitted_at)

    async def close(self) -> None:
        self._engine.dispose()

    def _list_requests(self) -> list[RequestOut]:
        with self._sessions() as db:
            rows = db.query(SongRequest).order_by(SongRequest.requested_at.desc()).all()
            return [RequestOut.model_validate(row) for row in rows]

    def _create_request(self, data: RequestCreate, requested_at: datetime) -> RequestOut:
        with self._sessions() as db:
            row = SongRequest(artist=data.artist, title=data.title, status=None, requested_at=requested_at)
            db.add(row)
            db.commit()
            db.refresh(row)
            return RequestOut.model_validate(row)

    def _get_request(self, request_id: str) -> Optional[RequestOut]:
        with self._sessions() as db:
            row = db.get(SongRequest, request_id)
            return RequestOut.model_validate(row) if row else None

    def _update_status(self, request_id: str, status: Optional[RequestStatus]) -> Optional[RequestOut]:
        with self._sessions() as db:
            row = db.get(SongRequest, request_id)
            if row is None:
                return None
            row.status = status
            db.commit()
            db.refresh(row)
            return RequestOut.model_validate(row)

    def _delete_request(self, request_id: str) -> Optional[RequestOut]:
        with self._sessions() as db:
            row = db.get(SongRequest, request_id)
            if row is None:
                return None
            removed = RequestOut.model_validate(row)
            db.delete(row)
            db.commit()
            return removed

    def _create_feedback(self, data: FeedbackCreate, submitted_at: datetime) -> FeedbackOut:
        with self._sessions() as db:
            row = Feedback(message=data.message, submitted_at=submitted_at)
            db.add(row)
            db.commit()
            db.refresh(row)
            return FeedbackOut.model_validate(row)
