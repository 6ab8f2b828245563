"""Pydantic schemas for song requests."""
from datetime import datetime, timezone
from typing import Optional
from pydantic import AliasChoices, BaseModel, Field, field_validator

from songbooth.models.song_request import RequestStatus


class RequestCreate(BaseModel):
    artist: str = Field(min_length=1)
    title: str = Field(min_length=1)


class RequestStatusUpdate(BaseModel):
    status: Optional[RequestStatus]  # required key; null resets to "new"


class RequestOut(BaseModel):
    id: str
    artist: str
    title: str
    status: Optional[RequestStatus] = None
    requested_at: datetime = Field(
        validation_alias=AliasChoices("requested_at", "requestedAt"),
        serialization_alias="requestedAt",
    )

    model_config = {"from_attributes": True}

    @field_validator("requested_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands back naive datetimes
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class DeleteResult(BaseModel):
    message: str
    deleted_request: RequestOut = Field(
        validation_alias=AliasChoices("deleted_request", "deletedRequest"),
        serialization_alias="deletedRequest",
    )
