"""Pydantic schemas for attendee feedback."""
from datetime import datetime, timezone
from pydantic import AliasChoices, BaseModel, Field, field_validator


class FeedbackCreate(BaseModel):
    message: str = Field(min_length=1)


class FeedbackOut(BaseModel):
    id: str
    message: str
    submitted_at: datetime = Field(
        validation_alias=AliasChoices("submitted_at", "submittedAt"),
        serialization_alias="submittedAt",
    )

    model_config = {"from_attributes": True}

    @field_validator("submitted_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
