"""Feedback ORM model."""
import uuid
from sqlalchemy import Column, String, Text, DateTime
from songbooth.database import Base


class Feedback(Base):
    __tablename__ = "feedback"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    message = Column(Text, nullable=False)
    submitted_at = Column(DateTime(timezone=True), nullable=False)
