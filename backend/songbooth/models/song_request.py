"""SongRequest ORM model."""
import uuid
import enum
from sqlalchemy import Column, String, Text, DateTime, Enum as SAEnum
from songbooth.database import Base


class RequestStatus(str, enum.Enum):
    """Operator triage label. A request with no label (None) is new."""

    played = "played"
    coming_up = "coming-up"
    maybe = "maybe"


class SongRequest(Base):
    __tablename__ = "requests"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    artist = Column(Text, nullable=False)
    title = Column(Text, nullable=False)
    # Stored as the label text ("coming-up"), not the member name
    status = Column(
        SAEnum(
            RequestStatus,
            native_enum=False,
            length=16,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=True,
    )
    requested_at = Column(DateTime(timezone=True), nullable=False, index=True)
