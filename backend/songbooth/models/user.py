"""User ORM model.

Kept for schema parity only: nothing reads or writes it. The password
column holds plaintext and must be hashed before any login feature uses it.
"""
import uuid
from sqlalchemy import Column, String, Text
from songbooth.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(Text, nullable=False, unique=True)
    password = Column(Text, nullable=False)
