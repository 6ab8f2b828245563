"""Pydantic schemas for error bodies."""
from pydantic import BaseModel


class FieldError(BaseModel):
    field: str
    message: str


class ErrorOut(BaseModel):
    message: str
    errors: list[FieldError] = []
