"""Domain errors and their HTTP mapping, shared by every transport."""
import logging
from collections.abc import Iterable
from typing import Any

from fastapi import status

logger = logging.getLogger(__name__)


class SongboothError(Exception):
    """Base class for errors a caller can act on."""


class InvalidInput(SongboothError):
    """Malformed or missing input; carries one entry per failing field."""

    def __init__(self, errors: list[dict[str, str]], message: str = "Invalid input"):
        super().__init__(message)
        self.message = message
        self.errors = errors

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "errors": self.errors}


class RequestNotFound(SongboothError, LookupError):
    """No song request has the given id."""

    def __init__(self, request_id: str):
        super().__init__("Request not found")
        self.request_id = request_id


def field_errors(errors: Iterable[dict[str, Any]]) -> list[dict[str, str]]:
    """Flatten pydantic error dicts into ``{"field", "message"}`` pairs.

    FastAPI prefixes body locations with ``"body"``; that prefix is dropped
    so both transports report ``artist`` rather than ``body.artist``.
    """
    flattened = []
    for err in errors:
        loc = list(err.get("loc", ()))
        if loc and loc[0] == "body":
            loc = loc[1:]
        if not loc or not isinstance(loc[0], str):
            field = "body"
        else:
            field = ".".join(str(part) for part in loc)
        flattened.append({"field": field, "message": err.get("msg", "Invalid value")})
    return flattened


def error_response(exc: Exception, failure_message: str) -> tuple[int, dict[str, Any]]:
    """Map an exception to ``(status_code, body)``.

    Anything that is not a known domain error is a 500; its detail is
    logged here and never sent to the caller.
    """
    if isinstance(exc, InvalidInput):
        return status.HTTP_400_BAD_REQUEST, exc.to_dict()
    if isinstance(exc, RequestNotFound):
        return status.HTTP_404_NOT_FOUND, {"message": str(exc)}
    logger.error("%s: %s", failure_message, exc, exc_info=exc)
    return status.HTTP_500_INTERNAL_SERVER_ERROR, {"message": failure_message}
