"""Operation table shared by the FastAPI app and the serverless handler.

Both transports resolve a path to the same route name, so they agree on
allowed methods and on the message sent with a 500.
"""
from collections.abc import Mapping
from typing import Optional

NOT_FOUND_MESSAGE = "Not found"
METHOD_NOT_ALLOWED_MESSAGE = "Method not allowed"
DEFAULT_FAILURE_MESSAGE = "Internal server error"

# Methods each route answers, besides OPTIONS
ROUTE_METHODS = {
    "requests": ("GET", "POST"),
    "request": ("GET", "DELETE"),
    "status": ("PATCH",),
    "feedback": ("POST",),
}

FAILURE_MESSAGES = {
    ("requests", "GET"): "Failed to fetch requests",
    ("requests", "POST"): "Failed to create request",
    ("request", "GET"): "Failed to fetch request",
    ("request", "DELETE"): "Failed to delete request",
    ("status", "PATCH"): "Failed to update request status",
    ("feedback", "POST"): "Failed to submit feedback",
}


def resolve_route(path: str, query: Optional[Mapping[str, str]] = None) -> tuple[Optional[str], Optional[str]]:
    """Return ``(route, request_id)`` for a path, or ``(None, None)``.

    Paths are matched on their tail, so ``/api/requests/{id}`` and
    ``/.netlify/functions/status/{id}`` both resolve.
    """
    parts = [p for p in (path or "").split("/") if p]
    query_id = (query or {}).get("id")
    if not parts:
        return None, None
    last = parts[-1]
    if last == "feedback":
        return "feedback", None
    if last == "requests":
        return "requests", None
    if last == "status":
        if len(parts) >= 3 and parts[-3] == "requests":
            return "status", parts[-2]
        if query_id:
            return "status", query_id
        return None, None
    if len(parts) >= 2 and parts[-2] == "status":
        return "status", last
    if len(parts) >= 2 and parts[-2] in ("requests", "delete-request"):
        return "request", last
    return None, None


def failure_message(path: str, method: str) -> str:
    """The caller-facing 500 message for an operation."""
    route, _ = resolve_route(path)
    return FAILURE_MESSAGES.get((route, method.upper()), DEFAULT_FAILURE_MESSAGE)
