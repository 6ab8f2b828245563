"""Serverless entry point (API Gateway / Netlify Functions event shape).

``handler(event, context)`` serves the same operations as the FastAPI
routes through the same service module and route table, so both
deployments agree on status codes and bodies. Paths are matched on their
tail, which lets one function sit behind ``/api/...`` or
``/.netlify/functions/...`` alike.
"""
import asyncio
import base64
import binascii
import json
import logging
from collections.abc import Mapping
from typing import Any, Optional

from fastapi import status

from songbooth.config import settings
from songbooth.errors import InvalidInput, error_response
from songbooth.logging_config import setup_logging
from songbooth.routing import (
    FAILURE_MESSAGES,
    METHOD_NOT_ALLOWED_MESSAGE,
    NOT_FOUND_MESSAGE,
    ROUTE_METHODS,
    resolve_route,
)
from songbooth.schemas.song_request import DeleteResult
from songbooth.services import request_service
from songbooth.storage.base import RequestStore
from songbooth.storage.factory import build_store

logger = logging.getLogger(__name__)

_store: Optional[RequestStore] = None


def set_store(store: Optional[RequestStore]) -> None:
    """Swap the store used by warm invocations. ``None`` rebuilds from settings."""
    global _store
    _store = store


def _get_store() -> RequestStore:
    global _store
    if _store is None:
        setup_logging(settings.LOG_LEVEL)
        _store = build_store(settings)
    return _store


def _headers(route: Optional[str]) -> dict[str, str]:
    methods = ROUTE_METHODS.get(route, ())
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": ", ".join(methods + ("OPTIONS",)),
        "Access-Control-Allow-Headers": "Content-Type",
        "Content-Type": "application/json",
    }


def _respond(route: Optional[str], status_code: int, body: Any) -> dict[str, Any]:
    return {"statusCode": status_code, "headers": _headers(route), "body": json.dumps(body)}


def _body_error(message: str) -> InvalidInput:
    return InvalidInput([{"field": "body", "message": message}])


def _read_body(event: Mapping[str, Any]) -> Any:
    raw = event.get("body")
    if raw is None or raw == "":
        return None
    if event.get("isBase64Encoded"):
        try:
            raw = base64.b64decode(raw, validate=True)
        except binascii.Error as exc:
            raise _body_error("Body is not valid base64") from exc
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise _body_error("Body is not valid UTF-8") from exc
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise _body_error(f"Malformed JSON: {exc.msg}") from exc


def _dump(model) -> Any:
    if isinstance(model, list):
        return [m.model_dump(mode="json", by_alias=True) for m in model]
    return model.model_dump(mode="json", by_alias=True)


async def _list_requests(store, request_id, event):
    return status.HTTP_200_OK, await request_service.list_requests(store)


async def _create_request(store, request_id, event):
    return status.HTTP_201_CREATED, await request_service.create_request(store, _read_body(event))


async def _get_request(store, request_id, event):
    return status.HTTP_200_OK, await request_service.get_request(store, request_id)


async def _delete_request(store, request_id, event):
    removed = await request_service.delete_request(store, request_id)
    return status.HTTP_200_OK, DeleteResult(message="Request deleted successfully", deleted_request=removed)


async def _update_status(store, request_id, event):
    return status.HTTP_200_OK, await request_service.update_status(store, request_id, _read_body(event))


async def _create_feedback(store, request_id, event):
    return status.HTTP_201_CREATED, await request_service.create_feedback(store, _read_body(event))


OPERATIONS = {
    ("requests", "GET"): _list_requests,
    ("requests", "POST"): _create_request,
    ("request", "GET"): _get_request,
    ("request", "DELETE"): _delete_request,
    ("status", "PATCH"): _update_status,
    ("feedback", "POST"): _create_feedback,
}


def handler(event: Mapping[str, Any], context: Any = None) -> dict[str, Any]:
    """Handle one invocation and return the gateway response dict."""
    method = (event.get("httpMethod") or "GET").upper()
    route, request_id = resolve_route(event.get("path", ""), event.get("queryStringParameters"))

    if method == "OPTIONS":
        return _respond(route, status.HTTP_200_OK, {"message": "CORS preflight"})
    if route is None:
        return _respond(route, status.HTTP_404_NOT_FOUND, {"message": NOT_FOUND_MESSAGE})
    operation = OPERATIONS.get((route, method))
    if operation is None:
        return _respond(route, status.HTTP_405_METHOD_NOT_ALLOWED, {"message": METHOD_NOT_ALLOWED_MESSAGE})

    store = _get_store()
    try:
        code, result = asyncio.run(operation(store, request_id, event))
    except Exception as exc:
        code, body = error_response(exc, FAILURE_MESSAGES[(route, method)])
        return _respond(route, code, body)
    return _respond(route, code, _dump(result))
