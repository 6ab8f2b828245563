"""Turn untyped input into a validated payload or a field-level error list."""
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from songbooth.errors import InvalidInput, field_errors

M = TypeVar("M", bound=BaseModel)


def parse_payload(schema: type[M], raw: Any) -> M:
    """Validate ``raw`` against ``schema``.

    Instances of ``schema`` pass through untouched. Every failing field is
    reported, not just the first one.
    """
    if isinstance(raw, schema):
        return raw
    if raw is None:
        raise InvalidInput([{"field": "body", "message": "Request body is missing"}])
    if not isinstance(raw, Mapping):
        raise InvalidInput([{"field": "body", "message": "Expected a JSON object"}])
    try:
        return schema.model_validate(raw)
    except ValidationError as exc:
        raise InvalidInput(field_errors(exc.errors())) from exc
