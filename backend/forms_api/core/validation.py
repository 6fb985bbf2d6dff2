"""Validation Pipeline — decodes a raw request body into a typed, validated request.

Invariants:
    - Empty (or whitespace-only) body → EmptyBodyError, never MalformedBodyError
    - Undecodable JSON or a non-object document → MalformedBodyError
    - ALL violated fields are reported, one message per field
    - Field names in messages are wire names (aliases), e.g. schemaId
    - Pure: no IO, no logging — callers log the outcome

Design Decisions:
    - json.loads before model_validate: keeps "sent garbage" apart from
      "sent the wrong fields" (ADR: distinguishable error classes)
    - Messages keyed on pydantic error types, so constraints stay declared on the models
"""

import json
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from forms_api.core.errors import (
    EmptyBodyError, MalformedBodyError, ValidationFailedError,
)

RequestT = TypeVar("RequestT", bound=BaseModel)

# Error types that mean the value is absent or zero-valued.
_REQUIRED_TYPES = frozenset({
    "missing", "string_too_short", "greater_than", "greater_than_equal",
})
_UPPER_BOUND_TYPES = frozenset({"less_than_equal", "less_than"})


def decode_request(body: bytes, model: type[RequestT]) -> RequestT:
    """Decode and validate body as model, raising a FormsError subclass on failure."""
    if not body or not body.strip():
        raise EmptyBodyError()
    try:
        data = json.loads(body)
    except ValueError as e:
        raise MalformedBodyError(str(e)) from e
    if not isinstance(data, dict):
        raise MalformedBodyError(
            f"expected a JSON object, got {type(data).__name__}",
        )
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ValidationFailedError(format_violations(e)) from e


def format_violations(exc: ValidationError) -> list[str]:
    """One human-readable message per violated field, first violation wins."""
    problems: list[str] = []
    seen: set[str] = set()
    for err in exc.errors():
        name = ".".join(str(loc) for loc in err["loc"]) or "body"
        if name in seen:
            continue
        seen.add(name)
        problems.append(_describe(name, err))
    return problems


def _describe(name: str, err: dict) -> str:
    err_type = err["type"]
    if err_type in _REQUIRED_TYPES:
        return f"field {name} is a required field"
    if err_type in _UPPER_BOUND_TYPES:
        ctx = err.get("ctx") or {}
        bound = ctx.get("le", ctx.get("lt"))
        return f"field {name} must be at most {bound}"
    return f"field {name} is not valid"
