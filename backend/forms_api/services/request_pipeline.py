"""Request Pipeline — the Decode → Validate → Store → Envelope state machine.

Invariants:
    - Every call returns exactly one JSONResponse carrying an envelope
    - A decode/validation failure never reaches the store action
    - Store failures are answered with the operation's fixed failure message;
      the driver detail goes to the log only
    - Not-found answers carry their own code (SCHEMA_NOT_FOUND / FIELD_NOT_FOUND)
    - No retries: every failure is terminal for the request

Design Decisions:
    - One pipeline shared by all handlers: routes only declare the request model,
      the failure message and the store action
    - OperationContext passed explicitly into the action: request-scoped logging
      without ambient state
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, TypeVar

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from forms_api.core import envelope
from forms_api.core.errors import (
    FormsError, ResourceNotFoundError, StoreFailureError,
)
from forms_api.core.validation import decode_request
from forms_api.infrastructure.observability import request_logger

RequestT = TypeVar("RequestT", bound=BaseModel)


@dataclass(frozen=True)
class OperationContext:
    """Request-scoped values handed to a store action."""
    op: str
    request_id: str | None
    log: logging.LoggerAdapter


def request_id_of(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def error_response(exc: FormsError, problems: list[str] | None = None) -> JSONResponse:
    body = envelope.error(problems or exc.problems, exc.code)
    return JSONResponse(status_code=exc.http_status, content=body)


async def run_operation(
    request: Request,
    op: str,
    failure_message: str,
    action: Callable[[RequestT | None, OperationContext], Awaitable[dict]],
    request_model: type[RequestT] | None = None,
    success_status: int = status.HTTP_200_OK,
) -> JSONResponse:
    """Run one handler; request_model=None skips decoding (path-only routes)."""
    ctx = OperationContext(
        op=op,
        request_id=request_id_of(request),
        log=request_logger(op, request_id_of(request)),
    )

    payload = None
    if request_model is not None:
        try:
            payload = decode_request(await request.body(), request_model)
        except FormsError as exc:
            ctx.log.error(
                _decode_log_message(exc),
                extra={"error_code": exc.code, "detail": getattr(exc, "detail", None)},
            )
            return error_response(exc)
        ctx.log.info(
            "request body decoded",
            extra={"detail": payload.model_dump(by_alias=True)},
        )

    try:
        result = await action(payload, ctx)
    except StoreFailureError as exc:
        ctx.log.error(
            failure_message, extra={"error_code": exc.code, "detail": exc.message},
        )
        return error_response(exc, [failure_message])
    except ResourceNotFoundError as exc:
        ctx.log.warning(
            f"{failure_message}: {exc.message}",
            extra={"error_code": exc.code, "detail": exc.resource_id},
        )
        return error_response(exc)
    except FormsError as exc:
        ctx.log.error(
            f"{failure_message}: {exc.message}", extra={"error_code": exc.code},
        )
        return error_response(exc)

    return JSONResponse(status_code=success_status, content=envelope.ok(**result))


def _decode_log_message(exc: FormsError) -> str:
    if exc.code == "EMPTY_BODY":
        return "request body is empty"
    if exc.code == "MALFORMED_BODY":
        return "failed to decode request body"
    return "invalid request"
