"""Helpers shared by the REST route handlers.

Handlers are async; cluster calls are blocking and run in Starlette's
threadpool. Every failure is logged with the operation name and turned into
a short JSON error at this boundary.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from http import HTTPStatus
from typing import TYPE_CHECKING, Any, TypeVar

import pydantic
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import JSONResponse

from virtui.utils.errors import ValidationError

if TYPE_CHECKING:
    from virtui.config import VirtUIConfig

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)

SUCCESS = {"success": True}


def namespace_param(request: Request, default: str) -> str:
    """Read the ?namespace= query parameter, falling back to the default."""
    return request.query_params.get("namespace") or default


def error_response(
    message: str,
    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR,
) -> JSONResponse:
    """Build the JSON error body returned to callers."""
    return JSONResponse({"error": message}, status_code=status_code)


def check_operation(config: VirtUIConfig, operation: str) -> JSONResponse | None:
    """Return a 403 response if the operation is disabled, else None."""
    allowed, reason = config.is_operation_allowed(operation)
    if allowed:
        return None
    logger.warning(f"Rejected {operation} request: {reason}")
    return error_response(reason or f"Operation '{operation}' is not allowed", HTTPStatus.FORBIDDEN)


async def parse_body(request: Request, model: type[ModelT]) -> ModelT:
    """Parse and validate a JSON request body.

    Raises:
        ValidationError: If the body is not JSON or does not match the model.
    """
    try:
        data = await request.json()
    except ValueError as e:
        raise ValidationError("Request body must be valid JSON") from e

    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        raise ValidationError(_describe_validation_error(e)) from e


async def respond(
    operation: str,
    call: Callable[[], Any],
    status_code: int = HTTPStatus.OK,
) -> JSONResponse:
    """Run a blocking cluster operation and render its result.

    A call returning None (deletes) is acknowledged with {"success": true}.
    Any exception is logged and reported as "Failed to <operation>" with a
    500 status; the remote status code is not passed through.
    """
    try:
        result = await run_in_threadpool(call)
    except Exception as e:
        logger.error(f"Failed to {operation}: {e}")
        return error_response(f"Failed to {operation}")

    if result is None:
        result = SUCCESS
    return JSONResponse(result, status_code=status_code)


async def respond_with_body(
    request: Request,
    operation: str,
    model: type[ModelT],
    call: Callable[[ModelT], Any],
    status_code: int = HTTPStatus.CREATED,
) -> JSONResponse:
    """Validate the request body, then run the operation with it."""
    try:
        payload = await parse_body(request, model)
    except ValidationError as e:
        logger.warning(f"Rejected request to {operation}: {e.message}")
        return error_response(e.message, HTTPStatus.BAD_REQUEST)

    return await respond(operation, lambda: call(payload), status_code=status_code)


def _describe_validation_error(error: pydantic.ValidationError) -> str:
    parts = []
    for err in error.errors():
        location = ".".join(str(p) for p in err["loc"]) or "body"
        parts.append(f"{location}: {err['msg']}")
    return "; ".join(parts)
