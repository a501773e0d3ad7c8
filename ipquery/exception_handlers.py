from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ipquery.logger import logger

IP_QUERY_FIELDS = ("ip", "ips")


def _normalize_pydantic_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Make sure Pydantic error dicts are JSON-serializable."""
    normalized: list[dict[str, Any]] = []
    for error in errors:
        e = dict(error)
        ctx = e.get("ctx")
        if isinstance(ctx, dict):
            # Convert any non-serializable ctx values (e.g. exceptions) to strings.
            e["ctx"] = {k: str(v) for k, v in ctx.items()}
        normalized.append(e)
    return normalized


def _build_validation_error_payload(exc: ValidationError) -> dict:
    """Normalize validation errors into a `code`/`message` payload.

    Raw pydantic details are logged but not returned to the caller.
    """
    code = "invalid_request"
    message = "Invalid request parameters"

    for error in _normalize_pydantic_errors(exc.errors()):
        loc = error.get("loc", ())
        if len(loc) >= 1 and loc[-1] in IP_QUERY_FIELDS:
            code = "invalid_ip"
            message = "The supplied IP address is not a valid IPv4 or IPv6 address."
            break

    return {
        "code": code,
        "message": message,
    }


async def pydantic_validation_exception_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Handle Pydantic validation errors raised while building request models."""
    logger.info(
        "Pydantic validation error during request handling "
        f"path={request.url.path} method={request.method} errors={exc.errors()}"
    )
    payload = _build_validation_error_payload(exc)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=payload)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected errors to return a structured 500 response."""
    logger.exception(
        f"Unhandled exception while processing request: {repr(exc)} path={request.url.path} method={request.method}"
    )
    content: dict[str, Any] = {
        "code": "internal_error",
        "message": "An unexpected error occurred while processing the request.",
    }
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
    )
