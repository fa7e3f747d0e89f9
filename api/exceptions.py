"""Exception handlers for the mailbox FastAPI application.

This module defines exception handlers that convert Python exceptions
into consistent JSON responses.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from models.errors import MessageNotFoundError, ThreadCycleError

logger = logging.getLogger(__name__)


async def message_not_found_handler(request: Request, exc: MessageNotFoundError):
    """Handle MessageNotFoundError exceptions.

    Returns a 404 naming the message id that was requested.

    Args:
        request: The incoming request that triggered the error.
        exc: The MessageNotFoundError exception.

    Returns:
        JSONResponse with 404 status.
    """
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "Message Not Found",
            "detail": str(exc),
            "message_id": str(exc.message_id),
        },
    )


async def thread_cycle_handler(request: Request, exc: ThreadCycleError):
    """Handle ThreadCycleError exceptions.

    Returns a 409 (Conflict): the stored parent references are malformed, so
    the request cannot be answered until the offending messages are removed.

    Args:
        request: The incoming request that triggered the error.
        exc: The ThreadCycleError exception.

    Returns:
        JSONResponse with 409 status and the visited chain.
    """
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "error": "Thread Cycle Detected",
            "detail": str(exc),
            "message_id": str(exc.message_id),
            "chain": [str(message_id) for message_id in exc.chain],
        },
    )


async def validation_exception_handler(request: Request, exc: ValidationError):
    """Handle Pydantic validation errors raised inside route handlers.

    Args:
        request: The incoming request that triggered the error.
        exc: The ValidationError exception.

    Returns:
        JSONResponse with validation error details.
    """
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation Error",
            "detail": "The request data failed validation",
            "validation_errors": exc.errors(include_url=False, include_context=False),
        },
    )


async def value_error_handler(request: Request, exc: ValueError):
    """Handle ValueError exceptions.

    ValueErrors indicate input that passed Pydantic validation but failed
    mailbox validation, such as an inverted time range.

    Args:
        request: The incoming request that triggered the error.
        exc: The ValueError exception.

    Returns:
        JSONResponse with error details.
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid Value",
            "detail": str(exc),
            "type": "ValueError",
        },
    )


async def runtime_error_handler(request: Request, exc: RuntimeError):
    """Handle RuntimeError exceptions.

    Args:
        request: The incoming request that triggered the error.
        exc: The RuntimeError exception.

    Returns:
        JSONResponse with error details.
    """
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Runtime Error",
            "detail": str(exc),
            "type": "RuntimeError",
        },
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Handle any unhandled exceptions.

    Logs the full exception and returns a generic message so stack traces
    are never exposed to clients.

    Args:
        request: The incoming request that triggered the error.
        exc: The exception that was raised.

    Returns:
        JSONResponse with generic error message.
    """
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal Server Error",
            "detail": "An unexpected error occurred",
            "type": type(exc).__name__,
        },
    )
