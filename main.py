"""Main entry point for the mailbox FastAPI application.

This module creates and configures the FastAPI app instance that serves the
REST API over the in-memory mailbox.

To run the development server:
    uv run uvicorn main:app --reload

To run with the configured host and port:
    uv run python main.py
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import ValidationError

from api.dependencies import initialize_mailbox, shutdown_mailbox
from api.exceptions import (
    generic_exception_handler,
    message_not_found_handler,
    runtime_error_handler,
    thread_cycle_handler,
    validation_exception_handler,
    value_error_handler,
)
from api.routes import messages as messages_routes
from api.routes import threads as threads_routes
from api.routes import views as views_routes
from config import get_settings
from models.errors import MessageNotFoundError, ThreadCycleError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events.

    Creates the shared mailbox at startup and discards it at shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to FastAPI to handle requests.
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    mailbox = initialize_mailbox(settings)
    logger.info(f"Mailbox '{mailbox.name}' initialized (thread_safe={mailbox.thread_safe})")

    yield

    shutdown_mailbox()
    logger.info("Mailbox shut down")


app = FastAPI(
    title="Threaded Mailbox",
    description="In-memory mailbox with read tracking and thread reconstruction",
    version="0.1.0",
    lifespan=lifespan,
)

# Register exception handlers
# Specific exceptions before general ones
app.add_exception_handler(MessageNotFoundError, message_not_found_handler)
app.add_exception_handler(ThreadCycleError, thread_cycle_handler)
app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(ValueError, value_error_handler)
app.add_exception_handler(RuntimeError, runtime_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)

app.include_router(messages_routes.router)
app.include_router(views_routes.router)
app.include_router(threads_routes.router)


@app.get("/")
async def root():
    """Root endpoint - returns a welcome message."""
    return {
        "message": "Welcome to the Threaded Mailbox API",
        "version": "0.1.0",
        "docs_url": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("main:app", host=settings.host, port=settings.port)
