"""Dependency injection providers for the FastAPI application.

This module defines dependencies that can be injected into route handlers,
providing access to the shared MailBox.
"""

from typing import Annotated

from fastapi import Depends

from config import MailBoxSettings, get_settings
from models.mailbox import MailBox


# Global state
# A single mailbox lives for the lifetime of the process; nothing is persisted
_mailbox: MailBox | None = None


def get_mailbox() -> MailBox:
    """Get the shared MailBox instance.

    Returns:
        The shared MailBox instance.

    Raises:
        RuntimeError: If the mailbox hasn't been initialized yet.

    Example:
        @router.get("/some-endpoint")
        async def my_handler(mailbox: Annotated[MailBox, Depends(get_mailbox)]):
            return {"count": mailbox.get_msg_count()}
    """
    if _mailbox is None:
        raise RuntimeError("MailBox not initialized. Call initialize_mailbox() first.")

    return _mailbox


def initialize_mailbox(settings: MailBoxSettings | None = None) -> MailBox:
    """Initialize the shared MailBox instance.

    This should be called once when the FastAPI app starts up.

    Args:
        settings: Service settings (defaults to get_settings()).

    Returns:
        The newly created, empty MailBox.
    """
    global _mailbox

    settings = settings or get_settings()
    _mailbox = MailBox(name=settings.name, thread_safe=settings.thread_safe)
    return _mailbox


def shutdown_mailbox() -> None:
    """Discard the shared MailBox.

    This should be called when the FastAPI app shuts down.
    """
    global _mailbox

    if _mailbox is not None:
        _mailbox.clear()

    _mailbox = None


# Type alias for dependency injection
MailBoxDep = Annotated[MailBox, Depends(get_mailbox)]
