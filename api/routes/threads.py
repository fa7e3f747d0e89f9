"""Thread endpoints.

Threads are addressed by the id of any message they contain.
"""

from uuid import UUID

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from api.dependencies import MailBoxDep
from api.models import ActionResponse
from models.email import Email, EmailThread

router = APIRouter(
    prefix="/threads",
    tags=["threads"],
)


class ThreadListResponse(BaseModel):
    """Response model for the thread listing.

    Attributes:
        threads: Thread summaries, most recent activity first.
        count: Number of threads.
    """

    threads: list[EmailThread]
    count: int


class ThreadResponse(BaseModel):
    """Response model for a single thread.

    Attributes:
        root: The root message, or None if it has been deleted.
        emails: Thread messages, newest first.
        count: Number of messages in the thread.
    """

    root: Email | None
    emails: list[Email]
    count: int


@router.get("", response_model=ThreadListResponse)
async def list_threads(mailbox: MailBoxDep) -> ThreadListResponse:
    """List every thread, most recent activity first."""
    threads = mailbox.get_threads()
    return ThreadListResponse(threads=threads, count=len(threads))


@router.get("/{message_id}", response_model=ThreadResponse)
async def get_thread(message_id: UUID, mailbox: MailBoxDep) -> ThreadResponse:
    """Get the thread containing a message.

    Args:
        message_id: Id of any message in the thread.
        mailbox: The mailbox dependency.

    Returns:
        The thread's root and messages.

    Raises:
        HTTPException: 404 if the message is not stored.
    """
    emails = mailbox.get_thread(message_id)
    if not emails:
        raise HTTPException(
            status_code=404,
            detail=f"Message '{message_id}' not found in mailbox",
        )
    return ThreadResponse(
        root=mailbox.get_thread_root(message_id),
        emails=emails,
        count=len(emails),
    )


@router.post("/{message_id}/read", response_model=ActionResponse)
async def mark_thread_read(message_id: UUID, mailbox: MailBoxDep) -> ActionResponse:
    """Mark every message in a thread as read."""
    if not mailbox.mark_thread_as_read(message_id):
        raise HTTPException(
            status_code=404,
            detail=f"Message '{message_id}' not found in mailbox",
        )
    return ActionResponse(
        message_id=message_id,
        action="mark_thread_read",
        message="Thread marked as read",
    )


@router.post("/{message_id}/unread", response_model=ActionResponse)
async def mark_thread_unread(message_id: UUID, mailbox: MailBoxDep) -> ActionResponse:
    """Mark every message in a thread as unread."""
    if not mailbox.mark_thread_as_unread(message_id):
        raise HTTPException(
            status_code=404,
            detail=f"Message '{message_id}' not found in mailbox",
        )
    return ActionResponse(
        message_id=message_id,
        action="mark_thread_unread",
        message="Thread marked as unread",
    )
