"""Message endpoints.

Provides REST API endpoints for adding, fetching and deleting messages and
for tracking their read state.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, HTTPException

from api.dependencies import MailBoxDep
from api.models import (
    ActionResponse,
    AddMessageResponse,
    CountsResponse,
    EmailCreateRequest,
    EmailResponse,
    ReadStateResponse,
)
from models.errors import ThreadCycleError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/messages",
    tags=["messages"],
)


def _not_found(message_id: UUID) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail=f"Message '{message_id}' not found in mailbox",
    )


@router.post("", response_model=AddMessageResponse)
async def add_message(request: EmailCreateRequest, mailbox: MailBoxDep) -> AddMessageResponse:
    """Add a message to the mailbox.

    Adding a message equal to one already stored is not an error; the
    response reports ``added: false``.

    Args:
        request: Message fields.
        mailbox: The mailbox dependency.

    Returns:
        Whether the message was added, and its id.
    """
    email = request.to_email()
    added = mailbox.add_msg(email)
    return AddMessageResponse(added=added, message_id=email.message_id)


@router.get("/counts", response_model=CountsResponse)
async def get_counts(mailbox: MailBoxDep) -> CountsResponse:
    """Get total, unread and thread counts.

    The message counts never depend on parent references. If a parent chain
    loops, thread_count is reported as null instead of failing the request.
    """
    try:
        thread_count: int | None = mailbox.get_thread_count()
    except ThreadCycleError:
        logger.warning("Thread count unavailable: a parent chain contains a cycle")
        thread_count = None
    return CountsResponse(
        total_count=mailbox.get_msg_count(),
        unread_count=mailbox.get_unread_msg_count(),
        thread_count=thread_count,
    )


@router.get("/{message_id}", response_model=EmailResponse)
async def get_message(message_id: UUID, mailbox: MailBoxDep) -> EmailResponse:
    """Get a single message with its read flag.

    Args:
        message_id: Id of the message.
        mailbox: The mailbox dependency.

    Returns:
        The message and its read flag.

    Raises:
        HTTPException: 404 if the message is not stored.
    """
    email = mailbox.get_msg(message_id)
    if email is None:
        raise _not_found(message_id)
    return EmailResponse(email=email, is_read=mailbox.is_read(message_id))


@router.delete("/{message_id}", response_model=ActionResponse)
async def delete_message(message_id: UUID, mailbox: MailBoxDep) -> ActionResponse:
    """Delete a message and its read flag."""
    if not mailbox.del_msg(message_id):
        raise _not_found(message_id)
    return ActionResponse(
        message_id=message_id,
        action="delete",
        message="Message deleted successfully",
    )


@router.get("/{message_id}/read", response_model=ReadStateResponse)
async def get_read_state(message_id: UUID, mailbox: MailBoxDep) -> ReadStateResponse:
    """Get the read flag of a message.

    An unknown id surfaces as MessageNotFoundError, which the exception
    handlers turn into a 404.
    """
    return ReadStateResponse(message_id=message_id, is_read=mailbox.is_read(message_id))


@router.post("/{message_id}/read", response_model=ActionResponse)
async def mark_message_read(message_id: UUID, mailbox: MailBoxDep) -> ActionResponse:
    """Mark a message as read."""
    if not mailbox.mark_read(message_id):
        raise _not_found(message_id)
    return ActionResponse(
        message_id=message_id,
        action="mark_read",
        message="Message marked as read",
    )


@router.post("/{message_id}/unread", response_model=ActionResponse)
async def mark_message_unread(message_id: UUID, mailbox: MailBoxDep) -> ActionResponse:
    """Mark a message as unread."""
    if not mailbox.mark_unread(message_id):
        raise _not_found(message_id)
    return ActionResponse(
        message_id=message_id,
        action="mark_unread",
        message="Message marked as unread",
    )
