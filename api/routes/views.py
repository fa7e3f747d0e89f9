"""Mailbox view endpoints.

Provides the ordered, read-only views of the mailbox: by timestamp, by
time range and grouped by thread.
"""

from fastapi import APIRouter, Query

from api.dependencies import MailBoxDep
from api.models import EmailListResponse

router = APIRouter(
    prefix="/views",
    tags=["views"],
)


@router.get("/timestamp", response_model=EmailListResponse)
async def get_timestamp_view(mailbox: MailBoxDep) -> EmailListResponse:
    """Get all messages, most recent first."""
    return EmailListResponse.from_emails(mailbox.get_timestamp_view())


@router.get("/range", response_model=EmailListResponse)
async def get_range_view(
    mailbox: MailBoxDep,
    start: int = Query(ge=0, description="Start of the time range (inclusive)"),
    end: int = Query(ge=0, description="End of the time range (inclusive)"),
) -> EmailListResponse:
    """Get messages within a time range, earliest first.

    Args:
        mailbox: The mailbox dependency.
        start: Start of the time range.
        end: End of the time range, not before start.

    Returns:
        Messages with start <= timestamp <= end.
    """
    return EmailListResponse.from_emails(mailbox.get_msgs_in_range(start, end))


@router.get("/threaded", response_model=EmailListResponse)
async def get_threaded_view(mailbox: MailBoxDep) -> EmailListResponse:
    """Get all messages grouped by thread.

    Threads with the most recent activity come first; within a thread the
    newest message comes first.
    """
    return EmailListResponse.from_emails(mailbox.get_threaded_view())
