"""Thread sub-client for the mailbox API.

This is an internal module. Import from `client` instead.
"""

from typing import TYPE_CHECKING
from uuid import UUID

from client._base import BaseClient
from client.models import ActionResponse, EmailThread, ThreadListResponse, ThreadResponse

if TYPE_CHECKING:
    from client._http import HTTPClient


class ThreadsClient(BaseClient):
    """Client for the /threads/* endpoints.

    Threads are addressed by the id of any message they contain.
    """

    def __init__(self, http_client: "HTTPClient") -> None:
        super().__init__(http_client)

    def list(self) -> list[EmailThread]:
        """List every thread, most recent activity first."""
        data = self._get("/threads")
        return ThreadListResponse(**data).threads

    def get(self, message_id: UUID) -> ThreadResponse:
        """Get the thread containing a message.

        Raises:
            NotFoundError: If the message is not stored.
        """
        data = self._get(f"/threads/{message_id}")
        return ThreadResponse(**data)

    def mark_read(self, message_id: UUID) -> ActionResponse:
        """Mark every message in the thread as read."""
        data = self._post(f"/threads/{message_id}/read")
        return ActionResponse(**data)

    def mark_unread(self, message_id: UUID) -> ActionResponse:
        """Mark every message in the thread as unread."""
        data = self._post(f"/threads/{message_id}/unread")
        return ActionResponse(**data)
