"""Message and view sub-client for the mailbox API.

This module provides MessagesClient for the /messages/* and /views/*
endpoints.

This is an internal module. Import from `client` instead.
"""

from typing import TYPE_CHECKING
from uuid import UUID

from client._base import BaseClient
from client.models import (
    ActionResponse,
    AddMessageResponse,
    CountsResponse,
    Email,
    EmailListResponse,
    EmailResponse,
)

if TYPE_CHECKING:
    from client._http import HTTPClient


class MessagesClient(BaseClient):
    """Client for message storage, read state and ordered views.

    Example:
        with MailBoxClient() as client:
            root = Email(timestamp=1, subject="Lunch?")
            client.messages.add(root)
            client.messages.add(root.reply(timestamp=2, subject="Re: Lunch?"))
            newest_first = client.messages.timestamp_view()
    """

    def __init__(self, http_client: "HTTPClient") -> None:
        super().__init__(http_client)

    def add(self, email: Email) -> AddMessageResponse:
        """Add a message to the mailbox.

        Args:
            email: The message to add.

        Returns:
            Whether the message was added (False for a duplicate).
        """
        data = self._post("/messages", json=email.model_dump(mode="json"))
        return AddMessageResponse(**data)

    def get(self, message_id: UUID) -> EmailResponse:
        """Get a message and its read flag.

        Raises:
            NotFoundError: If the message is not stored.
        """
        data = self._get(f"/messages/{message_id}")
        return EmailResponse(**data)

    def delete(self, message_id: UUID) -> ActionResponse:
        """Delete a message.

        Raises:
            NotFoundError: If the message is not stored.
        """
        data = self._delete(f"/messages/{message_id}")
        return ActionResponse(**data)

    def mark_read(self, message_id: UUID) -> ActionResponse:
        """Mark a message as read."""
        data = self._post(f"/messages/{message_id}/read")
        return ActionResponse(**data)

    def mark_unread(self, message_id: UUID) -> ActionResponse:
        """Mark a message as unread."""
        data = self._post(f"/messages/{message_id}/unread")
        return ActionResponse(**data)

    def is_read(self, message_id: UUID) -> bool:
        """Return the read flag of a message.

        Raises:
            NotFoundError: If the message is not stored.
        """
        data = self._get(f"/messages/{message_id}/read")
        return data["is_read"]

    def counts(self) -> CountsResponse:
        """Get total, unread and thread counts."""
        data = self._get("/messages/counts")
        return CountsResponse(**data)

    def timestamp_view(self) -> list[Email]:
        """Get all messages, most recent first."""
        data = self._get("/views/timestamp")
        return EmailListResponse(**data).emails

    def in_range(self, start: int, end: int) -> list[Email]:
        """Get messages with start <= timestamp <= end, earliest first.

        Raises:
            APIError: If start is after end (HTTP 400).
        """
        data = self._get("/views/range", params={"start": start, "end": end})
        return EmailListResponse(**data).emails

    def threaded_view(self) -> list[Email]:
        """Get all messages grouped by thread, most recent activity first."""
        data = self._get("/views/threaded")
        return EmailListResponse(**data).emails
