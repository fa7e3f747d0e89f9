"""Mailbox API Client Library.

This module provides a type-safe Python client for the threaded mailbox
REST API.

Example:
    Synchronous usage::

        from client import Email, MailBoxClient

        with MailBoxClient(base_url="http://localhost:8000") as client:
            root = Email(timestamp=1, subject="Lunch?")
            client.messages.add(root)
            client.threads.mark_read(root.message_id)
            view = client.messages.threaded_view()
"""

from client.client import MailBoxClient
from client.exceptions import (
    APIError,
    ConflictError,
    ConnectionError,
    MailBoxClientError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
)
from client.models import NO_PARENT_ID, Email, EmailThread

__all__ = [
    "MailBoxClient",
    "Email",
    "EmailThread",
    "NO_PARENT_ID",
    "MailBoxClientError",
    "ConnectionError",
    "TimeoutError",
    "APIError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "ServerError",
]
