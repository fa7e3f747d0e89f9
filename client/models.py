"""Client response models for the mailbox API client.

This module re-exports the models from the API and domain layers so client
code can import everything from one place.
"""

from api.models import (
    ActionResponse,
    AddMessageResponse,
    CountsResponse,
    EmailListResponse,
    EmailResponse,
)
from api.routes.threads import ThreadListResponse, ThreadResponse
from models.email import NO_PARENT_ID, Email, EmailThread

__all__ = [
    "ActionResponse",
    "AddMessageResponse",
    "CountsResponse",
    "EmailListResponse",
    "EmailResponse",
    "ThreadListResponse",
    "ThreadResponse",
    "NO_PARENT_ID",
    "Email",
    "EmailThread",
]
