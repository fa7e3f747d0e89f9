"""Shared request and response models for API endpoints.

This module contains the models used across the message, view and thread
route handlers, plus conversions from the mailbox domain models.
"""

from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from models.email import NO_PARENT_ID, Email


class EmailCreateRequest(BaseModel):
    """Request model for adding a message to the mailbox.

    Attributes:
        message_id: Message identifier (generated when omitted).
        parent_id: Id of the message this replies to (omit for a new thread).
        timestamp: Non-negative clock value.
        from_address: Sender email address.
        subject: Email subject line.
        body_text: Plain text body content.
    """

    message_id: UUID | None = Field(default=None, description="Message identifier")
    parent_id: UUID = Field(default=NO_PARENT_ID, description="Message ID this replies to")
    timestamp: int = Field(ge=0, description="Clock value when the email was received")
    from_address: str = Field(default="", description="Sender email address")
    subject: str = Field(default="", description="Email subject line")
    body_text: str = Field(default="", description="Plain text body content")

    @field_validator("message_id")
    @classmethod
    def validate_message_id(cls, value: UUID | None) -> UUID | None:
        """Reject the reserved no-parent id as a message id."""
        if value == NO_PARENT_ID:
            raise ValueError("message_id must not be the reserved no-parent id")
        return value

    def to_email(self) -> Email:
        """Build the Email value this request describes."""
        data = self.model_dump(exclude_none=True)
        return Email(**data)


class EmailResponse(BaseModel):
    """Response model for a single message with its read flag.

    Attributes:
        email: The stored message.
        is_read: Read/unread status.
    """

    email: Email
    is_read: bool


class AddMessageResponse(BaseModel):
    """Response model for adding a message.

    Attributes:
        added: Whether the message was stored (False for a duplicate).
        message_id: Id of the submitted message.
    """

    added: bool
    message_id: UUID


class ActionResponse(BaseModel):
    """Response model for mailbox actions (delete, mark read/unread).

    Attributes:
        message_id: Id of the message acted upon.
        action: Name of the action that was applied.
        message: Human-readable message describing the result.
    """

    message_id: UUID
    action: str
    message: str


class ReadStateResponse(BaseModel):
    """Response model for a read-state lookup."""

    message_id: UUID
    is_read: bool


class CountsResponse(BaseModel):
    """Response model for mailbox counts.

    Attributes:
        total_count: Number of messages in the mailbox.
        unread_count: Number of unread messages.
        thread_count: Number of threads, or None if a parent chain loops.
    """

    total_count: int
    unread_count: int
    thread_count: int | None


class EmailListResponse(BaseModel):
    """Response model for ordered message views.

    Attributes:
        emails: Messages in view order.
        count: Number of messages returned.
    """

    emails: list[Email]
    count: int

    @classmethod
    def from_emails(cls, emails: list[Email]) -> "EmailListResponse":
        """Wrap an ordered list of emails."""
        return cls(emails=emails, count=len(emails))
