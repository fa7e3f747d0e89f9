"""Email value model and thread summary model."""

from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Reserved parent id for messages that start a thread. Never a real message id.
NO_PARENT_ID = UUID(int=0)


class Email(BaseModel):
    """Represents an immutable email message.

    Two Email instances are equal when all of their fields are equal, so a
    message re-delivered with the same content compares equal to the stored
    copy.

    Args:
        message_id: Unique message identifier (UUID).
        parent_id: Identifier of the message this one replies to, or
            NO_PARENT_ID if it starts a thread.
        timestamp: Non-negative clock value. Not guaranteed unique.
        from_address: Sender email address.
        subject: Email subject line.
        body_text: Plain text body content.
    """

    model_config = ConfigDict(frozen=True)

    message_id: UUID = Field(default_factory=uuid4, description="Unique message identifier")
    parent_id: UUID = Field(default=NO_PARENT_ID, description="Message ID this email replies to")
    timestamp: int = Field(ge=0, description="Clock value when the email was received")
    from_address: str = Field(default="", description="Sender email address")
    subject: str = Field(default="", description="Email subject line")
    body_text: str = Field(default="", description="Plain text body content")

    @field_validator("message_id")
    @classmethod
    def validate_message_id(cls, value: UUID) -> UUID:
        """Reject the reserved no-parent id as a message id.

        Raises:
            ValueError: If value is NO_PARENT_ID.
        """
        if value == NO_PARENT_ID:
            raise ValueError(f"message_id must not be the reserved no-parent id {NO_PARENT_ID}")
        return value

    @property
    def is_root(self) -> bool:
        """Whether this email starts a thread."""
        return self.parent_id == NO_PARENT_ID

    def reply(self, timestamp: int, **fields: Any) -> "Email":
        """Create a new email replying to this one.

        Args:
            timestamp: Timestamp of the reply.
            **fields: Additional fields for the reply (subject, body_text, ...).

        Returns:
            A new Email whose parent_id is this email's message_id.
        """
        return Email(parent_id=self.message_id, timestamp=timestamp, **fields)


def timestamp_key(email: Email) -> int:
    """Sort key ordering emails by timestamp."""
    return email.timestamp


def compare_by_timestamp(first: Email, second: Email) -> int:
    """Three-way comparison of two emails by timestamp.

    Returns:
        A negative number, zero or a positive number when ``first`` is
        earlier than, tied with or later than ``second``.
    """
    return (first.timestamp > second.timestamp) - (first.timestamp < second.timestamp)


class EmailThread(BaseModel):
    """Read-only summary of a conversation thread.

    Threads are derived from parent references and are never stored. The
    root_id is the id of the root message, or the id of a missing parent
    when the thread's root has been deleted.

    Args:
        root_id: Thread key (root message id or missing parent id).
        message_ids: Member message ids, newest first.
        latest_timestamp: Maximum timestamp among the members.
        message_count: Number of messages in the thread.
        unread_count: Number of unread messages in the thread.
        has_root: Whether the root message is present in the mailbox.
    """

    model_config = ConfigDict(frozen=True)

    root_id: UUID = Field(description="Thread root identifier")
    message_ids: list[UUID] = Field(default_factory=list, description="Member ids, newest first")
    latest_timestamp: int = Field(ge=0, description="Thread activity timestamp")
    message_count: int = Field(default=0, description="Number of emails in thread")
    unread_count: int = Field(default=0, description="Number of unread emails in thread")
    has_root: bool = Field(default=True, description="Whether the root message is stored")
