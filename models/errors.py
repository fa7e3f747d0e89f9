"""Exceptions raised by the mailbox models."""

from uuid import UUID


class MailBoxError(Exception):
    """Base exception for mailbox errors."""


class MessageNotFoundError(MailBoxError, ValueError):
    """Raised when an operation requires a message that is not in the mailbox.

    Args:
        message_id: The id that was looked up.
    """

    def __init__(self, message_id: UUID):
        self.message_id = message_id
        super().__init__(f"Message '{message_id}' not found in mailbox")


class ThreadCycleError(MailBoxError, RuntimeError):
    """Raised when a parent chain loops back on itself.

    Args:
        message_id: The id the walk started from.
        chain: The ids visited before the cycle closed, in walk order.
    """

    def __init__(self, message_id: UUID, chain: list[UUID]):
        self.message_id = message_id
        self.chain = chain
        super().__init__(
            f"Parent chain of message '{message_id}' contains a cycle "
            f"after {len(chain)} step(s)"
        )
