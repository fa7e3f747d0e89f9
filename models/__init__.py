"""Mailbox data models package.

This package contains the email value model, the thread index that
reconstructs conversation threads from parent references, and the mailbox
that owns messages and their read state.
"""

from models.email import NO_PARENT_ID, Email, EmailThread, compare_by_timestamp, timestamp_key
from models.errors import MailBoxError, MessageNotFoundError, ThreadCycleError
from models.mailbox import MailBox
from models.thread_index import ThreadIndex

__all__ = [
    "NO_PARENT_ID",
    "Email",
    "EmailThread",
    "compare_by_timestamp",
    "timestamp_key",
    "MailBoxError",
    "MessageNotFoundError",
    "ThreadCycleError",
    "MailBox",
    "ThreadIndex",
]
