"""Mailbox model.

MailBox owns the messages of a single mailbox together with their read
flags, and keeps a ThreadIndex in step with every change. All mutation goes
through MailBox methods, which is what keeps the message map, the read-state
map and the index co-indexed.
"""

import logging
import threading
from contextlib import nullcontext
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, PrivateAttr

from models.email import Email, EmailThread, timestamp_key
from models.errors import MessageNotFoundError, ThreadCycleError
from models.thread_index import ThreadIndex

logger = logging.getLogger(__name__)


class MailBox(BaseModel):
    """In-memory mailbox with read tracking and thread reconstruction.

    Every public operation runs under a single lock so callers on different
    threads never observe a half-applied change. Pass ``thread_safe=False``
    to drop the lock when the mailbox is only used from one thread.

    Args:
        name: Display name of the mailbox.
        thread_safe: Whether public operations are serialized with a lock.
        update_count: Number of successful mutations applied.
    """

    name: str = Field(default="inbox", description="Display name of the mailbox")
    thread_safe: bool = Field(default=True, description="Serialize operations with a lock")
    update_count: int = Field(default=0, description="Number of mutations applied")

    _messages: dict[UUID, Email] = PrivateAttr(default_factory=dict)
    _read_state: dict[UUID, bool] = PrivateAttr(default_factory=dict)
    _index: ThreadIndex = PrivateAttr(default_factory=ThreadIndex)
    _lock: Any = PrivateAttr(default=None)

    def model_post_init(self, __context: Any) -> None:
        """Create the operation lock after model creation.

        Args:
            __context: Pydantic context (unused).
        """
        self._lock = threading.RLock() if self.thread_safe else nullcontext()

    def __len__(self) -> int:
        return self.get_msg_count()

    def __contains__(self, message_id: object) -> bool:
        with self._lock:
            return message_id in self._messages

    def __copy__(self) -> "MailBox":
        """Return an independent mailbox holding the same messages and flags.

        model_copy() goes through here, so a copy never shares the message
        map, read-state map, index or lock with the original. Emails are
        immutable and are shared.
        """
        with self._lock:
            copied = type(self)(
                name=self.name,
                thread_safe=self.thread_safe,
                update_count=self.update_count,
            )
            for message_id, msg in self._messages.items():
                copied._messages[message_id] = msg
                copied._index.add(msg)
            copied._read_state.update(self._read_state)
        return copied

    def __deepcopy__(self, memo: dict[int, Any] | None = None) -> "MailBox":
        return self.__copy__()

    # ------------------------------------------------------------------
    # Messages and read state
    # ------------------------------------------------------------------

    def add_msg(self, msg: Email | None) -> bool:
        """Add a new message to the mailbox as unread.

        A message with the same id but different content replaces the stored
        one and starts out unread again.

        Args:
            msg: The message to add.

        Returns:
            True if the message was added, False if msg is None or an equal
            message is already stored.
        """
        if msg is None:
            return False

        with self._lock:
            existing = self._messages.get(msg.message_id)
            if existing == msg:
                logger.debug(f"Rejected duplicate message {msg.message_id}")
                return False
            if existing is not None:
                logger.warning(
                    f"Message {msg.message_id} replaced by a different value; "
                    "read state reset to unread"
                )

            self._messages[msg.message_id] = msg
            self._read_state[msg.message_id] = False
            self._index.add(msg)
            self.update_count += 1

            if self._index.is_dangling(msg.message_id):
                logger.warning(
                    f"Message {msg.message_id} replies to {msg.parent_id}, "
                    "which is not in the mailbox"
                )
            logger.debug(f"Added message {msg.message_id} (timestamp={msg.timestamp})")
            return True

    def get_msg(self, message_id: UUID | None) -> Email | None:
        """Return the message with the given id, or None if it is not stored."""
        with self._lock:
            return self._messages.get(message_id)

    def del_msg(self, message_id: UUID | None) -> bool:
        """Delete a message and its read flag.

        Replies to the deleted message stay in the mailbox with a dangling
        parent reference.

        Args:
            message_id: Id of the message to delete.

        Returns:
            True if the message existed and was removed, False otherwise.
        """
        if message_id is None:
            return False

        with self._lock:
            if message_id not in self._messages:
                return False

            del self._messages[message_id]
            del self._read_state[message_id]
            self._index.remove(message_id)
            self.update_count += 1

            logger.debug(f"Deleted message {message_id}")
            return True

    def get_msg_count(self) -> int:
        """Return the number of messages in the mailbox."""
        with self._lock:
            return len(self._messages)

    def get_unread_msg_count(self) -> int:
        """Return the number of unread messages in the mailbox."""
        with self._lock:
            return sum(1 for is_read in self._read_state.values() if not is_read)

    def mark_read(self, message_id: UUID | None) -> bool:
        """Mark a message as read.

        Returns:
            True if the message exists, False otherwise.
        """
        return self._set_read(message_id, True)

    def mark_unread(self, message_id: UUID | None) -> bool:
        """Mark a message as unread.

        Returns:
            True if the message exists, False otherwise.
        """
        return self._set_read(message_id, False)

    def is_read(self, message_id: UUID) -> bool:
        """Determine whether a message has been read.

        Unlike the other lookups this does not report a missing message with
        a sentinel: the id is expected to be valid.

        Args:
            message_id: Id of a stored message.

        Returns:
            True if the message has been read, False otherwise.

        Raises:
            MessageNotFoundError: If the message is not in the mailbox.
        """
        with self._lock:
            if message_id not in self._read_state:
                raise MessageNotFoundError(message_id)
            return self._read_state[message_id]

    def _set_read(self, message_id: UUID | None, is_read: bool) -> bool:
        with self._lock:
            if message_id not in self._read_state:
                return False
            self._read_state[message_id] = is_read
            self.update_count += 1
            return True

    # ------------------------------------------------------------------
    # Timestamp views
    # ------------------------------------------------------------------

    def get_timestamp_view(self) -> list[Email]:
        """Return all messages, most recent first.

        Messages with equal timestamps appear in arbitrary order.
        """
        with self._lock:
            return sorted(self._messages.values(), key=timestamp_key, reverse=True)

    def get_msgs_in_range(self, start_time: int, end_time: int) -> list[Email]:
        """Return messages with start_time <= timestamp <= end_time, earliest first.

        Args:
            start_time: Start of the time range, >= 0.
            end_time: End of the time range, >= start_time.

        Returns:
            Matching messages sorted by ascending timestamp. Ties are in
            arbitrary order.

        Raises:
            ValueError: If start_time is negative or greater than end_time.
        """
        if start_time < 0:
            raise ValueError(f"start_time must be non-negative, got {start_time}")
        if start_time > end_time:
            raise ValueError(
                f"start_time ({start_time}) must not be after end_time ({end_time})"
            )

        with self._lock:
            matches = [
                msg
                for msg in self._messages.values()
                if start_time <= msg.timestamp <= end_time
            ]
        matches.sort(key=timestamp_key)
        return matches

    # ------------------------------------------------------------------
    # Threads
    # ------------------------------------------------------------------

    def mark_thread_as_read(self, message_id: UUID | None) -> bool:
        """Mark every message in the thread of the given message as read.

        Args:
            message_id: Id of any message in the thread.

        Returns:
            True if the message is in the mailbox, False otherwise.

        Raises:
            ThreadCycleError: If the message's parent chain loops.
        """
        return self._set_thread_read(message_id, True)

    def mark_thread_as_unread(self, message_id: UUID | None) -> bool:
        """Mark every message in the thread of the given message as unread.

        Args:
            message_id: Id of any message in the thread.

        Returns:
            True if the message is in the mailbox, False otherwise.

        Raises:
            ThreadCycleError: If the message's parent chain loops.
        """
        return self._set_thread_read(message_id, False)

    def _set_thread_read(self, message_id: UUID | None, is_read: bool) -> bool:
        with self._lock:
            if message_id not in self._messages:
                return False
            members = self._index.members_of(message_id)
            for member_id in members:
                self._read_state[member_id] = is_read
            self.update_count += 1

            logger.debug(
                f"Marked {len(members)} message(s) in thread of {message_id} "
                f"as {'read' if is_read else 'unread'}"
            )
            return True

    def get_thread(self, message_id: UUID | None) -> list[Email]:
        """Return the messages in the thread of the given message, newest first.

        Returns:
            The thread's messages, or an empty list if the message is not
            in the mailbox.
        """
        with self._lock:
            if message_id not in self._messages:
                return []
            members = [self._messages[m] for m in self._index.members_of(message_id)]
        members.sort(key=timestamp_key, reverse=True)
        return members

    def get_thread_root(self, message_id: UUID | None) -> Email | None:
        """Return the root message of the given message's thread.

        Returns:
            The root Email, or None if the message is not stored or its
            thread's root has been deleted.
        """
        with self._lock:
            if message_id not in self._messages:
                return None
            return self._messages.get(self._index.root_of(message_id))

    def get_thread_count(self) -> int:
        """Return the number of threads in the mailbox."""
        with self._lock:
            return len(self._index.threads())

    def get_threads(self) -> list[EmailThread]:
        """Return a summary of every thread, most recent activity first."""
        with self._lock:
            return [
                EmailThread(
                    root_id=root_id,
                    message_ids=[msg.message_id for msg in members],
                    latest_timestamp=members[0].timestamp,
                    message_count=len(members),
                    unread_count=sum(
                        1 for msg in members if not self._read_state[msg.message_id]
                    ),
                    has_root=root_id in self._messages,
                )
                for root_id, members in self._grouped_threads()
            ]

    def get_threaded_view(self) -> list[Email]:
        """Return all messages grouped by thread.

        The thread with the most recent activity comes first, and within a
        thread more recent messages come first. Ties between threads or
        between messages are in arbitrary order.

        Raises:
            ThreadCycleError: If any parent chain loops.
        """
        with self._lock:
            return [msg for _, members in self._grouped_threads() for msg in members]

    def _grouped_threads(self) -> list[tuple[UUID, list[Email]]]:
        """Group messages by thread, each group newest first, groups by activity."""
        groups = []
        for root_id, member_ids in self._index.threads().items():
            members = sorted(
                (self._messages[m] for m in member_ids), key=timestamp_key, reverse=True
            )
            groups.append((root_id, members))
        groups.sort(key=lambda group: group[1][0].timestamp, reverse=True)
        return groups

    # ------------------------------------------------------------------
    # State management
    # ------------------------------------------------------------------

    def validate_state(self) -> list[str]:
        """Validate internal state consistency and return any issues.

        Returns:
            List of validation error messages (empty list if valid).
        """
        issues = []
        with self._lock:
            message_ids = set(self._messages)
            read_ids = set(self._read_state)
            indexed_ids = set(self._index)

            for message_id in message_ids - read_ids:
                issues.append(f"Message '{message_id}' has no read state")
            for message_id in read_ids - message_ids:
                issues.append(f"Read state references non-existent message: {message_id}")
            for message_id in message_ids ^ indexed_ids:
                issues.append(f"Thread index out of sync for message: {message_id}")

            for message_id, msg in self._messages.items():
                if msg.message_id != message_id:
                    issues.append(
                        f"Message stored under '{message_id}' has id '{msg.message_id}'"
                    )

            for message_id in self._index.find_cycles():
                issues.append(f"Parent chain of message '{message_id}' contains a cycle")

        return issues

    def get_snapshot(self) -> dict[str, Any]:
        """Return a JSON-serializable summary of the mailbox.

        Returns:
            Dictionary of mailbox counts and metadata.
        """
        with self._lock:
            try:
                thread_count: int | None = len(self._index.threads())
            except ThreadCycleError:
                thread_count = None
            dangling = sum(1 for m in self._messages if self._index.is_dangling(m))
            return {
                "name": self.name,
                "update_count": self.update_count,
                "total_messages": len(self._messages),
                "unread_count": sum(1 for r in self._read_state.values() if not r),
                "thread_count": thread_count,
                "dangling_count": dangling,
            }

    def clear(self) -> None:
        """Remove every message and reset the update count."""
        with self._lock:
            self._messages.clear()
            self._read_state.clear()
            self._index.clear()
            self.update_count = 0
            logger.debug(f"Cleared mailbox '{self.name}'")

    @property
    def summary(self) -> str:
        """Return a brief human-readable summary of the mailbox."""
        with self._lock:
            total = len(self._messages)
            unread = sum(1 for r in self._read_state.values() if not r)
        return f"{unread} unread, {total} total"
