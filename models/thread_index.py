"""Thread index over email parent references.

The index keeps the reply forest as two identifier-indexed maps that are
updated incrementally as messages come and go:

- parents: message id -> parent id (NO_PARENT_ID for thread roots)
- children: parent id -> ids of stored messages replying to it

Thread membership is derived from these maps on demand. A message's thread
key is found by walking backward through parent ids until a root is reached.
When the walk reaches a parent that is no longer stored (for example after
the parent was deleted), the missing parent id becomes the thread key, so
orphaned replies to the same deleted message stay in one thread.
"""

import logging
from collections import defaultdict
from typing import Iterator
from uuid import UUID

from models.email import NO_PARENT_ID, Email
from models.errors import MessageNotFoundError, ThreadCycleError

logger = logging.getLogger(__name__)


class ThreadIndex:
    """Parent/children adjacency for the messages of one mailbox.

    The index only knows ids. It does not own Email objects or read state.
    """

    def __init__(self) -> None:
        self._parents: dict[UUID, UUID] = {}
        self._children: defaultdict[UUID, set[UUID]] = defaultdict(set)

    def __len__(self) -> int:
        return len(self._parents)

    def __contains__(self, message_id: object) -> bool:
        return message_id in self._parents

    def __iter__(self) -> Iterator[UUID]:
        return iter(self._parents)

    def add(self, email: Email) -> None:
        """Index an email, replacing any previous entry with the same id.

        Args:
            email: Email to index.
        """
        if email.message_id in self._parents:
            self.remove(email.message_id)

        self._parents[email.message_id] = email.parent_id
        if not email.is_root:
            self._children[email.parent_id].add(email.message_id)

    def remove(self, message_id: UUID) -> bool:
        """Drop a message from the index.

        Replies to the removed message keep their entries and become
        orphans keyed under the removed id.

        Args:
            message_id: Id of the message to remove.

        Returns:
            True if the id was indexed, False otherwise.
        """
        if message_id not in self._parents:
            return False

        parent_id = self._parents.pop(message_id)
        siblings = self._children.get(parent_id)
        if siblings is not None:
            siblings.discard(message_id)
            if not siblings:
                del self._children[parent_id]
        return True

    def clear(self) -> None:
        """Remove every entry from the index."""
        self._parents.clear()
        self._children.clear()

    def parent_of(self, message_id: UUID) -> UUID | None:
        """Return the parent id of an indexed message, or None if not indexed."""
        return self._parents.get(message_id)

    def children_of(self, message_id: UUID) -> set[UUID]:
        """Return ids of indexed messages that reply to the given id."""
        return set(self._children.get(message_id, ()))

    def is_dangling(self, message_id: UUID) -> bool:
        """Whether an indexed message replies to a message that is not indexed."""
        parent_id = self._parents.get(message_id)
        if parent_id is None or parent_id == NO_PARENT_ID:
            return False
        return parent_id not in self._parents

    def root_of(self, message_id: UUID) -> UUID:
        """Find the thread key of a message by walking its parent chain.

        Args:
            message_id: Id of an indexed message.

        Returns:
            The id of the thread root, or the id of the first missing
            ancestor if the chain is broken.

        Raises:
            MessageNotFoundError: If message_id is not indexed.
            ThreadCycleError: If the parent chain loops.
        """
        if message_id not in self._parents:
            raise MessageNotFoundError(message_id)
        return self._walk_to_root(message_id, {})

    def members_of(self, message_id: UUID) -> set[UUID]:
        """Return ids of every indexed message in the same thread.

        Args:
            message_id: Id of an indexed message.

        Returns:
            Set of member ids, including message_id itself.

        Raises:
            MessageNotFoundError: If message_id is not indexed.
            ThreadCycleError: If the parent chain loops.
        """
        return self._collect(self.root_of(message_id))

    def threads(self) -> dict[UUID, list[UUID]]:
        """Group every indexed message by thread key.

        Roots found along one walk are remembered for the rest of the pass,
        so each parent link is followed at most once.

        Returns:
            Mapping of thread key to member ids.

        Raises:
            ThreadCycleError: If any parent chain loops.
        """
        known_roots: dict[UUID, UUID] = {}
        groups: defaultdict[UUID, list[UUID]] = defaultdict(list)
        for message_id in self._parents:
            groups[self._walk_to_root(message_id, known_roots)].append(message_id)
        return dict(groups)

    def find_cycles(self) -> list[UUID]:
        """Return ids of indexed messages whose parent chain loops."""
        cyclic = []
        known_roots: dict[UUID, UUID] = {}
        for message_id in self._parents:
            try:
                self._walk_to_root(message_id, known_roots)
            except ThreadCycleError:
                cyclic.append(message_id)
        return cyclic

    def _walk_to_root(self, message_id: UUID, known_roots: dict[UUID, UUID]) -> UUID:
        chain: list[UUID] = []
        seen: set[UUID] = set()
        current = message_id

        while True:
            if current in known_roots:
                root_id = known_roots[current]
                break
            if current not in self._parents:
                # Broken chain: the missing ancestor keys the thread
                root_id = current
                break
            if current in seen:
                logger.error(
                    f"Cycle in parent chain of message {message_id} "
                    f"after {len(chain)} step(s)"
                )
                raise ThreadCycleError(message_id, chain)

            seen.add(current)
            chain.append(current)
            parent_id = self._parents[current]
            if parent_id == NO_PARENT_ID:
                root_id = current
                break
            current = parent_id

        for visited in chain:
            known_roots[visited] = root_id
        return root_id

    def _collect(self, root_id: UUID) -> set[UUID]:
        members: set[UUID] = set()
        if root_id in self._parents:
            members.add(root_id)

        pending = list(self._children.get(root_id, ()))
        while pending:
            current = pending.pop()
            if current in members:
                continue
            members.add(current)
            pending.extend(self._children.get(current, ()))
        return members
