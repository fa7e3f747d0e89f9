"""Unit tests for MailBox thread operations and the threaded view."""

from uuid import uuid4

import pytest

from models.email import Email
from models.errors import ThreadCycleError
from models.mailbox import MailBox
from tests.fixtures.mailbox import create_email, create_mailbox


class TestMarkThread:
    """Test mark_thread_as_read and mark_thread_as_unread."""

    def test_mark_thread_read_from_leaf(self, two_threads):
        """Verify marking from the newest reply reaches the whole thread only."""
        mailbox = two_threads.mailbox

        assert mailbox.mark_thread_as_read(two_threads.c.message_id) is True

        assert mailbox.is_read(two_threads.a.message_id) is True
        assert mailbox.is_read(two_threads.b.message_id) is True
        assert mailbox.is_read(two_threads.c.message_id) is True
        assert mailbox.is_read(two_threads.d.message_id) is False

    def test_mark_thread_read_from_intermediate(self, two_threads):
        """Verify marking from a middle message reaches replies below it too."""
        mailbox = two_threads.mailbox

        mailbox.mark_thread_as_read(two_threads.b.message_id)

        assert mailbox.get_unread_msg_count() == 1
        assert mailbox.is_read(two_threads.c.message_id) is True

    def test_mark_thread_read_from_root_covers_branches(self):
        """Verify every branch of a thread is marked."""
        root = create_email(timestamp=1)
        left = root.reply(timestamp=2)
        right = root.reply(timestamp=3)
        deep = left.reply(timestamp=4)
        mailbox = create_mailbox(root, left, right, deep)

        mailbox.mark_thread_as_read(right.message_id)

        assert mailbox.get_unread_msg_count() == 0

    def test_mark_thread_unread(self, two_threads):
        """Verify marking a thread unread resets every member."""
        mailbox = two_threads.mailbox
        for email in (two_threads.a, two_threads.b, two_threads.c, two_threads.d):
            mailbox.mark_read(email.message_id)

        assert mailbox.mark_thread_as_unread(two_threads.a.message_id) is True

        assert mailbox.is_read(two_threads.a.message_id) is False
        assert mailbox.is_read(two_threads.b.message_id) is False
        assert mailbox.is_read(two_threads.c.message_id) is False
        assert mailbox.is_read(two_threads.d.message_id) is True

    def test_mark_thread_already_in_state(self, two_threads):
        """Verify marking an already-read thread still reports True."""
        mailbox = two_threads.mailbox
        mailbox.mark_thread_as_read(two_threads.a.message_id)

        assert mailbox.mark_thread_as_read(two_threads.a.message_id) is True

    def test_mark_thread_unknown(self, two_threads):
        """Verify an unknown or None id reports False and changes nothing."""
        mailbox = two_threads.mailbox

        assert mailbox.mark_thread_as_read(uuid4()) is False
        assert mailbox.mark_thread_as_unread(None) is False
        assert mailbox.get_unread_msg_count() == 4


class TestThreadedView:
    """Test get_threaded_view."""

    def test_two_thread_scenario(self, two_threads):
        """Verify D's thread comes first, then C, B, A."""
        view = two_threads.mailbox.get_threaded_view()

        assert view == [two_threads.d, two_threads.c, two_threads.b, two_threads.a]

    def test_activity_not_root_time_orders_threads(self):
        """Verify an old thread with a new reply outranks a newer thread."""
        old_root = create_email(timestamp=1)
        new_root = create_email(timestamp=5)
        late_reply = old_root.reply(timestamp=9)
        mailbox = create_mailbox(old_root, new_root, late_reply)

        view = mailbox.get_threaded_view()

        assert view == [late_reply, old_root, new_root]

    def test_within_thread_newest_first(self):
        """Verify branches are interleaved by timestamp inside a thread."""
        root = create_email(timestamp=1)
        left = root.reply(timestamp=2)
        right = root.reply(timestamp=4)
        left_reply = left.reply(timestamp=3)
        mailbox = create_mailbox(root, left, right, left_reply)

        view = mailbox.get_threaded_view()

        assert [e.timestamp for e in view] == [4, 3, 2, 1]

    def test_groups_are_contiguous(self):
        """Verify each thread's messages appear together."""
        roots = [create_email(timestamp=t) for t in (1, 2, 3)]
        replies = [root.reply(timestamp=10 - i) for i, root in enumerate(roots)]
        mailbox = create_mailbox(*roots, *replies)

        view = mailbox.get_threaded_view()

        assert len(view) == 6
        for position in range(0, 6, 2):
            newer, older = view[position], view[position + 1]
            assert newer.parent_id == older.message_id

    def test_view_is_permutation(self, two_threads):
        """Verify the threaded view keeps every message exactly once."""
        mailbox = two_threads.mailbox
        mailbox.add_msg(create_email(timestamp=5))

        view = mailbox.get_threaded_view()

        assert len(view) == mailbox.get_msg_count()
        assert set(view) == set(mailbox.get_timestamp_view())

    def test_empty(self, mailbox):
        """Verify an empty mailbox gives an empty threaded view."""
        assert mailbox.get_threaded_view() == []


class TestThreadQueries:
    """Test get_thread, get_thread_root, get_threads and get_thread_count."""

    def test_get_thread(self, two_threads):
        """Verify get_thread returns members newest first."""
        thread = two_threads.mailbox.get_thread(two_threads.a.message_id)

        assert thread == [two_threads.c, two_threads.b, two_threads.a]

    def test_get_thread_unknown(self, two_threads):
        """Verify get_thread of an unknown id is empty."""
        assert two_threads.mailbox.get_thread(uuid4()) == []

    def test_get_thread_root(self, two_threads):
        """Verify the root is found from any member."""
        mailbox = two_threads.mailbox

        assert mailbox.get_thread_root(two_threads.c.message_id) == two_threads.a
        assert mailbox.get_thread_root(two_threads.d.message_id) == two_threads.d
        assert mailbox.get_thread_root(uuid4()) is None

    def test_get_threads_summaries(self, two_threads):
        """Verify thread summaries are ordered by activity."""
        mailbox = two_threads.mailbox
        mailbox.mark_read(two_threads.b.message_id)

        threads = mailbox.get_threads()

        assert [t.root_id for t in threads] == [two_threads.d.message_id, two_threads.a.message_id]
        abc = threads[1]
        assert abc.message_ids == [
            two_threads.c.message_id,
            two_threads.b.message_id,
            two_threads.a.message_id,
        ]
        assert abc.latest_timestamp == 3
        assert abc.message_count == 3
        assert abc.unread_count == 2
        assert abc.has_root is True
        assert mailbox.get_thread_count() == 2


class TestDanglingParents:
    """Test behavior after a parent message is deleted."""

    def test_delete_intermediate_message(self, two_threads):
        """Verify deleting B leaves C in its own thread without crashing."""
        mailbox = two_threads.mailbox
        b_id = two_threads.b.message_id

        assert mailbox.del_msg(b_id) is True

        assert mailbox.get_msg(b_id) is None
        with pytest.raises(ValueError):
            mailbox.is_read(b_id)
        assert mailbox.get_thread(two_threads.c.message_id) == [two_threads.c]
        assert mailbox.get_thread_root(two_threads.c.message_id) is None
        assert mailbox.validate_state() == []

    def test_mark_thread_after_delete(self, two_threads):
        """Verify marking C's thread after deleting B leaves A alone."""
        mailbox = two_threads.mailbox
        mailbox.del_msg(two_threads.b.message_id)

        assert mailbox.mark_thread_as_read(two_threads.c.message_id) is True

        assert mailbox.is_read(two_threads.c.message_id) is True
        assert mailbox.is_read(two_threads.a.message_id) is False

    def test_threaded_view_after_delete(self, two_threads):
        """Verify the orphan forms its own thread in the threaded view."""
        mailbox = two_threads.mailbox
        mailbox.del_msg(two_threads.b.message_id)

        view = mailbox.get_threaded_view()

        assert view == [two_threads.d, two_threads.c, two_threads.a]
        orphan_thread = mailbox.get_threads()[1]
        assert orphan_thread.root_id == two_threads.b.message_id
        assert orphan_thread.has_root is False

    def test_restoring_parent_rejoins_thread(self, two_threads):
        """Verify re-adding B reconnects C to A's thread."""
        mailbox = two_threads.mailbox
        mailbox.del_msg(two_threads.b.message_id)
        mailbox.add_msg(two_threads.b)

        assert mailbox.get_thread(two_threads.c.message_id) == [
            two_threads.c,
            two_threads.b,
            two_threads.a,
        ]

    def test_snapshot_counts_dangling(self, two_threads):
        """Verify the snapshot reports dangling replies."""
        two_threads.mailbox.del_msg(two_threads.b.message_id)

        assert two_threads.mailbox.get_snapshot()["dangling_count"] == 1


class TestCycles:
    """Test the cycle guard through MailBox operations."""

    @pytest.fixture
    def cyclic_mailbox(self):
        first_id, second_id = uuid4(), uuid4()
        first = Email(message_id=first_id, parent_id=second_id, timestamp=1)
        second = Email(message_id=second_id, parent_id=first_id, timestamp=2)
        healthy = create_email(timestamp=3)
        return create_mailbox(first, second, healthy), first, healthy

    def test_mark_thread_raises(self, cyclic_mailbox):
        """Verify marking a cyclic thread fails fast and marks nothing."""
        mailbox, first, _ = cyclic_mailbox

        with pytest.raises(ThreadCycleError):
            mailbox.mark_thread_as_read(first.message_id)

        assert mailbox.get_unread_msg_count() == 3

    def test_threaded_view_raises(self, cyclic_mailbox):
        """Verify the threaded view surfaces the cycle."""
        mailbox, _, _ = cyclic_mailbox

        with pytest.raises(ThreadCycleError):
            mailbox.get_threaded_view()

    def test_healthy_thread_still_usable(self, cyclic_mailbox):
        """Verify threads outside the cycle keep working."""
        mailbox, _, healthy = cyclic_mailbox

        assert mailbox.mark_thread_as_read(healthy.message_id) is True
        assert mailbox.get_thread(healthy.message_id) == [healthy]

    def test_validate_and_snapshot_report_cycle(self, cyclic_mailbox):
        """Verify state inspection reports the cycle without raising."""
        mailbox, _, _ = cyclic_mailbox

        issues = mailbox.validate_state()

        assert len(issues) == 2
        assert all("cycle" in issue for issue in issues)
        assert mailbox.get_snapshot()["thread_count"] is None

    def test_removing_cycle_member_repairs_mailbox(self, cyclic_mailbox):
        """Verify deleting one message of the loop breaks the cycle."""
        mailbox, first, _ = cyclic_mailbox

        mailbox.del_msg(first.message_id)

        assert len(mailbox.get_threaded_view()) == 2
        assert mailbox.validate_state() == []


def test_thread_view_with_lock_disabled():
    """Verify the threaded view does not depend on the lock."""
    a = create_email(timestamp=1)
    b = a.reply(timestamp=2)
    mailbox = MailBox(thread_safe=False)
    mailbox.add_msg(a)
    mailbox.add_msg(b)

    assert mailbox.get_threaded_view() == [b, a]
