"""Tests for the appointment and forum services against the store."""
from datetime import date

import pytest

from mindcare.core.errors import NotFoundError
from mindcare.core.permissions import AuthenticatedUser
from mindcare.services.appointments import appointments_for, book_appointment, update_status
from mindcare.services.forum import create_post, list_posts, reply_to_post


@pytest.fixture
def commits(store, monkeypatch):
    """Records every commit the store's session makes."""
    calls = []
    original = store.db.commit

    def counting_commit():
        calls.append(1)
        original()

    monkeypatch.setattr(store.db, "commit", counting_commit)
    return calls


class TestAppointments:

    def test_booking_writes_all_copies_in_one_commit(self, store, add_profile, commits):
        add_profile("c-1", role="counsellor")

        appointment = book_appointment(store, "s-1", "c-1", date(2026, 11, 2), "14:30")

        assert len(commits) == 1
        assert store.get(f"appointment:{appointment.id}")["status"] == "scheduled"
        assert store.get(f"student-appointment:s-1:{appointment.id}")["status"] == "scheduled"
        assert store.get(f"counsellor-appointment:c-1:{appointment.id}")["status"] == "scheduled"

    def test_status_update_keeps_copies_in_step(self, store, add_profile, commits):
        add_profile("c-1", role="counsellor")
        appointment = book_appointment(store, "s-1", "c-1", date(2026, 11, 2), "14:30")
        commits.clear()

        update_status(store, appointment.id, "completed", "c-1")

        assert len(commits) == 1
        student_view = appointments_for(store, AuthenticatedUser("s-1", "s-1@campus.test", "student"))
        counsellor_view = appointments_for(store, AuthenticatedUser("c-1", "c-1@campus.test", "counsellor"))
        admin_view = appointments_for(store, AuthenticatedUser("a-1", "a-1@campus.test", "admin"))
        assert [a.status for a in student_view + counsellor_view + admin_view] == ["completed"] * 3


class TestForum:

    def test_replies_do_not_rewrite_the_post(self, store, add_profile):
        author = add_profile("s-1", name="Ravi")
        post = create_post(store, author, "Exam stress tips?", "academics")
        before = store.get(f"forum:{post.id}")

        first = reply_to_post(store, post.id, author, "Take breaks")
        second = reply_to_post(store, post.id, author, "Sleep early")

        assert store.get(f"forum:{post.id}") == before
        [listed] = list_posts(store)
        assert [r.id for r in listed.replies] == [first.id, second.id]
        assert first.post_id == post.id

    def test_replies_stay_with_their_post(self, store, add_profile):
        author = add_profile("s-1")
        one = create_post(store, author, "one", "general")
        two = create_post(store, author, "two", "general")

        reply_to_post(store, one.id, author, "for one")

        replies = {p.id: [r.content for r in p.replies] for p in list_posts(store)}
        assert replies == {one.id: ["for one"], two.id: []}

    def test_reply_to_missing_post_writes_nothing(self, store, add_profile):
        author = add_profile("s-1")

        with pytest.raises(NotFoundError):
            reply_to_post(store, "missing", author, "hello")

        assert store.count_by_prefix("forum-reply:") == 0
