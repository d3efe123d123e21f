"""Tests for ReviewSession."""

import pytest

from bookcircle.errors import ServiceError
from bookcircle.views import ReviewMode, ReviewSession


@pytest.fixture
def session_for(review_manager, notifier, dune):
    def _make(auth, on_change=None):
        panel = ReviewSession(dune, auth, review_manager, notifier, on_change=on_change)
        panel.load()
        return panel

    return _make


class TestFreshReview:
    """Tests for a user with no review yet."""

    def test_starts_with_empty_form(self, session_for, bob):
        panel = session_for(bob)

        assert panel.mode == ReviewMode.NONE
        assert panel.rating == 0
        assert panel.review_text == ""
        assert not panel.can_manage

    def test_submit_without_rating(self, session_for, bob, notifier):
        panel = session_for(bob)
        panel.set_text("Great read.")

        assert panel.submit() is False
        assert notifier.errors == ["Please select a rating"]
        assert panel.mode == ReviewMode.NONE

    def test_submit_without_text(self, session_for, bob, notifier):
        panel = session_for(bob)
        panel.set_rating(4)
        panel.set_text("   ")

        assert panel.submit() is False
        assert notifier.errors == ["Please write a review"]

    def test_submit_creates_review(self, session_for, bob, notifier, review_manager, dune):
        changes = []
        panel = session_for(bob, on_change=lambda: changes.append(True))
        panel.set_rating(5)
        panel.set_text("Masterpiece.")

        assert panel.submit()

        assert panel.mode == ReviewMode.VIEW
        assert panel.review.rating == 5
        assert panel.submitting is False
        assert notifier.pending[-1].message == "Review submitted successfully"
        assert changes == [True]
        assert review_manager.get_user_review(dune, "bob").id == panel.review.id

    def test_anonymous_cannot_submit(self, review_manager, notifier, anonymous, dune):
        panel = ReviewSession(dune, anonymous, review_manager, notifier)
        panel.set_rating(3)
        panel.set_text("Hi")

        assert panel.submit() is False
        assert notifier.errors == ["Please log in to submit a review"]


class TestExistingReview:
    """Tests for viewing, editing and deleting a stored review."""

    @pytest.fixture
    def panel(self, session_for, bob, dune, make_review):
        make_review(dune, "bob", 3, "Decent.")
        return session_for(bob)

    def test_loads_into_view_mode(self, panel):
        assert panel.mode == ReviewMode.VIEW
        assert panel.can_manage
        assert panel.rating == 3
        assert panel.review_text == "Decent."

    def test_edit_and_cancel_restores_form(self, panel):
        assert panel.begin_edit()
        assert panel.mode == ReviewMode.EDIT

        panel.set_rating(1)
        panel.set_text("Changed my mind.")
        assert panel.cancel_edit()

        assert panel.mode == ReviewMode.VIEW
        assert panel.rating == 3
        assert panel.review_text == "Decent."

    def test_edit_and_submit_updates(self, panel, notifier, review_manager, dune):
        review_id = panel.review.id
        panel.begin_edit()
        panel.set_rating(5)
        panel.set_text("Better on reread.")

        assert panel.submit()

        assert panel.mode == ReviewMode.VIEW
        assert panel.review.id == review_id
        assert notifier.pending[-1].message == "Review updated successfully"
        assert review_manager.get_review(review_id).rating == 5

    def test_sync_keeps_form_while_editing(self, panel, review_manager, dune):
        panel.begin_edit()
        panel.set_text("Work in progress")

        panel.sync(review_manager.get_user_review(dune, "bob"))

        assert panel.review_text == "Work in progress"

    def test_cancel_edit_outside_edit_mode(self, panel):
        assert panel.cancel_edit() is False

    def test_delete_requires_confirmation(self, panel):
        assert panel.confirm_delete() is False
        assert panel.review is not None

    def test_cancel_delete(self, panel):
        panel.request_delete()
        panel.cancel_delete()
        assert panel.confirm_delete() is False
        assert panel.mode == ReviewMode.VIEW

    def test_confirm_delete(self, panel, notifier, review_manager, dune):
        assert panel.request_delete()
        assert panel.confirm_delete()

        assert panel.mode == ReviewMode.NONE
        assert panel.rating == 0
        assert panel.review_text == ""
        assert notifier.pending[-1].message == "Review deleted successfully"
        assert review_manager.get_user_review(dune, "bob") is None

    def test_failed_delete_keeps_review(self, panel, notifier, monkeypatch):
        def broken(auth, review_id):
            raise ServiceError("Database error: OperationalError")

        monkeypatch.setattr(panel.reviews, "delete_review", broken)
        panel.request_delete()

        assert panel.confirm_delete() is False
        assert panel.review is not None
        assert notifier.errors == ["Failed to delete review"]


class TestOtherUsersReview:
    """Tests for controls on someone else's review."""

    def test_cannot_manage_foreign_review(self, review_manager, alice, dune, make_review):
        make_review(dune, "bob", 3)
        panel = ReviewSession(dune, alice, review_manager)
        panel.sync(review_manager.get_user_review(dune, "bob"))

        assert panel.can_manage is False
        assert panel.begin_edit() is False
        assert panel.request_delete() is False
