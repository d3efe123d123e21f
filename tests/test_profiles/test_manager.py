"""Tests for ProfileManager."""

import pytest

from bookcircle.db import validate_input
from bookcircle.errors import AuthorizationError, NotFoundError, ValidationError
from bookcircle.profiles import ProfileCreate


class TestProfiles:
    """Tests for profile lookup and registration."""

    def test_get_profile(self, profile_manager, alice):
        profile = profile_manager.get_profile("alice")

        assert profile.name == "Alice Reader"
        assert profile.email == "alice@example.com"
        assert profile.member_since == 2023

    def test_get_missing_profile(self, profile_manager):
        with pytest.raises(NotFoundError):
            profile_manager.get_profile("nobody")

    def test_create_profile(self, profile_manager):
        profile = profile_manager.create_profile(
            ProfileCreate(user_id="carol", name="Carol", email="carol@example.com")
        )

        assert profile.user_id == "carol"
        assert profile_manager.get_profile("carol") == profile

    def test_duplicate_profile_rejected(self, profile_manager, alice):
        with pytest.raises(ValidationError, match="already exists"):
            profile_manager.create_profile(
                ProfileCreate(user_id="alice", name="Other", email="other@example.com")
            )

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError, match="valid email"):
            validate_input(ProfileCreate, user_id="carol", name="Carol", email="carol")

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="Name is required"):
            validate_input(ProfileCreate, user_id="carol", name=" ", email="c@example.com")


class TestProfileSummary:
    """Tests for the profile dashboard data."""

    def test_summary_counts_and_lists(self, profile_manager, alice, bob, make_book, make_review):
        mine = make_book(title="Alice's Pick", added_by="alice")
        make_book(title="Also Mine", added_by="alice")
        theirs = make_book(title="Bob's Pick", author="B. Writer", added_by="bob")
        make_review(mine, "bob", 5)
        make_review(mine, "carol", 3)
        make_review(theirs, "alice", 4, "Solid.")

        summary = profile_manager.get_summary(alice)

        assert summary.profile.user_id == "alice"
        assert summary.books_added == 2
        assert summary.reviews_written == 1
        assert summary.member_since == 2023

        assert [b.book.title for b in summary.books] == ["Also Mine", "Alice's Pick"]
        assert summary.books[1].rating.average == pytest.approx(4.0)
        assert summary.books[1].rating.count == 2
        assert summary.books[0].rating.count == 0

        review = summary.reviews[0]
        assert review.book_title == "Bob's Pick"
        assert review.book_author == "B. Writer"
        assert review.review.review_text == "Solid."

    def test_empty_summary(self, profile_manager, bob):
        summary = profile_manager.get_summary(bob)
        assert summary.books_added == 0
        assert summary.reviews_written == 0
        assert summary.member_since == 2024

    def test_summary_requires_login(self, profile_manager, anonymous):
        with pytest.raises(AuthorizationError):
            profile_manager.get_summary(anonymous)

    def test_summary_without_profile(self, profile_manager):
        from bookcircle.auth import AuthSession

        with pytest.raises(NotFoundError):
            profile_manager.get_summary(AuthSession("ghost"))
