"""Tests for BookFormView."""

from datetime import date

import pytest

from bookcircle.views import DIRECTORY_ROUTE, BookFormView, book_route


class TestAddBook:
    """Tests for the add-book form."""

    def test_defaults(self, book_manager, alice):
        form = BookFormView(alice, book_manager)

        assert not form.is_edit
        assert form.load()
        assert form.fields["published_year"] == date.today().year
        assert form.fields["title"] == ""

    def test_submit_creates_book(self, book_manager, notifier, alice):
        form = BookFormView(alice, book_manager, notifier)
        form.update(title="Dune", author="Frank Herbert", genre="Science Fiction", published_year=1965)

        assert form.submit()

        assert form.saved.added_by == "alice"
        assert form.redirect == book_route(form.saved.id)
        assert notifier.pending[-1].message == "Book added successfully"
        assert book_manager.get_book(form.saved.id).title == "Dune"

    def test_missing_title(self, book_manager, notifier, alice):
        form = BookFormView(alice, book_manager, notifier)
        form.update(author="A", genre="G")

        assert form.submit() is False
        assert notifier.errors == ["Title is required"]
        assert form.saved is None
        assert form.redirect is None

    def test_bad_year(self, book_manager, notifier, alice):
        form = BookFormView(alice, book_manager, notifier)
        form.update(title="T", author="A", genre="G", published_year=500)

        assert form.submit() is False
        assert "Published year" in notifier.errors[0]

    def test_anonymous_cannot_add(self, book_manager, notifier, anonymous):
        form = BookFormView(anonymous, book_manager, notifier)
        form.update(title="T", author="A", genre="G")

        assert form.submit() is False
        assert notifier.errors == ["Please log in to add a book"]

    def test_unknown_field(self, book_manager, alice):
        form = BookFormView(alice, book_manager)
        with pytest.raises(KeyError):
            form.update(isbn="123")


class TestEditBook:
    """Tests for the edit-book form."""

    def test_load_prefills(self, book_manager, alice, dune):
        form = BookFormView(alice, book_manager, book_id=dune)

        assert form.load()

        assert form.is_edit
        assert form.fields["title"] == "Dune"
        assert form.fields["published_year"] == 1965
        assert form.fields["description"] == "Desert planet politics."

    def test_submit_updates(self, book_manager, notifier, alice, dune):
        form = BookFormView(alice, book_manager, notifier, book_id=dune)
        form.load()
        form.update(genre="Classic", description="")

        assert form.submit()

        book = book_manager.get_book(dune)
        assert book.genre == "Classic"
        assert book.description is None
        assert form.redirect == book_route(dune)
        assert notifier.pending[-1].message == "Book updated successfully"

    def test_non_owner_turned_away(self, book_manager, notifier, bob, dune):
        form = BookFormView(bob, book_manager, notifier, book_id=dune)

        assert form.load() is False
        assert form.redirect == DIRECTORY_ROUTE
        assert notifier.errors == ["You can only edit your own books"]

    def test_missing_book(self, book_manager, notifier, alice):
        form = BookFormView(alice, book_manager, notifier, book_id="missing")

        assert form.load() is False
        assert form.redirect == DIRECTORY_ROUTE
        assert len(notifier.errors) == 1

    def test_non_owner_submit_fails(self, book_manager, notifier, bob, dune):
        form = BookFormView(bob, book_manager, notifier, book_id=dune)
        form.update(title="Stolen", author="A", genre="G", published_year=2000)

        assert form.submit() is False
        assert notifier.errors == ["You can only edit your own books"]
        assert book_manager.get_book(dune).title == "Dune"
