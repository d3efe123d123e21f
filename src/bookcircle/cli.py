"""Command-line interface for bookcircle.

Built with Typer for commands and Rich for output. Each command drives the
same views a page would, and renders their notifications as they arrive.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .auth import AuthSession
from .books import BookManager
from .books.schemas import ALL_GENRES
from .config import get_config
from .db import get_db, validate_input
from .errors import BookCircleError
from .logging_setup import setup_logging
from .notifications import Notification, NoticeLevel, Notifier
from .profiles import ProfileCreate, ProfileManager
from .ratings import star_bar
from .reviews import ReviewManager
from .views import (
    BookDetailView,
    BookFormView,
    DirectoryView,
    ProfileTab,
    ProfileView,
    ReviewMode,
)

# Create the main app
app = typer.Typer(
    name="bookcircle",
    help="Browse, add and review books with your reading circle.",
    no_args_is_help=True,
)

# Sub-apps for command groups
books_app = typer.Typer(help="Browse and manage books.")
app.add_typer(books_app, name="books")

review_app = typer.Typer(help="Rate and review books.")
app.add_typer(review_app, name="review")

user_app = typer.Typer(help="Register and view user profiles.")
app.add_typer(user_app, name="user")

# Rich console for pretty output
console = Console()


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[dim]{message}[/dim]")


def render_notice(notice: Notification) -> None:
    """Print a view notification as it is posted."""
    if notice.level == NoticeLevel.ERROR:
        print_error(notice.message)
    elif notice.level == NoticeLevel.SUCCESS:
        print_success(notice.message)
    else:
        print_info(notice.message)


def _notifier() -> Notifier:
    return Notifier(sink=render_notice)


def _auth(ctx: typer.Context) -> AuthSession:
    obj = ctx.find_root().obj
    return obj if isinstance(obj, AuthSession) else AuthSession.anonymous()


def format_book_table(items: list, title: str = "Books") -> Table:
    """Create a rich table for books with their ratings."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Title", style="cyan", no_wrap=False, max_width=40)
    table.add_column("Author", style="green", max_width=25)
    table.add_column("Genre", style="yellow")
    table.add_column("Year", justify="right")
    table.add_column("Rating", justify="center")
    table.add_column("ID", style="dim")

    for item in items:
        table.add_row(
            item.book.title,
            item.book.author,
            item.book.genre,
            str(item.book.published_year),
            item.rating.badge or "-",
            item.book.id,
        )

    return table


@app.callback()
def main_callback(
    ctx: typer.Context,
    user: Optional[str] = typer.Option(
        None, "--user", "-u", help="Act as this user id (default: BOOKCIRCLE_USER)"
    ),
) -> None:
    """Browse, add and review books with your reading circle."""
    config = get_config()
    setup_logging(config.log_level)
    ctx.obj = AuthSession(user_id=user or config.current_user)


# ============================================================================
# Setup Commands
# ============================================================================


@app.command()
def init() -> None:
    """Check the configuration and create the database tables."""
    errors = get_config().validate()
    if errors:
        for error in errors:
            print_error(error)
        raise typer.Exit(1)

    db = get_db()
    print_success(f"Database ready at {db.db_path}")


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__

    console.print(f"bookcircle version {__version__}")


# ============================================================================
# User Commands
# ============================================================================


@user_app.command("register")
def user_register(
    user_id: str = typer.Argument(..., help="User id"),
    name: str = typer.Option(..., "--name", "-n", help="Display name"),
    email: str = typer.Option(..., "--email", "-e", help="Email address"),
) -> None:
    """Create a profile for a user."""
    manager = ProfileManager(get_db())

    try:
        profile = manager.create_profile(
            validate_input(ProfileCreate, user_id=user_id, name=name, email=email)
        )
    except BookCircleError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success(f"Registered {profile.name} ({profile.user_id})")


@user_app.command("show")
def user_show(
    ctx: typer.Context,
    tab: ProfileTab = typer.Option(ProfileTab.BOOKS, "--tab", "-t", help="List to show"),
) -> None:
    """Show your profile, books added and reviews written."""
    db = get_db()
    view = ProfileView(_auth(ctx), ProfileManager(db), notifier=_notifier())

    if not view.load():
        raise typer.Exit(1)

    summary = view.summary
    console.print(Panel(
        f"[bold]{summary.profile.name}[/bold]\n"
        f"[dim]{summary.profile.email}[/dim]\n\n"
        f"Books added: {summary.books_added}\n"
        f"Reviews written: {summary.reviews_written}\n"
        f"Member since {summary.member_since}",
        title="[blue]Profile[/blue]",
    ))

    view.switch_tab(tab)
    if view.empty_message:
        print_info(view.empty_message)
        return

    if view.tab == ProfileTab.BOOKS:
        console.print(format_book_table(view.visible_items, title="My Books"))
        return

    table = Table(title="My Reviews", show_header=True, header_style="bold magenta")
    table.add_column("Book", style="cyan", max_width=40)
    table.add_column("Author", style="green", max_width=25)
    table.add_column("Rating", justify="center")
    table.add_column("Review", max_width=50)
    table.add_column("Date", style="dim")
    for item in view.visible_items:
        table.add_row(
            item.book_title,
            item.book_author,
            star_bar(item.review.rating),
            item.review.review_text,
            item.review.created_at.strftime("%Y-%m-%d"),
        )
    console.print(table)


# ============================================================================
# Book Commands
# ============================================================================


@books_app.command("list")
def books_list(
    page: int = typer.Option(1, "--page", "-p", help="Page number"),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Match title or author"),
    genre: str = typer.Option(ALL_GENRES, "--genre", "-g", help="Genre, or 'all'"),
) -> None:
    """List books, newest first."""
    view = DirectoryView(BookManager(get_db()), notifier=_notifier())
    view.search_term = search or ""
    view.genre = genre
    view.page = max(page, 1)

    if not view.refresh():
        raise typer.Exit(1)

    # Past the last page: show the last one instead
    if view.page > view.total_pages > 0 and not view.go_to(view.page):
        raise typer.Exit(1)

    if view.is_empty:
        print_info("No books found")
        return

    console.print(format_book_table(view.items, title="Discover Books"))
    if view.total_pages > 1:
        print_info(f"Page {view.page} of {view.total_pages}")


@books_app.command("genres")
def books_genres() -> None:
    """List the genres in the catalogue."""
    view = DirectoryView(BookManager(get_db()), notifier=_notifier())
    if not view.load_genres():
        raise typer.Exit(1)

    if not view.genres:
        print_info("No genres yet")
        return
    for name in view.genres:
        console.print(f"  • {name}")


@books_app.command("show")
def books_show(
    ctx: typer.Context,
    book_id: str = typer.Argument(..., help="Book ID"),
) -> None:
    """Show a book with its reviews."""
    db = get_db()
    view = BookDetailView(
        book_id, _auth(ctx), BookManager(db), ReviewManager(db), notifier=_notifier()
    )
    if not view.load():
        raise typer.Exit(1)

    book = view.book
    aggregate = view.aggregate
    content = [
        f"[bold]{book.title}[/bold]",
        f"\n{book.author}",
        f"\n[yellow]{book.genre}[/yellow] · {book.published_year}",
        f"\n\n{star_bar(aggregate.rounded_stars)} {aggregate.display_average} "
        f"({aggregate.count_label})",
    ]
    if book.description:
        content.append(f"\n\n{book.description}")
    if view.is_book_owner:
        content.append("\n\n[dim]You added this book.[/dim]")
    console.print(Panel("".join(content), title="[blue]Book[/blue]"))

    if not view.reviews:
        print_info("No reviews yet. Be the first to review this book!")
        return

    for item in view.reviews:
        owner_mark = " [green](you)[/green]" if view.can_edit_review(item) else ""
        console.print(Panel(
            f"{star_bar(item.review.rating)}\n\n{item.review.review_text}",
            title=f"{item.reviewer_name}{owner_mark}",
            subtitle=item.review.created_at.strftime("%Y-%m-%d"),
        ))


@books_app.command("add")
def books_add(
    ctx: typer.Context,
    title: str = typer.Option(..., "--title", "-t", help="Book title"),
    author: str = typer.Option(..., "--author", "-a", help="Author name"),
    genre: str = typer.Option(..., "--genre", "-g", help="Genre"),
    year: Optional[int] = typer.Option(None, "--year", "-y", help="Published year"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Description"),
) -> None:
    """Add a new book."""
    form = BookFormView(_auth(ctx), BookManager(get_db()), notifier=_notifier())
    form.update(title=title, author=author, genre=genre, description=description or "")
    if year is not None:
        form.update(published_year=year)

    if not form.submit():
        raise typer.Exit(1)
    print_info(f"ID: {form.saved.id}")


@books_app.command("edit")
def books_edit(
    ctx: typer.Context,
    book_id: str = typer.Argument(..., help="Book ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Book title"),
    author: Optional[str] = typer.Option(None, "--author", "-a", help="Author name"),
    genre: Optional[str] = typer.Option(None, "--genre", "-g", help="Genre"),
    year: Optional[int] = typer.Option(None, "--year", "-y", help="Published year"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Description"),
) -> None:
    """Edit a book you added."""
    form = BookFormView(_auth(ctx), BookManager(get_db()), notifier=_notifier(), book_id=book_id)
    if not form.load():
        raise typer.Exit(1)

    changes = {
        "title": title,
        "author": author,
        "genre": genre,
        "published_year": year,
        "description": description,
    }
    form.update(**{name: value for name, value in changes.items() if value is not None})

    if not form.submit():
        raise typer.Exit(1)


@books_app.command("delete")
def books_delete(
    ctx: typer.Context,
    book_id: str = typer.Argument(..., help="Book ID"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Delete a book you added, with all its reviews."""
    db = get_db()
    view = BookDetailView(
        book_id, _auth(ctx), BookManager(db), ReviewManager(db), notifier=_notifier()
    )
    if not view.load() or not view.request_delete_book():
        raise typer.Exit(1)

    if not force:
        if not typer.confirm(
            f"Delete '{view.book.title}'? This action cannot be undone."
        ):
            view.cancel_delete_book()
            print_info("Cancelled")
            return

    if not view.confirm_delete_book():
        raise typer.Exit(1)


# ============================================================================
# Review Commands
# ============================================================================


@review_app.command("submit")
def review_submit(
    ctx: typer.Context,
    book_id: str = typer.Argument(..., help="Book ID"),
    rating: int = typer.Option(0, "--rating", "-r", help="Rating (1-5)"),
    text: str = typer.Option("", "--text", "-t", help="Review text"),
) -> None:
    """Review a book, or update your existing review."""
    db = get_db()
    view = BookDetailView(
        book_id, _auth(ctx), BookManager(db), ReviewManager(db), notifier=_notifier()
    )
    if view.review_session is None:
        print_error("Please log in to submit a review")
        raise typer.Exit(1)
    if not view.load():
        raise typer.Exit(1)

    session = view.review_session
    if session.mode == ReviewMode.VIEW:
        session.begin_edit()

    session.set_rating(rating)
    session.set_text(text)
    if not session.submit():
        raise typer.Exit(1)

    aggregate = view.aggregate
    print_info(
        f"{view.book.title}: {aggregate.display_average} ({aggregate.count_label})"
    )


@review_app.command("delete")
def review_delete(
    ctx: typer.Context,
    book_id: str = typer.Argument(..., help="Book ID"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Delete your review of a book."""
    db = get_db()
    view = BookDetailView(
        book_id, _auth(ctx), BookManager(db), ReviewManager(db), notifier=_notifier()
    )
    if view.review_session is None:
        print_error("Please log in to delete a review")
        raise typer.Exit(1)
    if not view.load():
        raise typer.Exit(1)

    session = view.review_session
    if not session.request_delete():
        print_error("You have not reviewed this book")
        raise typer.Exit(1)

    if not force:
        if not typer.confirm(
            f"Delete your review of '{view.book.title}'? This action cannot be undone."
        ):
            session.cancel_delete()
            print_info("Cancelled")
            return

    if not session.confirm_delete():
        raise typer.Exit(1)


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
