"""Interactive menu for borrowing, returning and managing books."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Callable

from libshelf.books import (
    add_book,
    borrow_book,
    is_library_empty,
    list_books,
    my_borrowed_books,
    remove_book,
    return_book,
)
from libshelf.models import (
    BOOKS_FILE,
    LOANS_FILE,
    USERS_FILE,
    BookBorrowedError,
    BookNotFoundError,
    LoanNotFoundError,
)
from libshelf.users import add_user, is_admin, read_user_lines, user_exists

PathLike = str | os.PathLike
Reader = Callable[[str], str]
Writer = Callable[[str], object]

_MENU = (
    "\n--- MENU ---\n"
    "1. Display books\n"
    "2. My borrowed books\n"
    "3. Borrow book\n"
    "4. Return book\n"
    "5. Remove book (admin)\n"
    "6. Add book (admin)\n"
    "7. Add user (admin)\n"
    "8. Display users (admin)\n"
    "0. Exit\n"
)

_DENIED = "Access denied (admin only)."


def menu_text() -> str:
    """Return the menu shown before every choice."""
    return _MENU


def _ask_int(read: Reader, prompt: str) -> int | None:
    try:
        return int(read(prompt).strip())
    except ValueError:
        return None


def login_user(
    users_path: PathLike, read: Reader = input, write: Writer = sys.stdout.write
) -> int | None:
    """Ask for a user id and return it, or None if no number was given.

    An unknown id is reported but still accepted.
    """
    user_id = _ask_int(read, "Enter your user id: ")
    if user_id is None:
        write("Invalid number.\n")
        return None
    if not user_exists(user_id, users_path):
        write("User does not exist.\n")
    write(f"Logged in as user id: {user_id}\n")
    return user_id


def _show_books(books_path, loans_path, write: Writer) -> None:
    try:
        shown = list_books(books_path, loans_path)
    except FileNotFoundError:
        write("Error opening books file.\n")
        return
    write("\n--- BOOKS ---\n")
    write("Format: id | title | author | year | status\n\n")
    for line in shown:
        write(f"{line}\n")


def _show_mine(user_id, books_path, loans_path, write: Writer) -> None:
    try:
        mine = my_borrowed_books(user_id, books_path, loans_path)
    except FileNotFoundError:
        write("Error opening books file.\n")
        return
    write("\n--- MY BORROWED BOOKS ---\n")
    for line in mine or ["(none)"]:
        write(f"{line}\n")


def _borrow(user_id, books_path, loans_path, read: Reader, write: Writer) -> None:
    book_id = _ask_int(read, "Enter book id: ")
    if book_id is None:
        write("Invalid number.\n")
        return
    try:
        borrow_book(user_id, book_id, books_path, loans_path)
    except BookBorrowedError:
        write("Book already borrowed.\n")
    except BookNotFoundError:
        write("No book with this id.\n")
    except FileNotFoundError:
        write("Error opening books file.\n")
    except OSError:
        write("Failed to save loan record (loans.txt path/permissions).\n")
    else:
        write("Book borrowed.\n")


def _return(user_id, books_path, loans_path, read: Reader, write: Writer) -> None:
    book_id = _ask_int(read, "Enter book id: ")
    if book_id is None:
        write("Invalid number.\n")
        return
    try:
        return_book(user_id, book_id, books_path, loans_path)
    except LoanNotFoundError:
        write("You did not borrow this book.\n")
    except BookNotFoundError:
        write("No book with this id.\n")
    except FileNotFoundError:
        write("Error opening books file.\n")
    except OSError:
        write("Failed to remove loan record.\n")
    else:
        write("Book returned.\n")


def _remove(books_path, loans_path, read: Reader, write: Writer) -> None:
    if is_library_empty(books_path):
        write("Library is empty.\n")
        return
    book_id = _ask_int(read, "Enter book id to remove: ")
    if book_id is None:
        write("Invalid number.\n")
        return
    try:
        remove_book(books_path, book_id, loans_path)
    except BookBorrowedError:
        write("Cannot remove: book is currently borrowed.\n")
        write("No book with this id (or borrowed).\n")
    except BookNotFoundError:
        write("No book with this id (or borrowed).\n")
    else:
        write("Book removed.\n")


def _add_book(books_path, read: Reader, write: Writer) -> None:
    title = read("Enter title: ")
    author = read("Enter author: ")
    year = _ask_int(read, "Enter year: ")
    if year is None:
        write("Invalid number.\n")
        return
    try:
        add_book(books_path, title, author, year)
    except OSError:
        write("Cannot open books file.\n")
        return
    write("Book added.\n")


def _add_user(users_path, read: Reader, write: Writer) -> None:
    name = read("Enter user name: ")
    flag = _ask_int(read, "Is admin? (1/0): ")
    if flag is None:
        write("Invalid number.\n")
        return
    try:
        add_user(users_path, name, flag)
    except OSError:
        write("Error opening users file.\n")
        return
    write("User added.\n")


def _show_users(users_path, write: Writer) -> None:
    try:
        lines = read_user_lines(users_path)
    except FileNotFoundError:
        write("Error opening users file.\n")
        return
    for line in lines:
        write(f"{line}\n")


def run(
    user_id: int,
    books_path: PathLike,
    users_path: PathLike,
    loans_path: PathLike,
    read: Reader = input,
    write: Writer = sys.stdout.write,
) -> None:
    """Show the menu and carry out choices until the user exits or input ends."""
    admin_actions = {
        5: lambda: _remove(books_path, loans_path, read, write),
        6: lambda: _add_book(books_path, read, write),
        7: lambda: _add_user(users_path, read, write),
        8: lambda: _show_users(users_path, write),
    }
    actions = {
        1: lambda: _show_books(books_path, loans_path, write),
        2: lambda: _show_mine(user_id, books_path, loans_path, write),
        3: lambda: _borrow(user_id, books_path, loans_path, read, write),
        4: lambda: _return(user_id, books_path, loans_path, read, write),
    }
    try:
        while True:
            write(menu_text())
            choice = _ask_int(read, "Choice: ")
            if choice == 0:
                write("Bye.\n")
                return
            if choice in actions:
                actions[choice]()
            elif choice in admin_actions:
                if is_admin(user_id, users_path):
                    admin_actions[choice]()
                else:
                    write(f"{_DENIED}\n")
            else:
                write("Unknown option.\n")
    except EOFError:
        return


def main(argv: list[str] | None = None) -> int:
    """Log a user in and run the menu; returns the exit status."""
    parser = argparse.ArgumentParser(description="Manage a small library.")
    parser.add_argument("--books", default=BOOKS_FILE, help="books file")
    parser.add_argument("--users", default=USERS_FILE, help="users file")
    parser.add_argument("--loans", default=LOANS_FILE, help="loans file")
    args = parser.parse_args(argv)

    read = input
    write = sys.stdout.write
    try:
        user_id = login_user(args.users, read, write)
        if user_id is None:
            return 0
        run(user_id, args.books, args.users, args.loans, read, write)
    except (EOFError, KeyboardInterrupt):
        write("\n")
    return 0