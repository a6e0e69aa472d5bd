"""Records kept by the library, the default data files and the library's errors."""

from __future__ import annotations

from dataclasses import dataclass

USERS_FILE = "users.txt"
BOOKS_FILE = "books.txt"
LOANS_FILE = "loans.txt"

SEPARATOR = "|"


class LibraryError(Exception):
    """Base class for errors raised by library operations."""


class BookNotFoundError(LibraryError, LookupError):
    """No book with the requested id is on record."""


class BookBorrowedError(LibraryError):
    """The book is currently lent out to someone."""


class LoanNotFoundError(LibraryError, LookupError):
    """The user has no loan of the requested book."""


@dataclass
class Book:
    """A book as stored in the books file."""

    id: int
    title: str
    author: str
    year: int
    available: bool = True

    def to_line(self) -> str:
        """Return the record as one line of the books file, without newline."""
        return SEPARATOR.join(
            (
                str(self.id),
                self.title,
                self.author,
                str(self.year),
                str(int(self.available)),
            )
        )


@dataclass
class User:
    """A user as stored in the users file."""

    id: int
    name: str
    is_admin: bool = False

    def to_line(self) -> str:
        """Return the record as one line of the users file, without newline."""
        return SEPARATOR.join((str(self.id), self.name, str(int(self.is_admin))))


def parse_id(line: str) -> int | None:
    """Return the id in front of the first separator, or None if there is none.

    Raises ValueError when the text before the separator is not a number.
    """
    head, sep, _ = line.partition(SEPARATOR)
    if not sep:
        return None
    return int(head)