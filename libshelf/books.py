"""The books file: one ``id|title|author|year|available`` line per book."""

from __future__ import annotations

import os
from pathlib import Path

from libshelf.loans import (
    add_loan,
    book_is_borrowed,
    ensure_loans_file,
    loan_exists,
    remove_loan,
)
from libshelf.models import (
    SEPARATOR,
    Book,
    BookBorrowedError,
    BookNotFoundError,
    LoanNotFoundError,
    parse_id,
)

PathLike = str | os.PathLike

_AVAILABLE = "AVAILABLE"
_BORROWED = "BORROWED"


def _read_lines(path: PathLike) -> list[str]:
    """Return the non-blank lines of a file; raises FileNotFoundError if missing."""
    with open(path, encoding="utf-8", newline="") as handle:
        text = handle.read()
    return [line for line in text.split("\n") if line]


def _write_lines(path: PathLike, lines: list[str]) -> None:
    """Replace the file with the given lines, going through a temporary file."""
    path = Path(path)
    tmp = path.with_name(path.name + ".tmp")
    with open(tmp, "w", encoding="utf-8", newline="") as handle:
        handle.writelines(f"{line}\n" for line in lines)
    os.replace(tmp, path)


def _without_status(line: str) -> str:
    return line.rpartition(SEPARATOR)[0]


def _set_status(path: PathLike, book_id: int, available: bool) -> None:
    """Rewrite the availability flag of a book; raises BookNotFoundError."""
    flag = int(available)
    found = False
    out: list[str] = []
    for line in _read_lines(path):
        if parse_id(line) != book_id:
            out.append(line)
            continue
        found = True
        out.append(f"{_without_status(line)}{SEPARATOR}{flag}")
    if not found:
        raise BookNotFoundError(f"no book with id {book_id}")
    _write_lines(path, out)


def next_book_id(path: PathLike) -> int:
    """Return one more than the highest book id on file, or 1 if there is no file."""
    try:
        lines = _read_lines(path)
    except FileNotFoundError:
        return 1
    return max((int(line.partition(SEPARATOR)[0]) for line in lines), default=0) + 1


def add_book(path: PathLike, title: str, author: str, year: int) -> Book:
    """Append a new, available book with the next free id and return it."""
    book = Book(id=next_book_id(path), title=title, author=author, year=int(year))
    with open(path, "a", encoding="utf-8", newline="") as handle:
        handle.write(book.to_line() + "\n")
    return book


def is_library_empty(path: PathLike) -> bool:
    """Tell whether the books file is missing or holds nothing at all."""
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            return handle.read(1) == ""
    except FileNotFoundError:
        return True


def remove_book(path: PathLike, book_id: int, loans_path: PathLike) -> None:
    """Delete a book from the books file.

    Lines without a separator are dropped on the way.
    Raises BookBorrowedError if the book is lent out and BookNotFoundError
    if there is no such book or no books file.
    """
    ensure_loans_file(loans_path)
    if book_is_borrowed(book_id, loans_path):
        raise BookBorrowedError(f"book {book_id} is currently borrowed")

    try:
        lines = _read_lines(path)
    except FileNotFoundError:
        raise BookNotFoundError(f"no book with id {book_id}") from None

    kept: list[str] = []
    found = False
    for line in lines:
        line_id = parse_id(line)
        if line_id is None:
            continue
        if line_id == book_id:
            found = True
            continue
        kept.append(line)

    if not found:
        raise BookNotFoundError(f"no book with id {book_id}")
    _write_lines(path, kept)


def borrow_book(
    user_id: int, book_id: int, path: PathLike, loans_path: PathLike
) -> None:
    """Lend a book to a user: mark it unavailable and record the loan.

    Raises BookBorrowedError if someone already has it, BookNotFoundError
    if there is no such book, and FileNotFoundError if there is no books file.
    """
    ensure_loans_file(loans_path)
    if book_is_borrowed(book_id, loans_path):
        raise BookBorrowedError(f"book {book_id} is already borrowed")
    _set_status(path, book_id, available=False)
    add_loan(user_id, book_id, loans_path)


def return_book(
    user_id: int, book_id: int, path: PathLike, loans_path: PathLike
) -> None:
    """Take a book back from a user: mark it available and drop the loan.

    Raises LoanNotFoundError if the user did not borrow it, BookNotFoundError
    if there is no such book, and FileNotFoundError if there is no books file.
    """
    ensure_loans_file(loans_path)
    if not loan_exists(user_id, book_id, loans_path):
        raise LoanNotFoundError(f"no loan of book {book_id} by user {user_id}")
    _set_status(path, book_id, available=True)
    remove_loan(user_id, book_id, loans_path)


def list_books(path: PathLike, loans_path: PathLike) -> list[str]:
    """Return one display line per book, its status taken from the loans file.

    Lines without a separator are shown as they are.
    Raises FileNotFoundError if there is no books file.
    """
    ensure_loans_file(loans_path)
    shown: list[str] = []
    for line in _read_lines(path):
        book_id = parse_id(line)
        if book_id is None:
            shown.append(line)
            continue
        status = _BORROWED if book_is_borrowed(book_id, loans_path) else _AVAILABLE
        shown.append(f"{_without_status(line)} | {status}")
    return shown


def my_borrowed_books(
    user_id: int, path: PathLike, loans_path: PathLike
) -> list[str]:
    """Return the records, without status, of the books the user has borrowed.

    Raises FileNotFoundError if there is no books file.
    """
    ensure_loans_file(loans_path)
    borrowed: list[str] = []
    for line in _read_lines(path):
        book_id = parse_id(line)
        if book_id is None:
            continue
        if loan_exists(user_id, book_id, loans_path):
            borrowed.append(_without_status(line))
    return borrowed