"""The loans file: one ``user_id|book_id`` line per book lent out."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from libshelf.models import SEPARATOR, LoanNotFoundError

PathLike = str | os.PathLike


def _parse_loan(line: str) -> tuple[int, int] | None:
    head, sep, tail = line.partition(SEPARATOR)
    if not sep:
        return None
    return int(head), int(tail)


def ensure_loans_file(path: PathLike) -> None:
    """Create an empty loans file if none exists; an existing one is left alone."""
    Path(path).touch(exist_ok=True)


def iter_loans(path: PathLike) -> Iterator[tuple[int, int]]:
    """Yield ``(user_id, book_id)`` for every loan; nothing if the file is missing.

    Blank lines and lines without a separator are skipped.
    """
    try:
        handle = open(path, encoding="utf-8")
    except FileNotFoundError:
        return
    with handle:
        for raw in handle:
            line = raw.rstrip("\n")
            if not line:
                continue
            loan = _parse_loan(line)
            if loan is not None:
                yield loan


def loan_exists(user_id: int, book_id: int, path: PathLike) -> bool:
    """Tell whether the given user has borrowed the given book."""
    return (user_id, book_id) in iter_loans(path)


def book_is_borrowed(book_id: int, path: PathLike) -> bool:
    """Tell whether anyone has borrowed the given book."""
    return any(bid == book_id for _, bid in iter_loans(path))


def add_loan(user_id: int, book_id: int, path: PathLike) -> None:
    """Record a loan at the end of the loans file."""
    with open(path, "a", encoding="utf-8") as handle:
        handle.write(f"{user_id}{SEPARATOR}{book_id}\n")


def remove_loan(user_id: int, book_id: int, path: PathLike) -> None:
    """Delete every record of this loan from the loans file.

    Blank lines and lines without a separator are dropped on the way.
    Raises LoanNotFoundError if there is no such loan or no loans file.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise LoanNotFoundError(
            f"no loan of book {book_id} by user {user_id}"
        ) from None

    kept: list[str] = []
    found = False
    for line in text.split("\n"):
        if not line:
            continue
        loan = _parse_loan(line)
        if loan is None:
            continue
        if loan == (user_id, book_id):
            found = True
            continue
        kept.append(line)

    if not found:
        raise LoanNotFoundError(f"no loan of book {book_id} by user {user_id}")

    tmp = path.with_name(path.name + ".tmp")
    tmp.write_text("".join(f"{line}\n" for line in kept), encoding="utf-8")
    os.replace(tmp, path)