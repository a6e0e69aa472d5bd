"""The users file: one ``id|name|admin_flag`` line per user."""

from __future__ import annotations

import os

from libshelf.models import SEPARATOR, User

PathLike = str | os.PathLike


def _record_lines(path: PathLike):
    with open(path, encoding="utf-8") as handle:
        for raw in handle:
            line = raw.rstrip("\n")
            if line:
                yield line


def _line_id(line: str) -> int:
    return int(line.partition(SEPARATOR)[0])


def next_user_id(path: PathLike) -> int:
    """Return one more than the highest user id on file, or 1 if there is no file."""
    try:
        return max((_line_id(line) for line in _record_lines(path)), default=0) + 1
    except FileNotFoundError:
        return 1


def add_user(path: PathLike, name: str, admin: int) -> User:
    """Append a new user with the next free id and return it.

    The admin flag is written as given; only a flag of 1 grants admin rights.
    """
    flag = int(admin)
    user_id = next_user_id(path)
    with open(path, "a", encoding="utf-8") as handle:
        handle.write(f"{user_id}{SEPARATOR}{name}{SEPARATOR}{flag}\n")
    return User(id=user_id, name=name, is_admin=flag == 1)


def user_exists(user_id: int, path: PathLike) -> bool:
    """Tell whether a user with this id is on file."""
    try:
        return any(_line_id(line) == user_id for line in _record_lines(path))
    except FileNotFoundError:
        return False


def is_admin(user_id: int, path: PathLike) -> bool:
    """Tell whether the first record with this id carries an admin flag of 1."""
    try:
        for line in _record_lines(path):
            if _line_id(line) == user_id:
                return int(line.rpartition(SEPARATOR)[2]) == 1
    except FileNotFoundError:
        return False
    return False


def read_user_lines(path: PathLike) -> list[str]:
    """Return the non-blank lines of the users file.

    Raises FileNotFoundError if the file does not exist.
    """
    return list(_record_lines(path))