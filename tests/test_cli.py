from pathlib import Path

import pytest

from libshelf.books import add_book, list_books
from libshelf.cli import login_user, main, menu_text, run
from libshelf.loans import iter_loans
from libshelf.users import add_user, read_user_lines


class Console:
    def __init__(self, answers):
        self._answers = iter(answers)
        self.prompts: list[str] = []
        self.chunks: list[str] = []

    def read(self, prompt: str) -> str:
        self.prompts.append(prompt)
        try:
            return next(self._answers)
        except StopIteration:
            raise EOFError from None

    def write(self, text: str) -> None:
        self.chunks.append(text)

    @property
    def output(self) -> str:
        return "".join(self.chunks)


@pytest.fixture
def paths(tmp_path: Path):
    users = tmp_path / "users.txt"
    add_user(users, "Ada", 1)
    add_user(users, "Bob", 0)
    return {
        "books_path": tmp_path / "books.txt",
        "users_path": users,
        "loans_path": tmp_path / "loans.txt",
    }


def _run(user_id, paths, answers):
    console = Console(answers)
    run(user_id, read=console.read, write=console.write, **paths)
    return console


def test_menu_lists_options():
    text = menu_text()
    assert "1. Display books" in text
    assert "8. Display users (admin)" in text
    assert text.rstrip().endswith("0. Exit")


def test_login_known_user(paths):
    console = Console(["1"])
    assert login_user(paths["users_path"], console.read, console.write) == 1
    assert console.output == "Logged in as user id: 1\n"


def test_login_unknown_user_is_reported(paths):
    console = Console(["42"])
    assert login_user(paths["users_path"], console.read, console.write) == 42
    assert "User does not exist." in console.output


def test_login_invalid_number(paths):
    console = Console(["abc"])
    assert login_user(paths["users_path"], console.read, console.write) is None


def test_exit(paths):
    console = _run(1, paths, ["0"])
    assert console.output.endswith("Bye.\n")


def test_unknown_option(paths):
    console = _run(1, paths, ["9", "0"])
    assert "Unknown option." in console.output


def test_end_of_input_stops(paths):
    console = _run(1, paths, [])
    assert console.prompts == ["Choice: "]


def test_admin_only_for_regular_user(paths):
    console = _run(2, paths, ["6", "0"])
    assert "Access denied (admin only)." in console.output
    assert not paths["books_path"].exists()


def test_admin_adds_book(paths):
    console = _run(1, paths, ["6", "Dune", "Frank Herbert", "1965", "0"])
    assert "Book added." in console.output
    shown = list_books(paths["books_path"], paths["loans_path"])
    assert shown[0].startswith("1|Dune|Frank Herbert|1965")


def test_borrow_and_return(paths):
    add_book(paths["books_path"], "Dune", "Frank Herbert", 1965)
    console = _run(2, paths, ["3", "1", "0"])
    assert "Book borrowed." in console.output
    assert list(iter_loans(paths["loans_path"])) == [(2, 1)]

    console = _run(1, paths, ["4", "1", "0"])
    assert "You did not borrow this book." in console.output

    console = _run(2, paths, ["4", "1", "0"])
    assert "Book returned." in console.output
    assert list(iter_loans(paths["loans_path"])) == []


def test_borrow_unknown_book(paths):
    add_book(paths["books_path"], "Dune", "Frank Herbert", 1965)
    console = _run(2, paths, ["3", "5", "0"])
    assert "No book with this id." in console.output


def test_display_books(paths):
    add_book(paths["books_path"], "Dune", "Frank Herbert", 1965)
    console = _run(2, paths, ["1", "0"])
    assert "--- BOOKS ---" in console.output
    assert "AVAILABLE" in console.output


def test_display_books_missing_file(paths):
    console = _run(2, paths, ["1", "0"])
    assert "Error opening books file." in console.output


def test_my_books_none(paths):
    add_book(paths["books_path"], "Dune", "Frank Herbert", 1965)
    console = _run(2, paths, ["2", "0"])
    assert "(none)" in console.output


def test_remove_on_empty_library(paths):
    console = _run(1, paths, ["5", "0"])
    assert "Library is empty." in console.output


def test_remove_borrowed_book(paths):
    add_book(paths["books_path"], "Dune", "Frank Herbert", 1965)
    _run(2, paths, ["3", "1", "0"])
    console = _run(1, paths, ["5", "1", "0"])
    assert "Cannot remove: book is currently borrowed." in console.output
    assert "No book with this id (or borrowed)." in console.output


def test_remove_book(paths):
    add_book(paths["books_path"], "Dune", "Frank Herbert", 1965)
    console = _run(1, paths, ["5", "1", "0"])
    assert "Book removed." in console.output
    assert paths["books_path"].read_text(encoding="utf-8") == ""


def test_add_and_display_users(paths):
    console = _run(1, paths, ["7", "Cy", "0", "8", "0"])
    assert "User added." in console.output
    for line in read_user_lines(paths["users_path"]):
        assert f"{line}\n" in console.output
    assert len(read_user_lines(paths["users_path"])) == 3


def test_main_runs_session(paths, monkeypatch, capsys):
    answers = iter(["1", "0"])

    def fake_input(prompt=""):
        try:
            return next(answers)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)
    status = main(
        [
            "--books", str(paths["books_path"]),
            "--users", str(paths["users_path"]),
            "--loans", str(paths["loans_path"]),
        ]
    )
    out = capsys.readouterr().out
    assert status == 0
    assert "Logged in as user id: 1" in out
    assert out.endswith("Bye.\n")