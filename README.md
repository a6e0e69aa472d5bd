# libshelf

libshelf is a small terminal program for running a lending library. It keeps
books, users and loans in three plain text files, one record per line:

| File        | Line format                                  |
|-------------|----------------------------------------------|
| `books.txt` | `id|title|author|year|available` (1 or 0)   |
| `users.txt` | `id|name|admin` (1 for an administrator)     |
| `loans.txt` | `user_id|book_id`                            |

By default the files are looked for in the current directory. `loans.txt` is
created empty the first time a book operation needs it.

## Installing

```
pip install .
```

## Running

```
libshelf
```

The file locations can be changed with options:

```
libshelf --books path/to/books.txt --users path/to/users.txt --loans path/to/loans.txt
```

You are first asked for your user id. An id that is not in the users file is
reported ("User does not exist.") but the session still goes on with it; input
that is not a number ends the program. After that a menu is shown:

```
1. Display books
2. My borrowed books
3. Borrow book
4. Return book
5. Remove book (admin)
6. Add book (admin)
7. Add user (admin)
8. Display users (admin)
0. Exit
```

Any user can list books, list their own loans, borrow and return. Options 5
to 8 work only for users whose admin flag in the users file is 1; anyone else
gets "Access denied (admin only).". A book that is on loan cannot be borrowed
again or removed, and a book can only be returned by the user who borrowed it.
Choosing 0, or reaching the end of input, ends the session.

New books and users get one more than the highest id already on file.

## Using it from Python

The modules can be used on their own:

```python
from libshelf.books import add_book, borrow_book, list_books
from libshelf.users import add_user

add_user("users.txt", "Alice", 1)
add_book("books.txt", "Dune", "Frank Herbert", 1965)
borrow_book(1, 1, "books.txt", "loans.txt")

for line in list_books("books.txt", "loans.txt"):
    print(line)  # 1|Dune|Frank Herbert|1965 | BORROWED
```

- `libshelf.books`: `next_book_id`, `add_book` (returns a `Book`),
  `is_library_empty`, `remove_book`, `borrow_book`, `return_book`,
  `list_books` and `my_borrowed_books` (both return display lines).
- `libshelf.users`: `next_user_id`, `add_user` (returns a `User`),
  `user_exists`, `is_admin`, `read_user_lines`.
- `libshelf.loans`: `ensure_loans_file`, `iter_loans`, `loan_exists`,
  `book_is_borrowed`, `add_loan`, `remove_loan`.
- `libshelf.models`: the `Book` and `User` dataclasses with `to_line()`,
  `parse_id`, the default file names `BOOKS_FILE`, `USERS_FILE` and
  `LOANS_FILE`, and the errors.
- `libshelf.cli`: `main`, `run`, `login_user` and `menu_text`. `run` and
  `login_user` take `read` and `write` callables, so the menu can be driven
  without a terminal.

Failures are raised as exceptions from `libshelf.models`:
`BookNotFoundError`, `BookBorrowedError` and `LoanNotFoundError`, all
subclasses of `LibraryError`. A missing books file raises `FileNotFoundError`
from the operations that need to read it.

## What it does not do

- There are no passwords: logging in only asks for a user id.
- Books and users cannot be edited once added, and users cannot be removed;
  change the text files by hand for that.
- The files are not locked, so only one session should use them at a time.

## Running the tests

```
pip install ".[test]"
pytest
```