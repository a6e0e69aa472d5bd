"""A small lending-library manager keeping books, users and loans in plain text files."""

__version__ = "0.1.0"