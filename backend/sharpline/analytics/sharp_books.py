from __future__ import annotations

from collections.abc import Iterable

from sharpline.config import DEFAULT_SHARP_BOOKS

SHARP_BOOKS = tuple(DEFAULT_SHARP_BOOKS.split(","))


def is_sharp_book(key: str | None, title: str | None, sharp_books: Iterable[str] = SHARP_BOOKS) -> bool:
    """Case-insensitive substring match of key or title against the allow-list."""
    haystack = f"{key or ''} {title or ''}".lower()
    return any(hint.lower() in haystack for hint in sharp_books if hint)
