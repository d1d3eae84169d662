from __future__ import annotations

import uuid


def new_book_id() -> str:
    """Generate a random (version 4) identifier in canonical hyphenated form."""
    return str(uuid.uuid4())


class Book:
    """Represents a single book row in the books table."""

    def __init__(self, title: str, author: str, published_year: int, id: str | None = None) -> None:
        self.id = id or new_book_id()
        self.title = title
        self.author = author
        self.published_year = published_year

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Book):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "publishedYear": self.published_year,
        }

    @staticmethod
    def from_dict(data: dict) -> "Book":
        return Book(
            id=data["id"],
            title=data["title"],
            author=data["author"],
            published_year=data["publishedYear"],
        )
