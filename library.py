import logging
import sqlite3
from typing import List, Optional

import aiosqlite

from book import Book
from database import initialize_database

logger = logging.getLogger(__name__)

# Besides sqlite3.Error, the driver raises OverflowError for integers wider than
# 64 bits and UnicodeEncodeError for strings that cannot be encoded as UTF-8.
DRIVER_ERRORS = (sqlite3.Error, OverflowError, UnicodeEncodeError)


class StorageError(Exception):
    """Raised when the underlying datastore fails a statement."""


class Library:
    """Storage client for the books table.

    Each public method issues exactly one parameterized statement. "Not found"
    is reported as ``None``/``False``; engine failures raise ``StorageError``.
    """

    def __init__(self, db_file: str) -> None:
        self.db_file = db_file
        self._conn: Optional[aiosqlite.Connection] = None

    async def open(self) -> "Library":
        if self._conn is None:
            self._conn = await initialize_database(self.db_file)
        return self

    async def close(self) -> None:
        if self._conn is not None:
            await self._conn.close()
            self._conn = None

    async def __aenter__(self) -> "Library":
        return await self.open()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def _connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise StorageError("Library is not open")
        return self._conn

    # ------------------------- Core operations ------------------------- #
    async def list_books(self) -> List[Book]:
        """List every stored book in storage order."""
        conn = self._connection()
        try:
            async with conn.execute("SELECT * FROM books") as cursor:
                rows = await cursor.fetchall()
        except DRIVER_ERRORS as e:
            raise StorageError(f"Error retrieving books: {e}") from e
        return [Book.from_dict(dict(row)) for row in rows]

    async def find_book(self, book_id: str) -> Optional[Book]:
        conn = self._connection()
        try:
            async with conn.execute("SELECT * FROM books WHERE id = ?", (book_id,)) as cursor:
                row = await cursor.fetchone()
        except DRIVER_ERRORS as e:
            raise StorageError(f"Error retrieving book {book_id}: {e}") from e
        if row is None:
            return None
        return Book.from_dict(dict(row))

    async def add_book(self, book: Book) -> Book:
        conn = self._connection()
        try:
            await conn.execute(
                "INSERT INTO books (id, title, author, publishedYear) VALUES (?, ?, ?, ?)",
                (book.id, book.title, book.author, book.published_year),
            )
            await conn.commit()
        except DRIVER_ERRORS as e:
            raise StorageError(f"Error adding book {book.id}: {e}") from e
        logger.info(f"Book added: id={book.id}")
        return book

    async def update_book(self, book_id: str, *, title: str, author: str, published_year: int) -> bool:
        """Overwrite all three fields of a book. Returns False if no row changed."""
        conn = self._connection()
        try:
            cursor = await conn.execute(
                "UPDATE books SET title = ?, author = ?, publishedYear = ? WHERE id = ?",
                (title, author, published_year, book_id),
            )
            await conn.commit()
        except DRIVER_ERRORS as e:
            raise StorageError(f"Error updating book {book_id}: {e}") from e
        if cursor.rowcount > 0:
            logger.info(f"Book updated: id={book_id}")
            return True
        return False

    async def remove_book(self, book_id: str) -> bool:
        conn = self._connection()
        try:
            cursor = await conn.execute("DELETE FROM books WHERE id = ?", (book_id,))
            await conn.commit()
        except DRIVER_ERRORS as e:
            raise StorageError(f"Error deleting book {book_id}: {e}") from e
        if cursor.rowcount > 0:
            logger.info(f"Book deleted: id={book_id}")
            return True
        return False
