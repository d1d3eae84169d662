import logging

import aiosqlite

logger = logging.getLogger(__name__)

BOOKS_TABLE_SQL = """
    CREATE TABLE IF NOT EXISTS books (
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        author TEXT NOT NULL,
        publishedYear INTEGER NOT NULL
    )
"""


async def connect(db_file: str) -> aiosqlite.Connection:
    """Open a connection to the SQLite database file."""
    conn = await aiosqlite.connect(db_file)
    conn.row_factory = aiosqlite.Row
    logger.info(f"Connected to SQLite database: {db_file}")
    return conn


async def create_tables(conn: aiosqlite.Connection) -> None:
    """Creates the books table if it doesn't exist. Existing rows are left alone."""
    await conn.execute(BOOKS_TABLE_SQL)
    await conn.commit()
    logger.info("Books table is ready")


async def initialize_database(db_file: str) -> aiosqlite.Connection:
    """Opens the database and makes sure the schema exists.

    The returned connection is owned by the caller. It is closed again if the
    table cannot be created.
    """
    conn = await connect(db_file)
    try:
        await create_tables(conn)
    except Exception:
        await conn.close()
        raise
    return conn
