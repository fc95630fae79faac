import os
from contextlib import contextmanager
from typing import Iterator

import psycopg


def get_database_url() -> str:
    """Get the Postgres URL from the DATABASE_URL environment variable."""
    return os.environ["DATABASE_URL"]


@contextmanager
def get_db_connection() -> Iterator[psycopg.Connection]:
    """Open a connection and always close it on exit."""
    conn = psycopg.connect(get_database_url())
    try:
        yield conn
    finally:
        conn.close()


@contextmanager
def get_db_cursor() -> Iterator[psycopg.Cursor]:
    """Get a cursor whose statements form one transaction.

    Commits when the block exits normally and rolls back if it raises. Each call is
    its own transaction, so callers that need several statements to succeed or fail
    together must run them in a single block.
    """
    with get_db_connection() as conn:
        with conn.cursor() as cursor:
            try:
                yield cursor
                conn.commit()
            except Exception:
                conn.rollback()
                raise
