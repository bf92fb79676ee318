"""
db/connection.py
----------------
Holds the single PostgreSQL connection shared by every repository.
The connection is opened on first use and closed once on shutdown.
"""

import psycopg2
from psycopg2.extensions import connection as PgConnection

from config import DATABASE_URL
from db.exceptions import DbError
from utils.logger import get_logger

logger = get_logger(__name__)

_conn: PgConnection | None = None


def get_connection(dsn: str | None = None) -> PgConnection:
    """
    Return the shared connection, opening it if needed.

    Args:
        dsn: Connection string to use instead of DATABASE_URL.
            Only honoured when the connection is not open yet.

    Returns:
        A live psycopg2 connection.

    Raises:
        DbError: If the database is unreachable.
    """
    global _conn
    if _conn is not None and not _conn.closed:
        return _conn
    try:
        _conn = psycopg2.connect(dsn or DATABASE_URL)
        logger.info("Database connection opened.")
    except psycopg2.Error as e:
        logger.error(f"Failed to open database connection: {e}")
        raise DbError(str(e)) from e
    return _conn


def close_connection() -> None:
    """Close the shared connection. Safe to call when nothing is open."""
    global _conn
    if _conn is None:
        return
    try:
        if not _conn.closed:
            _conn.close()
            logger.info("Database connection closed.")
    except psycopg2.Error as e:
        logger.error(f"Failed to close database connection: {e}")
        raise DbError(str(e)) from e
    finally:
        _conn = None


def rollback_quietly(conn) -> None:
    """
    Roll back the current transaction after a failed statement.

    A rollback on a closed or broken connection fails too; that failure is
    logged and dropped so the caller can still raise DbError for the original one.
    """
    try:
        conn.rollback()
    except psycopg2.Error as e:
        logger.warning(f"Rollback failed: {e}")
