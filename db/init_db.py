"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

import psycopg2

from db.connection import get_connection, rollback_quietly
from db.exceptions import DbError
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Departments: a name per department
CREATE TABLE IF NOT EXISTS department (
    Id              SERIAL PRIMARY KEY,
    Name            VARCHAR(60) NOT NULL
);

-- Sellers: each belongs to exactly one department
CREATE TABLE IF NOT EXISTS seller (
    Id              SERIAL PRIMARY KEY,
    Name            VARCHAR(60) NOT NULL,
    Email           VARCHAR(100) NOT NULL,
    BirthDate       DATE NOT NULL,
    BaseSalary      NUMERIC(12,2) NOT NULL,
    DepartmentId    INT NOT NULL REFERENCES department(Id)
);

CREATE INDEX IF NOT EXISTS idx_seller_department ON seller(DepartmentId);
"""

DROP_SQL = """
DROP TABLE IF EXISTS seller;
DROP TABLE IF EXISTS department;
"""


def _run_script(conn, sql: str, verb: str, done: str) -> None:
    try:
        with conn.cursor() as cur:
            cur.execute(sql)
        conn.commit()
        logger.info(f"Database schema {done} successfully.")
    except psycopg2.Error as e:
        rollback_quietly(conn)
        logger.error(f"Failed to {verb} schema: {e}")
        raise DbError(str(e)) from e


def create_tables(conn=None) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    _run_script(conn or get_connection(), SCHEMA_SQL, "initialize", "initialized")


def drop_tables(conn=None) -> None:
    """Drop the seller and department tables, children first."""
    _run_script(conn or get_connection(), DROP_SQL, "drop", "dropped")


if __name__ == "__main__":
    from db.connection import close_connection
    create_tables()
    close_connection()
    print("Database schema created successfully.")
