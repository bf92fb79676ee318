import os

import psycopg2
import pytest

from db.init_db import create_tables, drop_tables

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")


@pytest.fixture(scope="session")
def pg_conn():
    if not TEST_DATABASE_URL:
        pytest.skip("TEST_DATABASE_URL not set")
    conn = psycopg2.connect(TEST_DATABASE_URL)
    drop_tables(conn)
    create_tables(conn)
    yield conn
    drop_tables(conn)
    conn.close()


@pytest.fixture(autouse=True)
def _clean_tables(pg_conn):
    # Clean tables before each test for isolation
    with pg_conn.cursor() as cur:
        cur.execute("TRUNCATE seller, department RESTART IDENTITY;")
    pg_conn.commit()
    yield
