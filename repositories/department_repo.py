"""
repositories/department_repo.py
-------------------------------
Data access layer for departments.
All SQL queries related to the `department` table live here.
"""

from typing import Optional

import psycopg2

from db.connection import get_connection, rollback_quietly
from db.exceptions import DbError
from models.department import Department
from utils.logger import get_logger

logger = get_logger(__name__)


class DepartmentRepository:
    """Repository for CRUD operations on the department table."""

    def __init__(self, conn=None):
        self._conn = conn

    @property
    def conn(self):
        # The shared connection is looked up each time so a closed one gets reopened.
        return self._conn if self._conn is not None else get_connection()

    # ── CREATE ────────────────────────────────────────────

    def insert(self, department: Department) -> Department:
        """
        Insert a new department.

        Args:
            department: The Department to persist.

        Returns:
            The same Department with its `id` populated.

        Raises:
            ValueError: If the department has no name.
            DbError: If the store rejects the write.
        """
        if department.name is None:
            raise ValueError("Department must have a name")
        sql = "INSERT INTO department (Name) VALUES (%s) RETURNING Id;"
        conn = self.conn
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (department.name,))
                row = cur.fetchone()
            if row is None:
                rollback_quietly(conn)
                raise DbError("Unexpected error! No rows affected!")
            conn.commit()
            department.id = row[0]
            logger.info(f"Inserted department #{department.id} ({department.name})")
            return department
        except psycopg2.Error as e:
            rollback_quietly(conn)
            logger.error(f"Failed to insert department: {e}")
            raise DbError(str(e)) from e

    # ── READ ──────────────────────────────────────────────

    def find_by_id(self, department_id: int) -> Optional[Department]:
        """
        Fetch a single department by ID.

        Returns:
            A Department or None if not found.
        """
        sql = "SELECT Id, Name FROM department WHERE Id = %s;"
        return self._fetch_one(sql, (department_id,))

    def find_all(self) -> list[Department]:
        """Fetch every department in storage (id) order."""
        sql = "SELECT Id, Name FROM department ORDER BY Id;"
        conn = self.conn
        try:
            with conn.cursor() as cur:
                cur.execute(sql)
                return [self._row_to_department(r) for r in cur.fetchall()]
        except psycopg2.Error as e:
            rollback_quietly(conn)
            logger.error(f"Failed to list departments: {e}")
            raise DbError(str(e)) from e

    def exists(self, department_id: int) -> bool:
        """Returns True if a department with this id is stored."""
        sql = "SELECT 1 FROM department WHERE Id = %s;"
        conn = self.conn
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (department_id,))
                return cur.fetchone() is not None
        except psycopg2.Error as e:
            rollback_quietly(conn)
            logger.error(f"Failed to look up department #{department_id}: {e}")
            raise DbError(str(e)) from e

    # ── UPDATE ────────────────────────────────────────────

    def update(self, department: Department) -> bool:
        """
        Rename an existing department.

        Args:
            department: Department with updated name (must have id set).

        Returns:
            True if a row was updated, False if no department has that id.
        """
        if not department.is_persisted():
            raise ValueError("Cannot update a department that has no id")
        if department.name is None:
            raise ValueError("Department must have a name")
        sql = "UPDATE department SET Name = %s WHERE Id = %s;"
        conn = self.conn
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (department.name, department.id))
                updated = cur.rowcount > 0
            conn.commit()
        except psycopg2.Error as e:
            rollback_quietly(conn)
            logger.error(f"Failed to update department #{department.id}: {e}")
            raise DbError(str(e)) from e
        if not updated:
            logger.warning(f"Update matched no department with id {department.id}")
        return updated

    # ── DELETE ────────────────────────────────────────────

    def delete_by_id(self, department_id: int) -> None:
        """
        Delete a department by ID.

        Raises:
            DbError: If no department has that id, or the store rejects the
                delete (e.g. sellers still reference it).
        """
        sql = "DELETE FROM department WHERE Id = %s;"
        conn = self.conn
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (department_id,))
                deleted = cur.rowcount > 0
            conn.commit()
        except psycopg2.Error as e:
            rollback_quietly(conn)
            logger.error(f"Failed to delete department #{department_id}: {e}")
            raise DbError(str(e)) from e
        if not deleted:
            raise DbError("There is no department with that ID")
        logger.info(f"Deleted department #{department_id}")

    # ── HELPERS ───────────────────────────────────────────

    def _fetch_one(self, sql: str, params: tuple) -> Optional[Department]:
        conn = self.conn
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params)
                row = cur.fetchone()
                return self._row_to_department(row) if row else None
        except psycopg2.Error as e:
            rollback_quietly(conn)
            logger.error(f"Failed to fetch department: {e}")
            raise DbError(str(e)) from e

    @staticmethod
    def _row_to_department(row: tuple) -> Department:
        """Convert a (Id, Name) row tuple to a Department domain object."""
        return Department(id=row[0], name=row[1])
