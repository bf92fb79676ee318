"""
repositories/seller_repo.py
---------------------------
Data access layer for sellers.
Every read joins `seller` with `department` so a Seller always comes back
with its Department filled in.
"""

from typing import Optional

import psycopg2

from db.connection import get_connection, rollback_quietly
from db.exceptions import DbError
from models.department import Department
from models.seller import Seller
from repositories.department_repo import DepartmentRepository
from utils.dates import to_sql_date
from utils.logger import get_logger

logger = get_logger(__name__)

_SELECT_JOINED = """
    SELECT seller.Id, seller.Name, seller.Email, seller.BirthDate,
           seller.BaseSalary, seller.DepartmentId, department.Name AS DepName
    FROM seller INNER JOIN department
    ON seller.DepartmentId = department.Id
"""


class SellerRepository:
    """Repository for CRUD operations on the seller table."""

    def __init__(self, conn=None):
        self._conn = conn
        self._departments = DepartmentRepository(conn)

    @property
    def conn(self):
        # The shared connection is looked up each time so a closed one gets reopened.
        return self._conn if self._conn is not None else get_connection()

    # ── CREATE ────────────────────────────────────────────

    def insert(self, seller: Seller) -> Seller:
        """
        Insert a new seller.

        Args:
            seller: The Seller to persist. Its department must already be stored.

        Returns:
            The same Seller with its `id` populated.

        Raises:
            ValueError: If the seller has no department, or the department has no id.
            DbError: If the department does not exist or the store rejects the write.
        """
        self._check_department(seller)
        sql = """
            INSERT INTO seller (Name, Email, BirthDate, BaseSalary, DepartmentId)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING Id;
        """
        conn = self.conn
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (
                    seller.name, seller.email, to_sql_date(seller.birth_date),
                    seller.base_salary, seller.department.id,
                ))
                row = cur.fetchone()
            if row is None:
                rollback_quietly(conn)
                raise DbError("Unexpected error! No rows affected!")
            conn.commit()
            seller.id = row[0]
            logger.info(f"Inserted seller #{seller.id} in department #{seller.department.id}")
            return seller
        except psycopg2.Error as e:
            rollback_quietly(conn)
            logger.error(f"Failed to insert seller: {e}")
            raise DbError(str(e)) from e

    # ── READ ──────────────────────────────────────────────

    def find_by_id(self, seller_id: int) -> Optional[Seller]:
        """
        Fetch a single seller by ID, with its department.

        Returns:
            A Seller or None if not found.
        """
        sql = _SELECT_JOINED + " WHERE seller.Id = %s;"
        conn = self.conn
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (seller_id,))
                row = cur.fetchone()
                if row is None:
                    return None
                return self._row_to_seller(row, self._row_to_department(row))
        except psycopg2.Error as e:
            rollback_quietly(conn)
            logger.error(f"Failed to fetch seller #{seller_id}: {e}")
            raise DbError(str(e)) from e

    def find_by_department(self, department: Department) -> list[Seller]:
        """
        Fetch all sellers of a department, ordered by name.

        Args:
            department: A stored Department; only its id is used.

        Returns:
            List of Seller objects, empty if the department has none.
        """
        if department is None or not department.is_persisted():
            raise ValueError("Department must have an id")
        sql = _SELECT_JOINED + " WHERE seller.DepartmentId = %s ORDER BY seller.Name;"
        return self._fetch_many(sql, (department.id,))

    def find_all(self) -> list[Seller]:
        """Fetch every seller, ordered by name."""
        sql = _SELECT_JOINED + " ORDER BY seller.Name;"
        return self._fetch_many(sql, ())

    # ── UPDATE ────────────────────────────────────────────

    def update(self, seller: Seller) -> bool:
        """
        Update every column of an existing seller, including its department.

        Returns:
            True if a row was updated, False if no seller has that id.
        """
        if not seller.is_persisted():
            raise ValueError("Cannot update a seller that has no id")
        self._check_department(seller)
        sql = """
            UPDATE seller
            SET Name = %s, Email = %s, BirthDate = %s, BaseSalary = %s, DepartmentId = %s
            WHERE Id = %s;
        """
        conn = self.conn
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (
                    seller.name, seller.email, to_sql_date(seller.birth_date),
                    seller.base_salary, seller.department.id, seller.id,
                ))
                updated = cur.rowcount > 0
            conn.commit()
        except psycopg2.Error as e:
            rollback_quietly(conn)
            logger.error(f"Failed to update seller #{seller.id}: {e}")
            raise DbError(str(e)) from e
        if not updated:
            logger.warning(f"Update matched no seller with id {seller.id}")
        return updated

    # ── DELETE ────────────────────────────────────────────

    def delete_by_id(self, seller_id: int) -> None:
        """
        Delete a seller by ID.

        Raises:
            DbError: If no seller has that id.
        """
        sql = "DELETE FROM seller WHERE Id = %s;"
        conn = self.conn
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (seller_id,))
                deleted = cur.rowcount > 0
            conn.commit()
        except psycopg2.Error as e:
            rollback_quietly(conn)
            logger.error(f"Failed to delete seller #{seller_id}: {e}")
            raise DbError(str(e)) from e
        if not deleted:
            raise DbError("There is no seller with that ID")
        logger.info(f"Deleted seller #{seller_id}")

    # ── HELPERS ───────────────────────────────────────────

    def _check_department(self, seller: Seller) -> None:
        """Require a stored department before writing the foreign key."""
        department = seller.department
        if department is None:
            raise ValueError("Seller must have a department")
        if not department.is_persisted():
            raise ValueError("Seller's department must have an id")
        if not self._departments.exists(department.id):
            raise DbError("There is no department with that ID")

    def _fetch_many(self, sql: str, params: tuple) -> list[Seller]:
        """Run a joined select, sharing one Department per department id."""
        conn = self.conn
        try:
            with conn.cursor() as cur:
                cur.execute(sql, params)
                sellers: list[Seller] = []
                departments: dict[int, Department] = {}
                for row in cur:
                    department = departments.get(row[5])
                    if department is None:
                        department = self._row_to_department(row)
                        departments[row[5]] = department
                    sellers.append(self._row_to_seller(row, department))
                return sellers
        except psycopg2.Error as e:
            rollback_quietly(conn)
            logger.error(f"Failed to list sellers: {e}")
            raise DbError(str(e)) from e

    @staticmethod
    def _row_to_department(row: tuple) -> Department:
        """Build the Department from the DepartmentId and DepName columns of a joined row."""
        return Department(id=row[5], name=row[6])

    @staticmethod
    def _row_to_seller(row: tuple, department: Department) -> Seller:
        """Convert a joined row tuple to a Seller domain object."""
        return Seller(
            id=row[0],
            name=row[1],
            email=row[2],
            birth_date=row[3],
            base_salary=float(row[4]),
            department=department,
        )
