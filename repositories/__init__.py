"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific domain entity.
Repositories receive raw data from the database and return domain model objects.

The factory functions below bind a repository to the shared connection
(or to an explicit one, e.g. in tests).
"""

from repositories.department_repo import DepartmentRepository
from repositories.seller_repo import SellerRepository


def create_department_repository(conn=None) -> DepartmentRepository:
    """Return a DepartmentRepository on `conn`, or on the shared connection."""
    return DepartmentRepository(conn)


def create_seller_repository(conn=None) -> SellerRepository:
    """Return a SellerRepository on `conn`, or on the shared connection."""
    return SellerRepository(conn)
