"""
Department repository tests against a scripted connection.
"""

import psycopg2
import pytest

from db.exceptions import DbError
from models.department import Department
from repositories import create_department_repository
from repositories.department_repo import DepartmentRepository
from tests.unit.fakes import ClosedConnection, Result


class TestDepartmentInsert:

    def test_insert_assigns_generated_id(self, conn):
        conn.script(Result(rows=[(7,)]))
        dept = Department(name="Garden")

        returned = DepartmentRepository(conn).insert(dept)

        assert returned is dept
        assert dept.id == 7
        assert conn.commits == 1
        sql, params = conn.executed[0]
        assert sql.startswith("INSERT INTO department (Name)")
        assert "RETURNING Id" in sql
        assert params == ("Garden",)

    def test_insert_without_returned_row_raises(self, conn):
        conn.script(Result(rows=[]))

        with pytest.raises(DbError, match="No rows affected"):
            DepartmentRepository(conn).insert(Department(name="Garden"))
        assert conn.commits == 0

    def test_store_failure_is_wrapped_and_rolled_back(self, conn):
        conn.script(Result(error=psycopg2.Error("value too long for type character varying(60)")))

        with pytest.raises(DbError) as exc_info:
            DepartmentRepository(conn).insert(Department(name="x" * 100))

        assert "value too long" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, psycopg2.Error)
        assert conn.rollbacks == 1
        assert conn.commits == 0


class TestDepartmentRead:

    def test_find_by_id_maps_row(self, conn):
        conn.script(Result(rows=[(4, "Books")]))

        dept = DepartmentRepository(conn).find_by_id(4)

        assert dept == Department(id=4, name="Books")
        assert conn.executed[0][1] == (4,)

    def test_find_by_id_missing_returns_none(self, conn):
        conn.script(Result(rows=[]))

        assert DepartmentRepository(conn).find_by_id(99) is None

    def test_find_all_keeps_row_order(self, conn):
        conn.script(Result(rows=[(1, "Computers"), (2, "Electronics"), (3, "Fashion")]))

        depts = DepartmentRepository(conn).find_all()

        assert [d.id for d in depts] == [1, 2, 3]
        assert [d.name for d in depts] == ["Computers", "Electronics", "Fashion"]
        assert "ORDER BY Id" in conn.executed[0][0]

    def test_find_all_empty(self, conn):
        conn.script(Result(rows=[]))

        assert DepartmentRepository(conn).find_all() == []

    def test_exists(self, conn):
        conn.script(Result(rows=[(1,)]), Result(rows=[]))
        repo = DepartmentRepository(conn)

        assert repo.exists(1) is True
        assert repo.exists(2) is False

    def test_read_failure_is_wrapped(self, conn):
        conn.script(Result(error=psycopg2.Error("connection already closed")))

        with pytest.raises(DbError, match="connection already closed"):
            DepartmentRepository(conn).find_all()
        assert conn.rollbacks == 1


class TestDepartmentUpdate:

    def test_update_existing(self, conn):
        conn.script(Result(rowcount=1))

        updated = DepartmentRepository(conn).update(Department(id=6, name="Fitness"))

        assert updated is True
        assert conn.executed[0][1] == ("Fitness", 6)
        assert conn.commits == 1

    def test_update_unknown_id_is_silent(self, conn):
        conn.script(Result(rowcount=0))

        assert DepartmentRepository(conn).update(Department(id=600, name="Fitness")) is False

    def test_update_unsaved_department_rejected(self, conn):
        with pytest.raises(ValueError):
            DepartmentRepository(conn).update(Department(name="Fitness"))
        assert conn.executed == []


class TestDepartmentDelete:

    def test_delete_existing(self, conn):
        conn.script(Result(rowcount=1))

        DepartmentRepository(conn).delete_by_id(5)

        assert conn.executed[0] == ("DELETE FROM department WHERE Id = %s;", (5,))
        assert conn.commits == 1

    def test_delete_missing_raises(self, conn):
        conn.script(Result(rowcount=0))

        with pytest.raises(DbError, match="There is no department with that ID"):
            DepartmentRepository(conn).delete_by_id(12345)

    def test_delete_referenced_department_is_wrapped(self, conn):
        conn.script(Result(error=psycopg2.Error(
            'update or delete on table "department" violates foreign key constraint'
        )))

        with pytest.raises(DbError, match="foreign key"):
            DepartmentRepository(conn).delete_by_id(1)
        assert conn.rollbacks == 1


def test_factory_binds_connection(conn):
    conn.script(Result(rows=[(1, "Computers")]))

    repo = create_department_repository(conn)

    assert isinstance(repo, DepartmentRepository)
    assert repo.find_by_id(1).name == "Computers"


class TestDepartmentOnClosedConnection:

    def test_read_raises_db_error_when_rollback_also_fails(self):
        closed = ClosedConnection()

        with pytest.raises(DbError, match="connection already closed") as exc_info:
            DepartmentRepository(closed).find_all()

        assert isinstance(exc_info.value.__cause__, psycopg2.InterfaceError)
        assert closed.rollback_attempts == 1

    def test_write_raises_db_error_when_rollback_also_fails(self):
        with pytest.raises(DbError, match="connection already closed"):
            DepartmentRepository(ClosedConnection()).delete_by_id(1)

    def test_failed_commit_leaves_department_unsaved(self, conn):
        conn.script(Result(rows=[(7,)]))
        conn.commit_error = psycopg2.OperationalError("server closed the connection unexpectedly")
        dept = Department(name="Garden")

        with pytest.raises(DbError, match="server closed"):
            DepartmentRepository(conn).insert(dept)

        assert dept.id is None
        assert conn.rollbacks == 1


class TestDepartmentName:

    def test_insert_without_name_rejected(self, conn):
        with pytest.raises(ValueError, match="must have a name"):
            DepartmentRepository(conn).insert(Department())
        assert conn.executed == []

    def test_update_without_name_rejected(self, conn):
        with pytest.raises(ValueError, match="must have a name"):
            DepartmentRepository(conn).update(Department(id=3))
        assert conn.executed == []
