from __future__ import annotations

import gc
import sqlite3
import threading

import pytest

from ignite_world.access.sql import ResultSet, SqlRow, Statement
from ignite_world.errors import QueryParameterError

CITY_COUNT = 17


def _lock_is_free(session) -> bool:
    """Try the session lock from another thread; the RLock is re-entrant in this one."""
    outcome = []

    def _try_lock():
        acquired = session._lock.acquire(blocking=False)
        outcome.append(acquired)
        if acquired:
            session._lock.release()

    worker = threading.Thread(target=_try_lock)
    worker.start()
    worker.join()
    return outcome[0]


def _count_from_other_thread(session, timeout: float = 2.0):
    """Row count read by a second thread, or ``None`` if it did not finish in time."""
    outcome = []

    def _read():
        outcome.append(session.sql().query("SELECT COUNT(*) FROM CITY")[0][0])

    worker = threading.Thread(target=_read, daemon=True)
    worker.start()
    worker.join(timeout)
    return outcome[0] if outcome else None


class FakeSession:
    def __init__(self):
        self.released = []

    def fetch_page(self, cursor, size):
        return cursor.fetchmany(size)

    def release_cursor(self, cursor):
        self.released.append(cursor)


class FakeCursor:
    description = (("ID", None), ("NAME", None))

    def __init__(self, rows):
        self._rows = list(rows)
        self.fetch_sizes = []

    def fetchmany(self, size):
        self.fetch_sizes.append(size)
        page, self._rows = self._rows[:size], self._rows[size:]
        return page


class TestSqlApi:
    def test_positional_parameters(self, world_session):
        with world_session.sql().execute("SELECT name, population FROM CITY WHERE id = ?", 34) as rs:
            rows = list(rs)

        assert len(rows) == 1
        assert rows[0]["NAME"] == "Tirana"
        assert rows[0]["population"] == 270000
        assert rows[0] == ("Tirana", 270000)

    def test_named_parameters(self, world_session):
        rows = world_session.sql().query(
            "SELECT id FROM CITY WHERE countrycode = :cc ORDER BY id", cc="ALB"
        )

        assert [r[0] for r in rows] == [34, 35]

    def test_statement_page_size_pages_lazily(self, world_session):
        with world_session.sql().execute(Statement("SELECT id FROM CITY", page_size=5)) as rs:
            assert sum(1 for _ in rs) == CITY_COUNT

    def test_no_rows(self, world_session):
        assert world_session.sql().query("SELECT id FROM CITY WHERE id = ?", -1) == []

    def test_parameter_mismatch_raises_before_execution(self, world_session):
        with pytest.raises(QueryParameterError):
            world_session.sql().execute("SELECT id FROM CITY WHERE id = ?")
        assert _lock_is_free(world_session)

    def test_engine_error_propagates_and_releases_cursor(self, world_session):
        with pytest.raises(sqlite3.OperationalError):
            world_session.sql().execute("SELECT * FROM NO_SUCH_TABLE")
        assert _lock_is_free(world_session)

    def test_close_after_partial_read(self, world_session):
        rs = world_session.sql().execute("SELECT id FROM CITY ORDER BY id")
        first = next(rs)
        assert _count_from_other_thread(world_session) == CITY_COUNT

        rs.close()
        rs.close()

        assert first[0] == 34
        assert rs.closed
        assert list(rs) == []
        assert _lock_is_free(world_session)

    def test_dropped_result_set_does_not_block_other_threads(self, world_session):
        rs = world_session.sql().execute("SELECT id FROM CITY ORDER BY id")
        next(rs)
        del rs
        gc.collect()

        assert _count_from_other_thread(world_session) == CITY_COUNT

    def test_abandoned_iteration_does_not_block_other_threads(self, world_session):
        for _ in world_session.sql().execute(Statement("SELECT id FROM CITY", page_size=1)):
            break

        assert _count_from_other_thread(world_session) == CITY_COUNT


class TestResultSet:
    def test_fetches_page_by_page(self):
        cursor = FakeCursor([(i, f"c{i}") for i in range(5)])
        rs = ResultSet(FakeSession(), cursor, page_size=2)

        assert [row[0] for row in rs] == [0, 1, 2, 3, 4]
        assert cursor.fetch_sizes == [2, 2, 2, 2]

    def test_close_releases_once(self):
        session = FakeSession()
        cursor = FakeCursor([(1, "a")])
        with ResultSet(session, cursor, page_size=10) as rs:
            assert rs.columns == ("ID", "NAME")
        rs.close()

        assert session.released == [cursor]

    def test_garbage_collected_result_set_releases_cursor(self):
        session = FakeSession()
        cursor = FakeCursor([(1, "a"), (2, "b")])
        rs = ResultSet(session, cursor, page_size=1)
        next(rs)

        del rs
        gc.collect()

        assert session.released == [cursor]


class TestSqlRow:
    def test_duplicate_labels_resolve_to_first(self):
        columns = ("NAME", "POPULATION", "NAME")
        row = SqlRow(("Tirana", 270000, "Albania"), columns, {"NAME": 0, "POPULATION": 1})

        assert row["name"] == "Tirana"
        assert row[2] == "Albania"
        assert row.as_dict() == {"NAME": "Tirana", "POPULATION": 270000}
        assert row.keys() == columns

    def test_unknown_label(self):
        row = SqlRow((1,), ("ID",), {"ID": 0})

        assert row.get("NAME") is None
        with pytest.raises(KeyError):
            row["NAME"]
