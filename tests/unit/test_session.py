from __future__ import annotations

import pyignite_dbapi
import pytest

from ignite_world.config import Settings
from ignite_world.infrastructure import session as session_module
from ignite_world.infrastructure.session import IgniteSession, open_session


class FakeCursor:
    description = (("X", None),)

    def __init__(self, connection):
        self.connection = connection
        self.closed = False
        self._rows = []

    def execute(self, sql, params=None):
        self.connection.executed.append(self.connection.autocommit)
        self._rows = list(self.connection.rows)

    def fetchone(self):
        return self._rows.pop(0) if self._rows else None

    def fetchmany(self, size):
        page, self._rows = self._rows[:size], self._rows[size:]
        return page

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, rows=()):
        self.autocommit = True
        self.rows = list(rows)
        self.executed = []
        self.events = []
        self.cursors = []
        self.closed = 0

    def cursor(self):
        cur = FakeCursor(self)
        self.cursors.append(cur)
        return cur

    def commit(self):
        self.events.append(("commit", self.autocommit))

    def rollback(self):
        self.events.append(("rollback", self.autocommit))

    def close(self):
        self.closed += 1


@pytest.fixture()
def fake_settings() -> Settings:
    return Settings(_env_file=None, ignite_connect_attempts=2)


@pytest.fixture()
def fake_session(fake_settings):
    return IgniteSession.from_connection(FakeConnection(), settings=fake_settings)


class TestCursor:
    def test_cursor_closed_on_exit(self, fake_session):
        with fake_session.cursor() as cur:
            assert not cur.closed
        assert cur.closed

    def test_cursor_closed_on_error(self, fake_session):
        with pytest.raises(ValueError):
            with fake_session.cursor() as cur:
                raise ValueError("boom")
        assert cur.closed


class TestTransaction:
    def test_commit_on_success(self, fake_session):
        conn = fake_session.connection
        with fake_session.transaction() as tx:
            assert tx.active
            assert conn.autocommit is False

        assert conn.events == [("commit", False)]
        assert conn.autocommit is True
        assert not tx.active

    def test_rollback_on_error(self, fake_session):
        conn = fake_session.connection
        with pytest.raises(RuntimeError, match="boom"):
            with fake_session.transaction():
                raise RuntimeError("boom")

        assert conn.events == [("rollback", False)]
        assert conn.autocommit is True

    def test_nested_transaction_rejected(self, fake_session):
        with fake_session.transaction():
            with pytest.raises(RuntimeError):
                with fake_session.transaction():
                    pass

    def test_ended_transaction_rejected(self, fake_session):
        with fake_session.transaction() as tx:
            pass
        with pytest.raises(RuntimeError):
            with fake_session.cursor(tx):
                pass

    def test_foreign_transaction_rejected(self, fake_session, fake_settings):
        other = IgniteSession.from_connection(FakeConnection(), settings=fake_settings)
        with other.transaction() as tx:
            with pytest.raises(RuntimeError):
                fake_session.acquire_cursor(tx)

    def test_views_accept_transaction(self, fake_settings):
        conn = FakeConnection(rows=[(34, "Tirana", "ALB", "Tirana", 270000)])
        session = IgniteSession.from_connection(conn, settings=fake_settings)
        view = session.table("CITY").record_view()

        with session.transaction() as tx:
            row = view.get({"ID": 34, "COUNTRYCODE": "ALB"}, tx=tx)

        assert row["NAME"] == "Tirana"
        assert conn.executed == [False]
        assert conn.events == [("commit", False)]

    def test_sql_inside_transaction_uses_it(self, fake_session):
        conn = fake_session.connection
        with fake_session.transaction() as tx:
            fake_session.sql().query("SELECT 1", tx=tx)

        assert conn.executed == [False]

    def test_read_without_tx_during_transaction_rejected(self, fake_session):
        conn = fake_session.connection
        with fake_session.transaction():
            with pytest.raises(RuntimeError, match="transaction is open"):
                fake_session.sql().query("SELECT 1")
            with pytest.raises(RuntimeError, match="transaction is open"):
                fake_session.table("COUNTRY").record_view().get("ALB")

        assert conn.executed == []

    def test_read_without_tx_runs_in_autocommit(self, fake_session):
        conn = fake_session.connection
        with fake_session.transaction():
            pass
        fake_session.sql().query("SELECT 1")

        assert conn.executed == [True]


class TestClose:
    def test_close_is_idempotent(self, fake_session):
        conn = fake_session.connection
        with fake_session:
            pass
        fake_session.close()

        assert conn.closed == 1
        assert fake_session.closed
        with pytest.raises(RuntimeError):
            fake_session.connection


class TestOpenSession:
    def test_retries_transient_connection_errors(self, monkeypatch, fake_settings):
        calls = []
        connection = FakeConnection()

        def flaky_connect(**kwargs):
            calls.append(kwargs)
            if len(calls) == 1:
                raise pyignite_dbapi.OperationalError("connection refused")
            return connection

        monkeypatch.setattr(session_module.pyignite_dbapi, "connect", flaky_connect)

        session = open_session(fake_settings)

        assert session.connection is connection
        assert len(calls) == 2
        assert calls[0]["address"] == fake_settings.address_list

    def test_gives_up_after_configured_attempts(self, monkeypatch, fake_settings):
        calls = []

        def refused(**kwargs):
            calls.append(kwargs)
            raise pyignite_dbapi.OperationalError("connection refused")

        monkeypatch.setattr(session_module.pyignite_dbapi, "connect", refused)

        with pytest.raises(pyignite_dbapi.OperationalError):
            open_session(fake_settings)
        assert len(calls) == fake_settings.ignite_connect_attempts

    def test_other_errors_not_retried(self, monkeypatch, fake_settings):
        calls = []

        def bad_schema(**kwargs):
            calls.append(kwargs)
            raise pyignite_dbapi.ProgrammingError("bad schema")

        monkeypatch.setattr(session_module.pyignite_dbapi, "connect", bad_schema)

        with pytest.raises(pyignite_dbapi.ProgrammingError):
            open_session(fake_settings)
        assert len(calls) == 1
