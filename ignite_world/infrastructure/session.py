"""
Cluster session management for the Ignite World service.

An ``IgniteSession`` owns one DB-API connection opened through the Ignite 3
Python driver (``pyignite_dbapi``). It is created once at process start and
handed explicitly to everything that reads data: the Tables facade, the SQL
facade, the repositories and the HTTP app. There is no module-level
singleton.

Opening the connection is retried with exponential backoff (tenacity) for
transient connection errors. Nothing after that is retried: errors raised by
the driver while reading propagate to the caller unchanged.
"""

from __future__ import annotations

import logging
import threading
from contextlib import closing, contextmanager
from typing import TYPE_CHECKING, Any, Dict, Generator, Optional, Sequence

import pyignite_dbapi
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ignite_world.config import Settings, get_settings
from ignite_world.utils.logging import get_logger

if TYPE_CHECKING:
    from ignite_world.access.sql import SqlApi
    from ignite_world.access.tables import Table, Tables

log = get_logger(__name__)


class Transaction:
    """
    Explicit transaction context handed to views and the SQL facade.

    Obtained from ``IgniteSession.transaction()``; operations called with
    ``tx=None`` run in the implicit auto-commit mode instead.
    """

    def __init__(self, session: "IgniteSession") -> None:
        self._session = session
        self.active = True

    @property
    def session(self) -> "IgniteSession":
        return self._session

    def __repr__(self) -> str:
        return f"Transaction(active={self.active})"


class IgniteSession:
    """
    Lifetime-scoped handle on one cluster connection.

    Driver calls are serialized with a re-entrant lock so a session can be
    shared by the worker threads of the HTTP server. The lock is taken per
    call; an open result set does not hold it.
    """

    def __init__(self, connection: Any, settings: Optional[Settings] = None) -> None:
        self._connection = connection
        self._settings = settings or get_settings()
        self._lock = threading.RLock()
        self._tx: Optional[Transaction] = None
        self._closed = False

    @classmethod
    def from_connection(cls, connection: Any, settings: Optional[Settings] = None) -> "IgniteSession":
        """Wrap an already-open DB-API connection."""
        return cls(connection, settings=settings)

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def connection(self) -> Any:
        if self._closed:
            raise RuntimeError("session is closed")
        return self._connection

    @property
    def closed(self) -> bool:
        return self._closed

    @contextmanager
    def cursor(self, tx: Optional[Transaction] = None) -> Generator[Any, None, None]:
        """
        Scoped cursor acquisition; the cursor is closed on every exit path.

        The session lock is held for the whole block.

        Example
        -------
            with session.cursor() as cur:
                cur.execute("SELECT 1")
        """
        with self._lock:
            self._check_tx(tx)
            with closing(self.connection.cursor()) as cur:
                yield cur

    def acquire_cursor(self, tx: Optional[Transaction] = None) -> Any:
        """
        Open a cursor whose lifetime the caller manages.

        The session lock is not kept: drive the cursor through
        ``execute_on``/``fetch_page`` and hand it back to ``release_cursor``.
        """
        with self._lock:
            self._check_tx(tx)
            return self.connection.cursor()

    def execute_on(self, cursor: Any, sql: str, params: Sequence[Any]) -> None:
        with self._lock:
            cursor.execute(sql, params)

    def fetch_page(self, cursor: Any, size: int) -> Sequence[Any]:
        with self._lock:
            return cursor.fetchmany(size)

    def release_cursor(self, cursor: Any) -> None:
        with self._lock:
            cursor.close()

    @contextmanager
    def transaction(self) -> Generator[Transaction, None, None]:
        """
        Run a block inside an explicit transaction.

        Commits when the block exits normally, rolls back when it raises, and
        restores auto-commit either way. The session lock is held for the
        whole block, so other threads wait until it ends.
        """
        with self._lock:
            if self._tx is not None:
                raise RuntimeError("a transaction is already open on this session")
            conn = self.connection
            conn.autocommit = False
            tx = Transaction(self)
            self._tx = tx
            try:
                yield tx
            except BaseException:
                log.debug("Rolling back transaction")
                conn.rollback()
                raise
            else:
                conn.commit()
            finally:
                tx.active = False
                self._tx = None
                conn.autocommit = True

    def _check_tx(self, tx: Optional[Transaction]) -> None:
        # Caller holds the lock.
        if tx is None:
            if self._tx is not None:
                raise RuntimeError(
                    "a transaction is open on this session; pass it as tx= "
                    "or run the read after it ends"
                )
            return
        if tx.session is not self or not tx.active:
            raise RuntimeError(f"{tx!r} does not belong to this session or has ended")

    def tables(self) -> "Tables":
        """Entry point of the record and key/value views."""
        from ignite_world.access.tables import Tables

        return Tables(self)

    def table(self, name: str) -> "Table":
        return self.tables().table(name)

    def sql(self) -> "SqlApi":
        """Entry point of the SQL facade."""
        from ignite_world.access.sql import SqlApi

        return SqlApi(self)

    def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            try:
                self._connection.close()
            finally:
                log.info("Ignite session closed")

    def __enter__(self) -> "IgniteSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def connect_kwargs(settings: Settings) -> Dict[str, Any]:
    """Translate settings into ``pyignite_dbapi.connect`` keyword arguments."""
    kwargs: Dict[str, Any] = {
        "address": settings.address_list,
        "timeout": settings.ignite_timeout,
        "schema": settings.ignite_schema,
        "page_size": settings.ignite_page_size,
    }
    if settings.ignite_identity:
        kwargs["identity"] = settings.ignite_identity
        kwargs["secret"] = settings.ignite_secret or ""
    if settings.ignite_use_ssl:
        kwargs["use_ssl"] = True
        for name in ("ssl_keyfile", "ssl_certfile", "ssl_ca_certfile"):
            value = getattr(settings, f"ignite_{name}")
            if value:
                kwargs[name] = value
    return kwargs


def open_session(settings: Optional[Settings] = None) -> IgniteSession:
    """
    Connect to the cluster and return a new session.

    Retries up to ``IGNITE_CONNECT_ATTEMPTS`` times with exponential backoff
    for transient connection errors.

    Raises
    ------
    pyignite_dbapi.OperationalError
        If no address accepted the connection after all attempts.
    """
    settings = settings or get_settings()
    kwargs = connect_kwargs(settings)

    retrying = Retrying(
        stop=stop_after_attempt(max(1, settings.ignite_connect_attempts)),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(
            (pyignite_dbapi.OperationalError, pyignite_dbapi.InterfaceError)
        ),
        before_sleep=before_sleep_log(log, logging.WARNING),
        reraise=True,
    )
    connection = retrying(pyignite_dbapi.connect, **kwargs)
    log.info(
        "Connected to Ignite cluster",
        extra={"addresses": settings.address_list, "schema": settings.ignite_schema},
    )
    return IgniteSession(connection, settings=settings)


__all__ = [
    "IgniteSession",
    "Transaction",
    "connect_kwargs",
    "open_session",
]
