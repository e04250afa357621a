"""
SQL access: parameterized statements and lazily-paged result sets.

Use this path for anything a key lookup cannot express: joins, aggregation,
ordering, limits. A ``ResultSet`` keeps a live cursor until it is closed, so
always consume it inside a ``with`` block. One that is dropped unclosed
releases its cursor when it is garbage collected.

    with session.sql().execute("SELECT name, population FROM CITY WHERE id = ?", 34) as rs:
        for row in rs:
            print(row["NAME"], row[1])
"""

from __future__ import annotations

import weakref
from collections.abc import Sequence as SequenceABC
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from ignite_world.access.params import bind_parameters
from ignite_world.infrastructure.session import IgniteSession, Transaction
from ignite_world.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class Statement:
    """SQL text plus per-statement execution options."""

    query: str
    page_size: Optional[int] = None


class SqlRow(SequenceABC):
    """
    One result row, addressable by position or by column label.

    Label lookups ignore case. When two columns share a label (``city.name``
    and ``country.name`` both come back as ``NAME``) the label resolves to the
    first one; use positions for the rest.
    """

    __slots__ = ("_values", "_columns", "_index")

    def __init__(self, values: Sequence[Any], columns: Tuple[str, ...], index: Dict[str, int]) -> None:
        self._values = tuple(values)
        self._columns = columns
        self._index = index

    def __getitem__(self, key):  # type: ignore[override]
        if isinstance(key, str):
            try:
                return self._values[self._index[key.upper()]]
            except KeyError:
                raise KeyError(f"No column '{key}' in {list(self._columns)}") from None
        return self._values[key]

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SqlRow):
            return self._values == other._values and self._columns == other._columns
        if isinstance(other, tuple):
            return self._values == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def get(self, key: str, default: Any = None) -> Any:
        try:
            return self[key]
        except KeyError:
            return default

    def keys(self) -> Tuple[str, ...]:
        return self._columns

    def as_dict(self) -> Dict[str, Any]:
        """Column label -> value; later duplicates of a label are dropped."""
        result: Dict[str, Any] = {}
        for column, value in zip(self._columns, self._values):
            result.setdefault(column, value)
        return result

    def __repr__(self) -> str:
        body = ", ".join(f"{c}={v!r}" for c, v in zip(self._columns, self._values))
        return f"SqlRow({body})"


class ResultSet:
    """
    Lazily-paged rows of one executed statement.

    Rows are pulled from the driver ``page_size`` at a time. After ``close()``
    the cursor is released and iteration stops, even if rows were left unread.
    The session lock is taken per page, not for the life of the result set.
    """

    def __init__(self, session: IgniteSession, cursor: Any, page_size: int) -> None:
        self._session = session
        self._cursor = cursor
        self._page_size = page_size
        self._buffer: List[Sequence[Any]] = []
        self._exhausted = False
        self._closed = False
        self._release = weakref.finalize(self, session.release_cursor, cursor)

        description = cursor.description or ()
        self._columns: Tuple[str, ...] = tuple(str(d[0]) for d in description)
        self._index: Dict[str, int] = {}
        for pos, name in enumerate(self._columns):
            self._index.setdefault(name.upper(), pos)

    @property
    def columns(self) -> Tuple[str, ...]:
        return self._columns

    @property
    def closed(self) -> bool:
        return self._closed

    def __iter__(self) -> Iterator[SqlRow]:
        return self

    def __next__(self) -> SqlRow:
        if self._closed:
            raise StopIteration
        if not self._buffer:
            if self._exhausted:
                raise StopIteration
            page = self._session.fetch_page(self._cursor, self._page_size)
            if not page:
                self._exhausted = True
                raise StopIteration
            self._buffer = list(page)
            self._buffer.reverse()
        return SqlRow(self._buffer.pop(), self._columns, self._index)

    def close(self) -> None:
        """Release the cursor. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._buffer = []
        self._release()

    def __enter__(self) -> "ResultSet":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class SqlApi:
    """
    Execute SQL statements against the cluster.

    Positional values go in ``*args`` for ``?`` placeholders, named values in
    ``**kwargs`` for ``:name`` placeholders.
    """

    name: str = "sql"
    description: str = "Parameterized SQL with a lazily-paged, explicitly closed result set."

    def __init__(self, session: IgniteSession) -> None:
        self._session = session

    def execute(
        self,
        statement: Union[str, Statement],
        *args: Any,
        tx: Optional[Transaction] = None,
        **kwargs: Any,
    ) -> ResultSet:
        """
        Run ``statement`` and return an open result set.

        Errors raised by the driver propagate unchanged; the cursor is released
        before they do.
        """
        if isinstance(statement, str):
            statement = Statement(statement)
        sql, values = bind_parameters(statement.query, args, kwargs)
        page_size = statement.page_size or self._session.settings.ignite_page_size

        cursor = self._session.acquire_cursor(tx)
        try:
            log.debug("Executing SQL", extra={"sql": sql, "params": values})
            self._session.execute_on(cursor, sql, values)
        except BaseException:
            self._session.release_cursor(cursor)
            raise
        return ResultSet(self._session, cursor, page_size)

    def query(
        self,
        statement: Union[str, Statement],
        *args: Any,
        tx: Optional[Transaction] = None,
        **kwargs: Any,
    ) -> List[SqlRow]:
        """Run ``statement`` and return every row, closing the result set."""
        with self.execute(statement, *args, tx=tx, **kwargs) as rs:
            return list(rs)


__all__ = ["Statement", "SqlRow", "ResultSet", "SqlApi"]
