"""
Access strategy interfaces shared by the record view, the key/value view and
the SQL facade.

The three strategies are siblings: each one builds its own statement and goes
straight to the cluster through the session. None is implemented on top of
another. Pick by what the caller needs back:

- ``RecordView``: the full row for a key.
- ``KeyValueView``: only the non-key columns, when the key is already in hand.
- ``SqlApi``: joins, aggregation, ordering, limits.
"""

from __future__ import annotations

import abc
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple, runtime_checkable

from ignite_world.domain.mapping import TableMapping
from ignite_world.infrastructure.session import IgniteSession, Transaction
from ignite_world.utils.logging import get_logger

log = get_logger(__name__)


@runtime_checkable
class AccessStrategy(Protocol):
    """
    Common surface of every access strategy.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier.
    description : str
        A human-friendly summary of the approach.
    """

    name: str
    description: str


class AbstractKeyedView(abc.ABC):
    """
    Primary-key lookups against one mapped table.

    Subclasses choose which columns a lookup returns. A key that matches no
    row yields ``None``; a key with the wrong columns raises ``KeyShapeError``
    before anything is sent to the cluster.
    """

    name: str
    description: str

    def __init__(self, session: IgniteSession, mapping: TableMapping) -> None:
        self._session = session
        self._mapping = mapping

    @property
    def mapping(self) -> TableMapping:
        return self._mapping

    @property
    @abc.abstractmethod
    def projected_columns(self) -> Tuple[str, ...]:  # pragma: no cover - interface only
        """Columns returned by ``get``."""
        raise NotImplementedError

    def _where_clause(self) -> str:
        return " AND ".join(f"{column} = ?" for column in self._mapping.key_columns)

    def _fetch_one(
        self, select_list: str, key: Any, tx: Optional[Transaction]
    ) -> Optional[Tuple[Any, ...]]:
        key_values = self._mapping.normalize_key(key)
        sql = f"SELECT {select_list} FROM {self._mapping.table} WHERE {self._where_clause()}"
        with self._session.cursor(tx) as cur:
            cur.execute(sql, list(key_values.values()))
            row = cur.fetchone()
        log.debug(
            "Key lookup",
            extra={"view": self.name, "table": self._mapping.table, "found": row is not None},
        )
        return None if row is None else tuple(row)

    def get(self, key: Any, tx: Optional[Transaction] = None) -> Optional[Dict[str, Any]]:
        """
        Look up one row by primary key.

        Parameters
        ----------
        key : Mapping | BaseModel | scalar
            Key columns by column or field name, the table's key model, or a
            bare value for single-column keys.
        tx : Transaction, optional
            Explicit transaction; ``None`` reads in auto-commit mode.

        Returns
        -------
        dict | None
            ``projected_columns`` -> value, or ``None`` when no row has the key.
        """
        columns = self.projected_columns
        if not columns:
            # Every column is part of the key: only existence can be reported.
            return {} if self.contains(key, tx=tx) else None
        row = self._fetch_one(", ".join(columns), key, tx)
        if row is None:
            return None
        return dict(zip(columns, row))

    def get_all(self, keys: Iterable[Any], tx: Optional[Transaction] = None) -> List[Optional[Dict[str, Any]]]:
        """Look up several keys; absent keys yield ``None`` at their position."""
        return [self.get(key, tx=tx) for key in keys]

    def contains(self, key: Any, tx: Optional[Transaction] = None) -> bool:
        return self._fetch_one("1", key, tx) is not None


__all__ = ["AccessStrategy", "AbstractKeyedView"]
