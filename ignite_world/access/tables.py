"""
Tables facade: the entry point of the record and key/value views.

    city = session.tables().table("CITY")
    city.record_view().get({"ID": 34, "COUNTRYCODE": "ALB"})
"""

from __future__ import annotations

from typing import List

from ignite_world.access.key_value_view import KeyValueView
from ignite_world.access.record_view import RecordView
from ignite_world.domain.mapping import MAPPINGS, TableMapping, mapping_for
from ignite_world.infrastructure.session import IgniteSession


class Table:
    """A mapped table bound to a session."""

    def __init__(self, session: IgniteSession, mapping: TableMapping) -> None:
        self._session = session
        self._mapping = mapping

    @property
    def name(self) -> str:
        return self._mapping.table

    @property
    def mapping(self) -> TableMapping:
        return self._mapping

    def record_view(self) -> RecordView:
        return RecordView(self._session, self._mapping)

    def key_value_view(self) -> KeyValueView:
        return KeyValueView(self._session, self._mapping)

    def __repr__(self) -> str:
        return f"Table({self.name!r})"


class Tables:
    def __init__(self, session: IgniteSession) -> None:
        self._session = session

    def table(self, name: str) -> Table:
        """
        Return the named table.

        Raises
        ------
        UnknownTableError
            If no mapping is registered under ``name``.
        """
        return Table(self._session, mapping_for(name))

    def tables(self) -> List[Table]:
        return [Table(self._session, mapping) for mapping in MAPPINGS.values()]


__all__ = ["Table", "Tables"]
