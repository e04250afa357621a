"""
Record view: whole rows by primary key.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple

from pydantic import BaseModel

from ignite_world.access.abstract import AbstractKeyedView
from ignite_world.infrastructure.session import Transaction


class RecordView(AbstractKeyedView):
    """
    Treat each row as one record holding every column, key columns included.
    """

    name: str = "record_view"
    description: str = "Full row by primary key (key and value columns)."

    @property
    def projected_columns(self) -> Tuple[str, ...]:
        return self._mapping.all_columns

    def get_model(self, key: Any, tx: Optional[Transaction] = None) -> Optional[BaseModel]:
        """Same as ``get`` but returns the table's mapped model."""
        row = self.get(key, tx=tx)
        return None if row is None else self._mapping.to_model(row)


__all__ = ["RecordView"]
