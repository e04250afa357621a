"""
Key/value view: the key goes in, only the value columns come back.
"""

from __future__ import annotations

from typing import Tuple

from ignite_world.access.abstract import AbstractKeyedView


class KeyValueView(AbstractKeyedView):
    """
    Split each row into key columns and value columns and return the values.

    Useful when the caller already holds the key and does not want the key
    columns read back.
    """

    name: str = "key_value_view"
    description: str = "Non-key columns by primary key."

    @property
    def projected_columns(self) -> Tuple[str, ...]:
        return self._mapping.value_columns


__all__ = ["KeyValueView"]
