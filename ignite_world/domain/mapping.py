"""
Explicit model-to-table mappings.

Each ``TableMapping`` says which column backs which model field, which
columns form the primary key, and which key column decides data placement
(colocation). The access and repository layers only ever talk to tables
through a mapping, so column naming lives here and nowhere else.

Ignite upper-cases unquoted identifiers, so every lookup against a column
name is case-insensitive.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from pydantic import BaseModel

from ignite_world.domain.models import City, CityKey, Country
from ignite_world.errors import KeyShapeError, UnknownTableError


@dataclass(frozen=True)
class TableMapping:
    """
    Field-to-column mapping for one table.

    Attributes
    ----------
    table : str
        Table name as the engine knows it.
    model : type[BaseModel]
        Model a full row maps into.
    columns : Mapping[str, str]
        Model field name -> column name, in table column order.
    key_columns : tuple[str, ...]
        Primary key columns, in key order.
    colocation_key : str, optional
        Key column rows are partitioned by.
    key_model : type[BaseModel], optional
        Model accepted as a key in place of a column map.
    """

    table: str
    model: Type[BaseModel]
    columns: Mapping[str, str]
    key_columns: Tuple[str, ...]
    colocation_key: Optional[str] = None
    key_model: Optional[Type[BaseModel]] = None
    _by_name: Dict[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        by_name: Dict[str, str] = {}
        for field_name, column in self.columns.items():
            by_name[field_name.upper()] = column
            by_name[column.upper()] = column
        object.__setattr__(self, "_by_name", by_name)

        missing = [c for c in self.key_columns if c.upper() not in by_name]
        if missing:
            raise ValueError(f"{self.table}: key columns {missing} are not mapped")
        if self.colocation_key and self.colocation_key not in self.key_columns:
            raise ValueError(f"{self.table}: colocation key must be part of the primary key")

    @property
    def all_columns(self) -> Tuple[str, ...]:
        return tuple(self.columns.values())

    @property
    def value_columns(self) -> Tuple[str, ...]:
        return tuple(c for c in self.columns.values() if c not in self.key_columns)

    def column_for(self, name: str) -> str:
        """Resolve a field or column name (any case) to its column name."""
        try:
            return self._by_name[name.upper()]
        except KeyError:
            raise KeyError(f"{self.table} has no field or column '{name}'") from None

    def normalize_key(self, key: Any) -> Dict[str, Any]:
        """
        Turn a loosely-typed key into ``{column: value}`` in key-column order.

        Accepts a mapping keyed by column or field names, an instance of
        ``key_model``, or a bare scalar when the table has a single key column.
        """
        if self.key_model is not None and isinstance(key, self.key_model):
            key = key.model_dump()
        elif not isinstance(key, Mapping):
            if len(self.key_columns) != 1:
                raise KeyShapeError(
                    f"{self.table} has a composite key {self.key_columns}; "
                    f"got scalar {key!r}"
                )
            key = {self.key_columns[0]: key}

        resolved: Dict[str, Any] = {}
        for name, value in key.items():
            try:
                column = self.column_for(name)
            except KeyError as exc:
                raise KeyShapeError(str(exc)) from None
            resolved[column] = value

        if set(resolved) != set(self.key_columns):
            raise KeyShapeError(
                f"{self.table} key must have exactly {list(self.key_columns)}, "
                f"got {sorted(resolved)}"
            )
        return {column: resolved[column] for column in self.key_columns}

    def to_model(self, row: Mapping[str, Any]) -> BaseModel:
        """Build the mapped model from a row keyed by column name (any case)."""
        upper = {name.upper(): value for name, value in row.items()}
        data = {
            field_name: upper[column.upper()]
            for field_name, column in self.columns.items()
            if column.upper() in upper
        }
        return self.model.model_validate(data)


COUNTRY = TableMapping(
    table="COUNTRY",
    model=Country,
    columns={
        "code": "CODE",
        "name": "NAME",
        "continent": "CONTINENT",
        "region": "REGION",
        "surface_area": "SURFACEAREA",
        "indep_year": "INDEPYEAR",
        "population": "POPULATION",
        "life_expectancy": "LIFEEXPECTANCY",
        "gnp": "GNP",
        "gnp_old": "GNPOLD",
        "local_name": "LOCALNAME",
        "government_form": "GOVERNMENTFORM",
        "head_of_state": "HEADOFSTATE",
        "capital": "CAPITAL",
        "code2": "CODE2",
    },
    key_columns=("CODE",),
)

CITY = TableMapping(
    table="CITY",
    model=City,
    columns={
        "id": "ID",
        "name": "NAME",
        "country_code": "COUNTRYCODE",
        "district": "DISTRICT",
        "population": "POPULATION",
    },
    key_columns=("ID", "COUNTRYCODE"),
    colocation_key="COUNTRYCODE",
    key_model=CityKey,
)

MAPPINGS: Dict[str, TableMapping] = {m.table: m for m in (COUNTRY, CITY)}


def mapping_for(table: str) -> TableMapping:
    """Look up the mapping registered for a table name (any case)."""
    try:
        return MAPPINGS[table.upper()]
    except KeyError:
        raise UnknownTableError(
            f"No mapping for table '{table}'. Known: {', '.join(sorted(MAPPINGS))}"
        ) from None


__all__ = ["TableMapping", "COUNTRY", "CITY", "MAPPINGS", "mapping_for"]
