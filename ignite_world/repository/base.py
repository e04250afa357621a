"""
Repository base class and query-method descriptors.

A repository binds a ``TableMapping`` to a session and exposes read-only
convenience methods over it:

    class CountryRepository(Repository[Country]):
        mapping = COUNTRY

        find_big = derived(where("population").gt(param("population")))
        top = query("SELECT name FROM country ORDER BY population DESC LIMIT ?")

Query methods are compiled once, when the class statement runs. A derived
query naming an unmapped field, or an explicit query with inconsistent
placeholders, fails the import instead of the first call.
"""

from __future__ import annotations

from typing import Any, ClassVar, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel

from ignite_world.access.params import placeholders
from ignite_world.access.sql import SqlApi, SqlRow, Statement
from ignite_world.domain.mapping import TableMapping
from ignite_world.errors import QueryDefinitionError, QueryParameterError
from ignite_world.infrastructure.session import IgniteSession
from ignite_world.repository.criteria import CompiledQuery, Criteria, Param

T = TypeVar("T", bound=BaseModel)
P = TypeVar("P", bound=BaseModel)


def _normalize_label(label: str) -> str:
    return label.replace("_", "").lower()


def map_row(row: SqlRow, projection: Type[P]) -> P:
    """
    Build ``projection`` from a result row by matching column labels to fields.

    Labels match a field's name or alias ignoring case and underscores, so
    ``CITY_NAME``, ``cityName`` and ``city_name`` all fill ``city_name``.
    """
    by_label = {}
    for column, value in zip(row.keys(), row):
        by_label.setdefault(_normalize_label(column), value)

    data = {}
    for name, info in projection.model_fields.items():
        for candidate in (name, info.alias):
            if candidate and _normalize_label(candidate) in by_label:
                data[info.alias or name] = by_label[_normalize_label(candidate)]
                break
    return projection.model_validate(data)


class _QueryMethod:
    """Descriptor turning a query definition into a bound repository method."""

    def __init__(self, first: bool = False) -> None:
        self.first = first
        self.name = "<unbound>"
        self.owner_name = "<unbound>"

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        self.owner_name = owner.__name__

    def compile(self, mapping: Optional[TableMapping]) -> None:  # pragma: no cover - interface only
        raise NotImplementedError

    def __get__(self, instance: Any, owner: type) -> Any:
        if instance is None:
            return self

        def method(*args: Any, **kwargs: Any) -> Any:
            return self.invoke(instance, args, kwargs)

        method.__name__ = self.name
        method.__qualname__ = f"{self.owner_name}.{self.name}"
        return method

    def invoke(self, repo: "Repository", args: tuple, kwargs: dict) -> Any:  # pragma: no cover
        raise NotImplementedError

    def _result(self, items: List[Any]) -> Any:
        if self.first:
            return items[0] if items else None
        return items


class DerivedQuery(_QueryMethod):
    """Query generated from a ``Criteria`` against the repository's mapping."""

    def __init__(self, criteria: Criteria, first: bool = False) -> None:
        super().__init__(first=first)
        self.criteria = criteria
        self.compiled: Optional[CompiledQuery] = None

    def compile(self, mapping: Optional[TableMapping]) -> None:
        if mapping is None:
            raise QueryDefinitionError(
                f"{self.owner_name}.{self.name}: derived queries need a repository mapping"
            )
        criteria = self.criteria.limit(1) if self.first and self.criteria.limit_value is None else self.criteria
        try:
            self.compiled = criteria.compile(mapping)
        except QueryDefinitionError as exc:
            raise QueryDefinitionError(f"{self.owner_name}.{self.name}: {exc}") from None

    def invoke(self, repo: "Repository", args: tuple, kwargs: dict) -> Any:
        if self.compiled is None:
            raise QueryDefinitionError(
                f"{self.owner_name}.{self.name} was never compiled; declare it on a Repository subclass"
            )
        values = self.compiled.bind(args, kwargs)
        return self._result(repo._fetch_models(self.compiled.sql, values))


class ExplicitQuery(_QueryMethod):
    """
    Hand-written SQL; rows optionally mapped into a projection model.

    With ``:name`` placeholders, positional call arguments fill the names in
    order of first appearance.
    """

    def __init__(self, sql: str, projection: Optional[Type[BaseModel]] = None, first: bool = False) -> None:
        super().__init__(first=first)
        self.sql = sql
        self.projection = projection
        self.param_names: List[str] = []
        self.positional = 0

    def compile(self, mapping: Optional[TableMapping]) -> None:
        try:
            self.positional, named = placeholders(self.sql)
        except QueryParameterError as exc:
            raise QueryDefinitionError(f"{self.owner_name}.{self.name}: {exc}") from None
        self.param_names = list(dict.fromkeys(named))
        if self.projection is not None and not (
            isinstance(self.projection, type) and issubclass(self.projection, BaseModel)
        ):
            raise QueryDefinitionError(
                f"{self.owner_name}.{self.name}: projection must be a pydantic model"
            )

    def invoke(self, repo: "Repository", args: tuple, kwargs: dict) -> Any:
        if self.param_names and args:
            if len(args) > len(self.param_names):
                raise TypeError(
                    f"{self.name}() takes {len(self.param_names)} argument(s), got {len(args)}"
                )
            for name, value in zip(self.param_names, args):
                if name in kwargs:
                    raise TypeError(f"{self.name}() got multiple values for argument {name!r}")
                kwargs[name] = value
            args = ()

        with repo.sql.execute(Statement(self.sql), *args, **kwargs) as rs:
            if self.projection is None:
                rows: List[Any] = list(rs)
            else:
                rows = [map_row(row, self.projection) for row in rs]
        return self._result(rows)


def derived(criteria: Criteria, first: bool = False) -> DerivedQuery:
    """Declare a derived query method. ``first=True`` returns one model or ``None``."""
    return DerivedQuery(criteria, first=first)


def query(sql: str, projection: Optional[Type[BaseModel]] = None, first: bool = False) -> ExplicitQuery:
    """Declare an explicit query method."""
    return ExplicitQuery(sql, projection=projection, first=first)


class Repository(Generic[T]):
    """
    Read-only repository over one mapped table.

    Subclasses set ``mapping``; every ``derived``/``query`` attribute is
    compiled when the subclass is created.
    """

    mapping: ClassVar[Optional[TableMapping]] = None
    _find_by_id: ClassVar[Optional[DerivedQuery]] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for attr in vars(cls).values():
            if isinstance(attr, _QueryMethod):
                attr.compile(cls.mapping)

        if "mapping" in vars(cls) and cls.mapping is not None:
            criteria = Criteria()
            for column in cls.mapping.key_columns:
                criteria = criteria.where(column).eq(Param(column))
            key_query = DerivedQuery(criteria, first=True)
            key_query.__set_name__(cls, "find_by_id")
            key_query.compile(cls.mapping)
            cls._find_by_id = key_query

    def __init__(self, session: IgniteSession) -> None:
        if self.mapping is None:
            raise TypeError(f"{type(self).__name__} has no table mapping")
        self._session = session

    @property
    def session(self) -> IgniteSession:
        return self._session

    @property
    def sql(self) -> SqlApi:
        return self._session.sql()

    def _fetch_models(self, sql: str, values: List[Any]) -> List[T]:
        with self.sql.execute(Statement(sql), *values) as rs:
            return [self.mapping.to_model(row.as_dict()) for row in rs]  # type: ignore[misc]

    def find_by_id(self, key: Any) -> Optional[T]:
        """
        Look up one entity by primary key.

        Returns ``None`` when no row has the key; never raises for absence.
        """
        if self._find_by_id is None:
            raise QueryDefinitionError(
                f"{type(self).__name__} has no key query; set mapping in the class body"
            )
        key_values = self.mapping.normalize_key(key)  # type: ignore[union-attr]
        return self._find_by_id.invoke(self, (), dict(key_values))

    def exists_by_id(self, key: Any) -> bool:
        return self.find_by_id(key) is not None

    def find_all(self, limit: Optional[int] = None) -> List[T]:
        """All rows in primary-key order, optionally capped at ``limit``."""
        criteria = Criteria().order_by(*self.mapping.key_columns)  # type: ignore[union-attr]
        if limit is not None:
            criteria = criteria.limit(limit)
        compiled = criteria.compile(self.mapping)  # type: ignore[arg-type]
        return self._fetch_models(compiled.sql, compiled.bind())

    def count(self) -> int:
        with self.sql.execute(f"SELECT COUNT(*) FROM {self.mapping.table}") as rs:  # type: ignore[union-attr]
            row = next(rs)
        return int(row[0])


__all__ = [
    "Repository",
    "DerivedQuery",
    "ExplicitQuery",
    "derived",
    "query",
    "map_row",
]
