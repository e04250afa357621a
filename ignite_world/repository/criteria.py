"""
Filter/sort builder for derived repository queries.

A derived query is spelled out with a small builder instead of being parsed
out of a method name:

    where("population").gt(param("population")).order_by(desc("population"))

The grammar is deliberately narrow: comparisons on mapped fields joined by
AND, an ORDER BY list and an optional LIMIT. Compiling against a
``TableMapping`` is total and deterministic: the same criteria always yield the
same SQL, and anything outside the grammar fails at compile time.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ignite_world.domain.mapping import TableMapping
from ignite_world.errors import QueryDefinitionError


class Operator(str, Enum):
    EQ = "="
    NE = "<>"
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="
    LIKE = "LIKE"
    IS_NULL = "IS NULL"
    IS_NOT_NULL = "IS NOT NULL"

    @property
    def unary(self) -> bool:
        return self in (Operator.IS_NULL, Operator.IS_NOT_NULL)


@dataclass(frozen=True)
class Param:
    """A value supplied when the query is called."""

    name: str


def param(name: str) -> Param:
    if not name.isidentifier():
        raise QueryDefinitionError(f"Parameter name must be an identifier, got {name!r}")
    return Param(name)


@dataclass(frozen=True)
class Condition:
    field: str
    op: Operator
    value: Any = None


@dataclass(frozen=True)
class Sort:
    field: str
    descending: bool = False


def asc(field: str) -> Sort:
    return Sort(field)


def desc(field: str) -> Sort:
    return Sort(field, descending=True)


@dataclass(frozen=True)
class CompiledQuery:
    """
    SQL with ``?`` placeholders plus what fills each of them.

    ``slots`` holds, per placeholder, either a ``Param`` (bound at call time)
    or a literal value fixed in the criteria.
    """

    sql: str
    slots: Tuple[Any, ...]
    param_names: Tuple[str, ...]

    def bind(self, args: Sequence[Any] = (), kwargs: Optional[Mapping[str, Any]] = None) -> List[Any]:
        """
        Map call arguments onto placeholders.

        Positional arguments fill parameters in the order they first appear
        in the criteria; keyword arguments fill them by name.
        """
        kwargs = kwargs or {}
        if len(args) > len(self.param_names):
            raise TypeError(
                f"expected at most {len(self.param_names)} argument(s), got {len(args)}"
            )
        values: Dict[str, Any] = dict(zip(self.param_names, args))
        for name, value in kwargs.items():
            if name not in self.param_names:
                raise TypeError(f"unexpected keyword argument {name!r}")
            if name in values:
                raise TypeError(f"got multiple values for argument {name!r}")
            values[name] = value
        missing = [name for name in self.param_names if name not in values]
        if missing:
            raise TypeError(f"missing argument(s): {', '.join(missing)}")
        return [values[s.name] if isinstance(s, Param) else s for s in self.slots]


@dataclass(frozen=True)
class Criteria:
    conditions: Tuple[Condition, ...] = ()
    sorts: Tuple[Sort, ...] = ()
    limit_value: Union[int, Param, None] = None

    def where(self, field: str) -> "FieldClause":
        """Start another condition, ANDed with the existing ones."""
        return FieldClause(self, field)

    def order_by(self, *sorts: Union[Sort, str]) -> "Criteria":
        extra = tuple(s if isinstance(s, Sort) else asc(s) for s in sorts)
        return replace(self, sorts=self.sorts + extra)

    def limit(self, value: Union[int, Param]) -> "Criteria":
        return replace(self, limit_value=value)

    def compile(self, mapping: TableMapping, select_list: Optional[str] = None) -> CompiledQuery:
        """
        Translate into SQL against ``mapping``.

        Raises
        ------
        QueryDefinitionError
            If a field is not mapped, a comparison has no value, or a literal
            limit is negative.
        """
        slots: List[Any] = []
        parts = [f"SELECT {select_list or ', '.join(mapping.all_columns)} FROM {mapping.table}"]

        clauses = []
        for condition in self.conditions:
            column = _column(mapping, condition.field)
            if condition.op.unary:
                clauses.append(f"{column} {condition.op.value}")
                continue
            if condition.value is None:
                raise QueryDefinitionError(
                    f"'{condition.field} {condition.op.value}' needs a value; "
                    "use is_null()/is_not_null() to test for NULL"
                )
            clauses.append(f"{column} {condition.op.value} ?")
            slots.append(condition.value)
        if clauses:
            parts.append("WHERE " + " AND ".join(clauses))

        if self.sorts:
            order = ", ".join(
                f"{_column(mapping, s.field)} {'DESC' if s.descending else 'ASC'}" for s in self.sorts
            )
            parts.append(f"ORDER BY {order}")

        if self.limit_value is not None:
            if isinstance(self.limit_value, int) and self.limit_value < 0:
                raise QueryDefinitionError(f"LIMIT must not be negative, got {self.limit_value}")
            parts.append("LIMIT ?")
            slots.append(self.limit_value)

        names: List[str] = []
        for slot in slots:
            if isinstance(slot, Param) and slot.name not in names:
                names.append(slot.name)
        return CompiledQuery(sql=" ".join(parts), slots=tuple(slots), param_names=tuple(names))


class FieldClause:
    """Pending condition on one field; each operator returns the extended criteria."""

    def __init__(self, criteria: Criteria, field: str) -> None:
        self._criteria = criteria
        self._field = field

    def _add(self, op: Operator, value: Any = None) -> Criteria:
        condition = Condition(self._field, op, value)
        return replace(self._criteria, conditions=self._criteria.conditions + (condition,))

    def eq(self, value: Any) -> Criteria:
        return self._add(Operator.EQ, value)

    def ne(self, value: Any) -> Criteria:
        return self._add(Operator.NE, value)

    def gt(self, value: Any) -> Criteria:
        return self._add(Operator.GT, value)

    def ge(self, value: Any) -> Criteria:
        return self._add(Operator.GE, value)

    def lt(self, value: Any) -> Criteria:
        return self._add(Operator.LT, value)

    def le(self, value: Any) -> Criteria:
        return self._add(Operator.LE, value)

    def like(self, pattern: Any) -> Criteria:
        return self._add(Operator.LIKE, pattern)

    def is_null(self) -> Criteria:
        return self._add(Operator.IS_NULL)

    def is_not_null(self) -> Criteria:
        return self._add(Operator.IS_NOT_NULL)


def where(field: str) -> FieldClause:
    return Criteria().where(field)


def _column(mapping: TableMapping, field: str) -> str:
    try:
        return mapping.column_for(field)
    except KeyError as exc:
        raise QueryDefinitionError(exc.args[0]) from None


__all__ = [
    "Operator",
    "Param",
    "param",
    "Condition",
    "Sort",
    "asc",
    "desc",
    "Criteria",
    "CompiledQuery",
    "FieldClause",
    "where",
]
