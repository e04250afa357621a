"""
Parameter binding for SQL text.

The Ignite driver only understands positional ``?`` placeholders (DB-API
``qmark`` style). Queries may also be written with ``:name`` placeholders;
``bind_parameters`` rewrites those to ``?`` and orders the values to match.
String literals, quoted identifiers, comments and ``::`` casts are left alone.
"""

from __future__ import annotations

import re
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from ignite_world.errors import QueryParameterError

_TOKEN = re.compile(
    r"""
      '(?:[^']|'')*'            # string literal
    | "(?:[^"]|"")*"            # quoted identifier
    | --[^\n]*                  # line comment
    | /\*.*?\*/                 # block comment
    | ::                        # cast
    | (?P<positional>\?)
    | (?<![:\w]):(?P<named>[A-Za-z_]\w*)
    """,
    re.VERBOSE | re.DOTALL,
)


def placeholders(query: str) -> Tuple[int, List[str]]:
    """
    Scan ``query`` for placeholders.

    Returns
    -------
    tuple[int, list[str]]
        Number of ``?`` placeholders and the ``:name`` placeholders in order
        of appearance (repeats included).
    """
    positional = 0
    named: List[str] = []
    for match in _TOKEN.finditer(query):
        if match.group("positional"):
            positional += 1
        elif match.group("named"):
            named.append(match.group("named"))
    if positional and named:
        raise QueryParameterError("Cannot mix '?' and ':name' placeholders in one query")
    return positional, named


def bind_parameters(
    query: str,
    args: Sequence[Any] = (),
    kwargs: Optional[Mapping[str, Any]] = None,
) -> Tuple[str, List[Any]]:
    """
    Produce driver-ready SQL and the positional argument list.

    Parameters
    ----------
    query : str
        SQL text with ``?`` or ``:name`` placeholders.
    args : Sequence
        Values for ``?`` placeholders.
    kwargs : Mapping, optional
        Values for ``:name`` placeholders.

    Raises
    ------
    QueryParameterError
        If the placeholder style is mixed, a value is missing, or a value is
        supplied that no placeholder uses.
    """
    kwargs = dict(kwargs or {})
    positional, named = placeholders(query)

    if named:
        if args:
            raise QueryParameterError("Query uses ':name' placeholders; pass values by name")
        missing = sorted(set(named) - set(kwargs))
        if missing:
            raise QueryParameterError(f"Missing values for parameters: {', '.join(missing)}")
        unused = sorted(set(kwargs) - set(named))
        if unused:
            raise QueryParameterError(f"Unknown parameters: {', '.join(unused)}")

        def _swap(match: re.Match) -> str:
            return "?" if match.group("named") else match.group(0)

        return _TOKEN.sub(_swap, query), [kwargs[name] for name in named]

    if kwargs:
        raise QueryParameterError(
            f"Query has no ':name' placeholders; got {', '.join(sorted(kwargs))}"
        )
    if len(args) != positional:
        raise QueryParameterError(
            f"Query expects {positional} positional argument(s), got {len(args)}"
        )
    return query, list(args)


__all__ = ["bind_parameters", "placeholders"]
