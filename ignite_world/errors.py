"""
Local error types.

Only mistakes made on this side of the wire get their own classes: a key
that does not match the table's primary key, a table nobody mapped, a bad
parameter binding, a repository query that cannot be compiled. Driver and
engine failures (network, authentication, malformed SQL) are raised by
``pyignite_dbapi`` and are never wrapped.
"""

from __future__ import annotations


class IgniteWorldError(Exception):
    """Base class for errors raised by this package."""


class KeyShapeError(IgniteWorldError, ValueError):
    """A key does not carry exactly the table's primary key columns."""


class UnknownTableError(IgniteWorldError, LookupError):
    """No mapping is registered for the requested table."""


class QueryParameterError(IgniteWorldError, ValueError):
    """Placeholders and supplied arguments do not line up."""


class QueryDefinitionError(IgniteWorldError, ValueError):
    """A repository query could not be compiled when its class was defined."""


__all__ = [
    "IgniteWorldError",
    "KeyShapeError",
    "UnknownTableError",
    "QueryParameterError",
    "QueryDefinitionError",
]
