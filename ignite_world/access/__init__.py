"""
Data-access package: record view, key/value view and SQL.
"""

from ignite_world.access.abstract import AbstractKeyedView, AccessStrategy
from ignite_world.access.key_value_view import KeyValueView
from ignite_world.access.params import bind_parameters
from ignite_world.access.record_view import RecordView
from ignite_world.access.sql import ResultSet, SqlApi, SqlRow, Statement
from ignite_world.access.tables import Table, Tables

__all__ = [
    "AccessStrategy",
    "AbstractKeyedView",
    "RecordView",
    "KeyValueView",
    "SqlApi",
    "Statement",
    "ResultSet",
    "SqlRow",
    "Table",
    "Tables",
    "bind_parameters",
]
