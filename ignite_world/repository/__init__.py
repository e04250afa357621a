"""
Repository package: ORM-style read access over the mapped tables.
"""

from ignite_world.repository.base import DerivedQuery, ExplicitQuery, Repository, derived, map_row, query
from ignite_world.repository.criteria import Criteria, Operator, Param, Sort, asc, desc, param, where
from ignite_world.repository.world import CityRepository, CountryRepository

__all__ = [
    "Repository",
    "DerivedQuery",
    "ExplicitQuery",
    "derived",
    "query",
    "map_row",
    "Criteria",
    "Operator",
    "Param",
    "Sort",
    "asc",
    "desc",
    "param",
    "where",
    "CountryRepository",
    "CityRepository",
]
