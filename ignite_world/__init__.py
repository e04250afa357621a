"""
Ignite World - reading the World sample database from an Apache Ignite 3 cluster.

The package shows three ways of getting at the same tables:

- Record and key/value views for primary-key lookups
- Parameterized SQL with lazily-paged, explicitly closed result sets
- Repositories with derived queries and projection-mapped explicit queries

plus a small HTTP API and CLI on top of them.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from ignite_world.config import Settings, get_settings
from ignite_world.infrastructure.session import IgniteSession, Transaction, open_session
from ignite_world.access import KeyValueView, RecordView, ResultSet, SqlApi, SqlRow, Statement
from ignite_world.repository import CityRepository, CountryRepository
from ignite_world.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Session
    "IgniteSession",
    "Transaction",
    "open_session",
    # Access strategies
    "RecordView",
    "KeyValueView",
    "SqlApi",
    "Statement",
    "ResultSet",
    "SqlRow",
    # Repositories
    "CityRepository",
    "CountryRepository",
    # Logging
    "configure_logging",
    "get_logger",
]
