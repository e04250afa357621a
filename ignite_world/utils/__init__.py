"""
Utilities package for the Ignite World service.

Exports shared helpers for logging and profiling.
Keep this package lightweight and free of domain-specific logic.
"""

from ignite_world.utils.logging import configure_logging, get_logger
from ignite_world.utils.profiler import ProfileStats, profile_block

__all__ = [
    "configure_logging",
    "get_logger",
    "ProfileStats",
    "profile_block",
]
