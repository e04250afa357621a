"""
Infrastructure package for the Ignite World service.

Centralizes cluster connectivity (session lifecycle, connect retries,
transactions). Keep this layer focused on I/O and resource management,
decoupled from the access and repository logic.
"""

from ignite_world.infrastructure.session import (
    IgniteSession,
    Transaction,
    connect_kwargs,
    open_session,
)

__all__ = [
    "IgniteSession",
    "Transaction",
    "connect_kwargs",
    "open_session",
]
