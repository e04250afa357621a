"""
HTTP surface: one read-only endpoint over the World repositories.
"""

from ignite_world.api.app import create_app

__all__ = ["create_app"]
