"""Utility helpers shared across core packages.

Kept limited to environment helpers so that ``core.config`` can import
``core.utils`` without pulling in feature modules.
"""

from .env import get_env, get_node_env, is_production

__all__ = [
    "get_env",
    "get_node_env",
    "is_production",
]
