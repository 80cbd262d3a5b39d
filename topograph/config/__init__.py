"""
Configuration Package

Environment settings and well-known configuration keys.
"""

from .settings import Settings, TOPOLOGY_COMPONENT_PARALLELISM

__all__ = [
    "Settings",
    "TOPOLOGY_COMPONENT_PARALLELISM",
]
