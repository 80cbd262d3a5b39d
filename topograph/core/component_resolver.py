"""
Component Resolver

Looks up logical components by name and reads their parallelism from
the generic component configuration.
"""

import logging
from typing import Dict, Optional

from ..config.settings import TOPOLOGY_COMPONENT_PARALLELISM
from .exceptions import ParallelismParseError
from .topology import Component, ComponentKind, TopologyDefinition

logger = logging.getLogger(__name__)


def resolve_by_name(name: str, topology: TopologyDefinition) -> Optional[Component]:
    """Return the first spout, then bolt, declared with this name, or None"""
    for spout in topology.spouts:
        if spout.name == name:
            return spout
    for bolt in topology.bolts:
        if bolt.name == name:
            return bolt
    return None


def parallelism_of(component: Optional[Component], key: str = TOPOLOGY_COMPONENT_PARALLELISM) -> int:
    """
    Read the parallelism setting of a component

    The last config entry with a matching key wins. A missing component
    or a component without the setting has parallelism 0.

    Raises:
        ParallelismParseError: If the value is not a non-negative integer
    """
    if component is None:
        return 0

    if component.kind not in (ComponentKind.SPOUT, ComponentKind.BOLT):
        raise TypeError(f"Unsupported component kind: {component.kind!r}")

    raw = None
    for config_key, value in component.config:
        if config_key == key:
            raw = value
    if raw is None:
        return 0

    # Plain ASCII digits only: no sign, underscores or non-ASCII digits
    token = str(raw).strip()
    if not (token.isascii() and token.isdigit()):
        raise ParallelismParseError(component.name, raw)
    return int(token)


class ComponentResolver:
    """Resolves components of one topology, caching parallelism per name"""

    def __init__(self, topology: TopologyDefinition, parallelism_key: Optional[str] = None):
        self.topology = topology
        self.parallelism_key = parallelism_key or topology.parallelism_key
        self._parallelism: Dict[str, int] = {}

    def resolve(self, name: str) -> Optional[Component]:
        return resolve_by_name(name, self.topology)

    def parallelism(self, component: Optional[Component]) -> int:
        if component is None:
            return 0
        if component.name not in self._parallelism:
            value = parallelism_of(component, self.parallelism_key)
            logger.debug(f"{component.kind.value} '{component.name}' parallelism={value}")
            self._parallelism[component.name] = value
        return self._parallelism[component.name]

    def parallelism_by_name(self, name: str) -> int:
        return self.parallelism(self.resolve(name))
