"""
Topology Definition

Logical description of a stream topology as consumed by the instance
graph builder:

- Spout: {name, config}
- Bolt:  {name, config, inputs}
- InputStream: {component, stream, grouping, fields}

Components keep their configuration as an ordered list of (key, value)
string pairs. Spouts and bolts are told apart by their `kind`
(ComponentKind), never by their Python class.

Definitions can be registered programmatically or loaded from a dict,
JSON file or YAML file:

    topology = TopologyDefinition("word-count")
    topology.add_spout("sentences", parallelism=2)
    topology.add_bolt("split", parallelism=3).shuffle_grouping("sentences")
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import ClassVar, Dict, List, Optional, Tuple, Union, Iterable, Iterator

from ..config.settings import TOPOLOGY_COMPONENT_PARALLELISM
from .exceptions import ComponentNameError

logger = logging.getLogger(__name__)

# Characters that cannot appear in a component name
RESERVED_NAME_CHARS = {',': 'comma', ':': 'colon'}


# =============================================================================
# Enumerations
# =============================================================================

class ComponentKind(str, Enum):
    """Kind of a topology component"""
    SPOUT = "spout"
    BOLT = "bolt"


class Grouping(str, Enum):
    """Stream grouping policy of a bolt input"""
    SHUFFLE = "SHUFFLE"
    FIELDS = "FIELDS"
    ALL = "ALL"
    GLOBAL = "GLOBAL"
    DIRECT = "DIRECT"
    NONE = "NONE"
    CUSTOM = "CUSTOM"
    LOCAL_OR_SHUFFLE = "LOCAL_OR_SHUFFLE"


# =============================================================================
# Input Streams
# =============================================================================

@dataclass
class InputStream:
    """Stream a bolt consumes from another component"""
    component: str
    stream: str = "default"
    grouping: Grouping = Grouping.SHUFFLE
    fields: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        data = {'component': self.component, 'stream': self.stream, 'grouping': self.grouping.value}
        if self.fields:
            data['fields'] = list(self.fields)
        return data

    @classmethod
    def from_dict(cls, data: Union[str, Dict]) -> 'InputStream':
        if isinstance(data, str):
            return cls(component=data)
        return cls(
            component=str(data.get('component', data.get('source', ''))),
            stream=data.get('stream', 'default'),
            grouping=Grouping(str(data.get('grouping', 'SHUFFLE')).upper()),
            fields=list(data.get('fields', [])),
        )


# =============================================================================
# Components
# =============================================================================

def _config_pairs(config: Union[None, Dict, Iterable]) -> List[Tuple[str, str]]:
    """Normalize a config mapping or pair sequence into ordered string pairs"""
    if not config:
        return []
    items = config.items() if isinstance(config, dict) else config
    return [(str(key), str(value)) for key, value in items]


@dataclass
class Spout:
    """Source component"""
    kind: ClassVar[ComponentKind] = ComponentKind.SPOUT

    name: str
    config: List[Tuple[str, str]] = field(default_factory=list)

    def set(self, key: str, value) -> 'Spout':
        self.config.append((key, str(value)))
        return self

    def to_dict(self) -> Dict:
        return {'name': self.name, 'config': [list(kv) for kv in self.config]}


@dataclass
class Bolt:
    """Processing component consuming one or more streams"""
    kind: ClassVar[ComponentKind] = ComponentKind.BOLT

    name: str
    config: List[Tuple[str, str]] = field(default_factory=list)
    inputs: List[InputStream] = field(default_factory=list)

    def set(self, key: str, value) -> 'Bolt':
        self.config.append((key, str(value)))
        return self

    def add_input(self, component: str, grouping: Grouping = Grouping.SHUFFLE,
                  stream: str = "default", fields: Optional[List[str]] = None) -> 'Bolt':
        self.inputs.append(InputStream(component=component, stream=stream,
                                       grouping=grouping, fields=list(fields or [])))
        return self

    def shuffle_grouping(self, component: str, stream: str = "default") -> 'Bolt':
        return self.add_input(component, Grouping.SHUFFLE, stream)

    def fields_grouping(self, component: str, fields: List[str], stream: str = "default") -> 'Bolt':
        return self.add_input(component, Grouping.FIELDS, stream, fields)

    def all_grouping(self, component: str, stream: str = "default") -> 'Bolt':
        return self.add_input(component, Grouping.ALL, stream)

    def global_grouping(self, component: str, stream: str = "default") -> 'Bolt':
        return self.add_input(component, Grouping.GLOBAL, stream)

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'config': [list(kv) for kv in self.config],
            'inputs': [i.to_dict() for i in self.inputs],
        }


Component = Union[Spout, Bolt]


# =============================================================================
# Topology Definition
# =============================================================================

class TopologyDefinition:
    """
    Ordered registry of spouts and bolts.

    Declaration order is preserved and drives the order in which the
    instance graph is built, so the same definition always produces the
    same graph.
    """

    def __init__(self, name: str = "topology", parallelism_key: str = TOPOLOGY_COMPONENT_PARALLELISM):
        self.name = name
        self.parallelism_key = parallelism_key
        self.spouts: List[Spout] = []
        self.bolts: List[Bolt] = []

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def add_spout(self, name: str, parallelism: Optional[int] = None,
                  config: Union[None, Dict, Iterable] = None) -> Spout:
        self.validate_component_name(name)
        spout = Spout(name=name, config=_config_pairs(config))
        if parallelism is not None:
            spout.set(self.parallelism_key, parallelism)
        self.spouts.append(spout)
        logger.debug(f"Registered spout '{name}'")
        return spout

    def add_bolt(self, name: str, parallelism: Optional[int] = None,
                 config: Union[None, Dict, Iterable] = None,
                 inputs: Optional[Iterable[Union[str, Dict, InputStream]]] = None) -> Bolt:
        self.validate_component_name(name)
        bolt = Bolt(name=name, config=_config_pairs(config))
        if parallelism is not None:
            bolt.set(self.parallelism_key, parallelism)
        for item in inputs or []:
            bolt.inputs.append(item if isinstance(item, InputStream) else InputStream.from_dict(item))
        self.bolts.append(bolt)
        logger.debug(f"Registered bolt '{name}'")
        return bolt

    def validate_component_name(self, name: str) -> None:
        """Reject reserved characters and names already declared"""
        check_name_characters(name)
        if any(b.name == name for b in self.bolts):
            raise ComponentNameError(f"Bolt has already been declared for name {name}", component=name)
        if any(s.name == name for s in self.spouts):
            raise ComponentNameError(f"Spout has already been declared for name {name}", component=name)

    def validate(self) -> None:
        """Re-check every declared name, e.g. for definitions assembled by hand"""
        seen = set()
        for component in self.components():
            check_name_characters(component.name)
            if component.name in seen:
                raise ComponentNameError(
                    f"Component name '{component.name}' is declared more than once",
                    component=component.name,
                )
            seen.add(component.name)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def components(self) -> Iterator[Component]:
        """Spouts first, then bolts, each in declaration order"""
        yield from self.spouts
        yield from self.bolts

    def component_names(self) -> List[str]:
        return [c.name for c in self.components()]

    def __len__(self) -> int:
        return len(self.spouts) + len(self.bolts)

    def __repr__(self) -> str:
        return f"TopologyDefinition(name={self.name!r}, spouts={len(self.spouts)}, bolts={len(self.bolts)})"

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'spouts': [s.to_dict() for s in self.spouts],
            'bolts': [b.to_dict() for b in self.bolts],
        }

    @classmethod
    def from_dict(cls, data: Dict, parallelism_key: str = TOPOLOGY_COMPONENT_PARALLELISM) -> 'TopologyDefinition':
        """
        Build a definition from a dictionary

        Each spout/bolt entry accepts "name", an optional "parallelism"
        hint and an optional "config" (mapping or list of [key, value]
        pairs); bolts also accept "inputs" (component names or dicts).
        """
        topology = cls(name=data.get('name', 'topology'), parallelism_key=parallelism_key)
        for spout_data in data.get('spouts', []) or []:
            topology.add_spout(
                str(spout_data['name']),
                parallelism=spout_data.get('parallelism'),
                config=spout_data.get('config'),
            )
        for bolt_data in data.get('bolts', []) or []:
            topology.add_bolt(
                str(bolt_data['name']),
                parallelism=bolt_data.get('parallelism'),
                config=bolt_data.get('config'),
                inputs=bolt_data.get('inputs'),
            )
        logger.info(f"Loaded topology '{topology.name}': {len(topology.spouts)} spouts, {len(topology.bolts)} bolts")
        return topology


def check_name_characters(name: str) -> None:
    for char, label in RESERVED_NAME_CHARS.items():
        if char in name:
            raise ComponentNameError(f"Component name should not contain {label}({char})", component=name)


def load_topology(filepath: Union[str, Path],
                  parallelism_key: str = TOPOLOGY_COMPONENT_PARALLELISM) -> TopologyDefinition:
    """
    Load a topology definition from a JSON or YAML file

    Args:
        filepath: Path to a .json, .yaml or .yml file
        parallelism_key: Configuration key holding parallelism hints

    Returns:
        TopologyDefinition instance

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    logger.info(f"Loading topology from: {filepath}")
    with open(path, 'r', encoding='utf-8') as f:
        if path.suffix.lower() in ('.yaml', '.yml'):
            import yaml
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    return TopologyDefinition.from_dict(data or {}, parallelism_key=parallelism_key)
