"""
Graph Model - Instance Graph

Data structures for the instance-level graph of a stream topology:

Vertices:
- Vertex: {name, distance, predecessor, centrality, weights, size}
  one per task instance, named "<component>-<index>" (1-based)

Edges:
- Edge (Vertex → Vertex): {src, dest, weights}
  one per potential data dependency between two instances;
  parallel edges between the same pair are kept

The vertex scratch fields (distance, predecessor, centrality) are
reserved for graph-analysis passes and are not filled by the builder.
"""

import functools
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Iterable, Set, Union
from collections import defaultdict

from .exceptions import DuplicateVertexError, UnknownVertexError


# Distance of a vertex not reached from the traversal source
INFINITY = 2 ** 31 - 1


# =============================================================================
# Vertex
# =============================================================================

@functools.total_ordering
@dataclass(eq=False)
class Vertex:
    """Task instance vertex"""
    name: str
    distance: int = INFINITY
    # Name of the previous vertex on a shortest path, never the object itself
    predecessor: Optional[str] = None
    centrality: float = 0.0
    weights: List[str] = field(default_factory=list)
    size: int = 1

    def add_weights(self, weights: Iterable[str]) -> None:
        self.weights.extend(str(w) for w in weights)

    def weights_string(self) -> str:
        """Render weights as "(w1,w2)", or "" when there are none"""
        if not self.weights:
            return ""
        return "(" + ",".join(self.weights) + ")"

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'distance': self.distance,
            'predecessor': self.predecessor,
            'centrality': self.centrality,
            'weights': list(self.weights),
            'size': self.size,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'Vertex':
        return cls(
            name=data['name'],
            distance=data.get('distance', INFINITY),
            predecessor=data.get('predecessor'),
            centrality=data.get('centrality', 0.0),
            weights=list(data.get('weights', [])),
            size=data.get('size', 1),
        )

    # Vertices are identified by name
    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __lt__(self, other: 'Vertex') -> bool:
        """Order by distance from the source first, then by name"""
        if not isinstance(other, Vertex):
            return NotImplemented
        return (self.distance, self.name) < (other.distance, other.name)

    def __str__(self) -> str:
        return self.name


# =============================================================================
# Edge
# =============================================================================

@dataclass
class Edge:
    """Directed edge between two task instances"""
    src: str
    dest: str
    weights: List[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return f"{self.src}>{self.dest}"

    def weights_string(self) -> str:
        """Render weights as "-(w1,w2)", or "" when there are none"""
        if not self.weights:
            return ""
        return "-(" + ",".join(self.weights) + ")"

    def to_dict(self) -> Dict:
        return {'name': self.name, 'src': self.src, 'dest': self.dest, 'weights': list(self.weights)}

    @classmethod
    def from_dict(cls, data: Dict) -> 'Edge':
        return cls(src=data['src'], dest=data['dest'], weights=list(data.get('weights', [])))


# =============================================================================
# Graph
# =============================================================================

class Graph:
    """Directed multigraph of task instances with lookup and traversal helpers"""

    def __init__(self, name: str = ""):
        self.name = name
        self.vertices: Dict[str, Vertex] = {}
        self.edges: List[Edge] = []
        self._index: Dict[str, int] = {}
        self._outgoing: Dict[str, List[Edge]] = defaultdict(list)
        self._incoming: Dict[str, List[Edge]] = defaultdict(list)
        self.metadata: Dict = {}

    # Vertex operations
    def add_vertex(self, vertex: Union[str, Vertex]) -> Vertex:
        if isinstance(vertex, str):
            vertex = Vertex(vertex)
        if vertex.name in self.vertices:
            raise DuplicateVertexError(f"Vertex '{vertex.name}' already exists")
        self.vertices[vertex.name] = vertex
        self._index[vertex.name] = len(self._index) + 1
        return vertex

    def get_vertex(self, name: str) -> Optional[Vertex]:
        return self.vertices.get(name)

    def has_vertex(self, name: str) -> bool:
        return name in self.vertices

    def index_of(self, name: str) -> int:
        """1-based position of a vertex in insertion order"""
        if name not in self._index:
            raise UnknownVertexError(f"Vertex '{name}' does not exist")
        return self._index[name]

    def vertex_index(self) -> Dict[str, int]:
        return dict(self._index)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    # Edge operations
    def add_edge(self, src: str, dest: str, weights: Optional[Iterable[str]] = None) -> Edge:
        if src not in self.vertices:
            raise UnknownVertexError(f"Source vertex '{src}' does not exist")
        if dest not in self.vertices:
            raise UnknownVertexError(f"Destination vertex '{dest}' does not exist")
        edge = Edge(src=src, dest=dest, weights=[str(w) for w in weights or []])
        self.edges.append(edge)
        self._outgoing[src].append(edge)
        self._incoming[dest].append(edge)
        return edge

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def outgoing(self, name: str) -> List[Edge]:
        return list(self._outgoing.get(name, []))

    def incoming(self, name: str) -> List[Edge]:
        return list(self._incoming.get(name, []))

    def neighbors(self, name: str, direction: str = 'both') -> Set[str]:
        neighbors = set()
        if direction in ('out', 'both'):
            neighbors.update(e.dest for e in self._outgoing.get(name, []))
        if direction in ('in', 'both'):
            neighbors.update(e.src for e in self._incoming.get(name, []))
        return neighbors

    def edges_between(self, src: str, dest: str) -> List[Edge]:
        return [e for e in self._outgoing.get(src, []) if e.dest == dest]

    def vertices_of(self, component: str) -> List[Vertex]:
        """Instances of one component, in index order"""
        prefix = f"{component}-"
        return [v for n, v in self.vertices.items()
                if n.startswith(prefix) and n[len(prefix):].isdigit()]

    # Serialization
    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'metadata': self.metadata,
            'vertices': [v.to_dict() for v in self.vertices.values()],
            'edges': [e.to_dict() for e in self.edges],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'Graph':
        graph = cls(name=data.get('name', ''))
        graph.metadata = dict(data.get('metadata', {}))
        for vertex_data in data.get('vertices', []):
            graph.add_vertex(Vertex.from_dict(vertex_data))
        for edge_data in data.get('edges', []):
            edge = Edge.from_dict(edge_data)
            graph.add_edge(edge.src, edge.dest, edge.weights)
        return graph

    def to_networkx(self) -> Any:
        """Convert to a networkx MultiDiGraph, keeping parallel edges"""
        import networkx as nx

        G = nx.MultiDiGraph(name=self.name)
        for name, vertex in self.vertices.items():
            G.add_node(name, index=self._index[name], size=vertex.size,
                       weights=vertex.weights_string(), centrality=vertex.centrality)
        for edge in self.edges:
            G.add_edge(edge.src, edge.dest, name=edge.name, weights=edge.weights_string())
        return G

    def get_statistics(self) -> Dict:
        out_degrees = [len(self._outgoing.get(n, [])) for n in self.vertices]
        in_degrees = [len(self._incoming.get(n, [])) for n in self.vertices]
        return {
            'num_vertices': self.vertex_count,
            'num_edges': self.edge_count,
            'max_out_degree': max(out_degrees, default=0),
            'max_in_degree': max(in_degrees, default=0),
            'isolated_vertices': sum(1 for o, i in zip(out_degrees, in_degrees) if o == 0 and i == 0),
        }

    def __len__(self) -> int:
        return self.vertex_count

    def __contains__(self, name: str) -> bool:
        return name in self.vertices

    def __repr__(self) -> str:
        return f"Graph(name={self.name!r}, vertices={self.vertex_count}, edges={self.edge_count})"
