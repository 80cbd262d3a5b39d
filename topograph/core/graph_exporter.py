"""
Graph Exporter - Instance Graph Export

Exports instance Graphs to various formats:
- METIS (input for the gpmetis / ndmetis graph partitioners)
- JSON
- GraphML (via NetworkX)
- NetworkX (direct graph object)

METIS layout written here:

    <n> <m> [<fmt> [<ncon>]]
    [size] [w1 .. wncon] <neighbor> [<edge weight>] <neighbor> ...   (vertex 1)
    ...                                                              (vertex n)

Vertices are numbered 1..n in graph insertion order. Every edge is
listed on the line of both endpoints, so each vertex line holds its
outgoing and incoming neighbors in edge insertion order. Self-loops
(a bolt reading its own stream) are not written and not counted in m.
"""

import io
import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO, Union

from .exceptions import GraphExportError
from .graph_model import Graph, Vertex

Destination = Union[str, Path, TextIO]


# =============================================================================
# METIS Format Flags
# =============================================================================

@dataclass(frozen=True)
class MetisFormat:
    """Optional attributes written to a METIS file"""
    vertex_sizes: bool = False
    vertex_weights: bool = False
    edge_weights: bool = False
    ncon: int = 1

    def __post_init__(self):
        if self.ncon < 1:
            raise ValueError(f"ncon must be at least 1, got {self.ncon}")

    @property
    def code(self) -> str:
        """Three-digit fmt field: vertex sizes, vertex weights, edge weights"""
        return f"{int(self.vertex_sizes)}{int(self.vertex_weights)}{int(self.edge_weights)}"

    @property
    def has_attributes(self) -> bool:
        return self.vertex_sizes or self.vertex_weights or self.edge_weights

    def header_fields(self) -> List[str]:
        fields = []
        if self.has_attributes:
            fields.append(self.code)
            if self.vertex_weights and self.ncon > 1:
                fields.append(str(self.ncon))
        return fields

    @classmethod
    def from_code(cls, code: str, ncon: int = 1) -> 'MetisFormat':
        code = code.zfill(3)
        if len(code) != 3 or any(c not in '01' for c in code):
            raise ValueError(f"Invalid METIS fmt code: {code!r}")
        return cls(vertex_sizes=code[0] == '1', vertex_weights=code[1] == '1',
                   edge_weights=code[2] == '1', ncon=ncon)


def _weight_token(value: str, what: str) -> str:
    token = str(value).strip()
    if not token.isdigit():
        raise GraphExportError(f"{what} must be a non-negative integer, got {value!r}")
    return str(int(token))


# =============================================================================
# Graph Exporter
# =============================================================================

class GraphExporter:
    """
    Exports instance Graphs to various formats
    """

    def __init__(self):
        """Initialize the graph exporter"""
        self.logger = logging.getLogger(__name__)

    # -------------------------------------------------------------------------
    # METIS
    # -------------------------------------------------------------------------

    def render_metis(self, graph: Graph, fmt: Optional[MetisFormat] = None) -> str:
        """Render a Graph as METIS text"""
        fmt = fmt or MetisFormat()
        index = graph.vertex_index()

        # Incident edges per vertex, in global edge order. METIS has no
        # self-loops, so they are left out of the adjacency and of m.
        adjacency: Dict[str, List[tuple]] = {name: [] for name in graph.vertices}
        edge_count = 0
        for edge in graph.edges:
            if edge.src == edge.dest:
                continue
            adjacency[edge.src].append((edge.dest, edge))
            adjacency[edge.dest].append((edge.src, edge))
            edge_count += 1

        dropped = graph.edge_count - edge_count
        if dropped:
            self.logger.debug(f"Dropped {dropped} self-loop edges from METIS output")

        header = [str(graph.vertex_count), str(edge_count)] + fmt.header_fields()
        lines = [" ".join(header)]

        for name, vertex in graph.vertices.items():
            tokens = self._vertex_tokens(vertex, fmt)
            for neighbor, edge in adjacency[name]:
                tokens.append(str(index[neighbor]))
                if fmt.edge_weights:
                    weight = edge.weights[0] if edge.weights else "1"
                    tokens.append(_weight_token(weight, f"Weight of edge '{edge.name}'"))
            lines.append(" ".join(tokens))

        return "\n".join(lines) + "\n"

    def _vertex_tokens(self, vertex: Vertex, fmt: MetisFormat) -> List[str]:
        tokens = []
        if fmt.vertex_sizes:
            tokens.append(_weight_token(vertex.size, f"Size of vertex '{vertex.name}'"))
        if fmt.vertex_weights:
            if len(vertex.weights) > fmt.ncon:
                raise GraphExportError(
                    f"Vertex '{vertex.name}' has {len(vertex.weights)} weights, "
                    f"but the format allows {fmt.ncon}"
                )
            weights = list(vertex.weights) + ["1"] * (fmt.ncon - len(vertex.weights))
            tokens.extend(_weight_token(w, f"Weight of vertex '{vertex.name}'") for w in weights)
        return tokens

    def export_to_metis(self, graph: Graph, destination: Destination,
                        fmt: Optional[MetisFormat] = None) -> Union[str, TextIO]:
        """
        Export a Graph to METIS format

        Args:
            graph: Instance graph to export
            destination: File path, or an open text stream (left open)
            fmt: Optional attributes to include

        Returns:
            Path of the written file, or the stream

        Raises:
            GraphExportError: If the destination cannot be written or a
                weight label is not a non-negative integer
        """
        content = self.render_metis(graph, fmt)

        if hasattr(destination, "write"):
            self.logger.info(f"Exporting to METIS stream: {graph.vertex_count} vertices")
            destination.write(content)
            return destination

        self.logger.info(f"Exporting to METIS: {destination}")
        return self._write_atomic(Path(destination), content)

    def _write_atomic(self, path: Path, content: str) -> str:
        """Write to a temp file next to the target, then rename it into place"""
        tmp_path = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp")
            with os.fdopen(fd, 'w', encoding='utf-8', newline='\n') as f:
                f.write(content)
            os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, str(path))
        except OSError as e:
            self._discard(tmp_path)
            raise GraphExportError(f"Failed to write {path}: {e}", context={"path": str(path)}) from e
        except BaseException:
            self._discard(tmp_path)
            raise
        return str(path)

    @staticmethod
    def _discard(tmp_path: Optional[str]) -> None:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)

    # -------------------------------------------------------------------------
    # Other formats
    # -------------------------------------------------------------------------

    def export_to_json(self, graph: Graph, filepath: Union[str, Path], indent: int = 2) -> str:
        """Export Graph to JSON file"""
        self.logger.info(f"Exporting to JSON: {filepath}")
        content = json.dumps(graph.to_dict(), indent=indent, default=str) + "\n"
        return self._write_atomic(Path(filepath), content)

    def export_to_graphml(self, graph: Graph, filepath: Union[str, Path]) -> str:
        """Export Graph to GraphML format"""
        import networkx as nx

        self.logger.info(f"Exporting to GraphML: {filepath}")
        buffer = io.BytesIO()
        nx.write_graphml(graph.to_networkx(), buffer)
        return self._write_atomic(Path(filepath), buffer.getvalue().decode('utf-8'))

    def export_to_networkx(self, graph: Graph) -> Any:
        """Export Graph to a NetworkX MultiDiGraph"""
        return graph.to_networkx()
