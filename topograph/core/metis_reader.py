"""
METIS Reader

Parses METIS graph files back into a summary, used to check an export
against the in-memory graph it came from.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, TextIO, Union

from .exceptions import MetisFormatError
from .graph_exporter import MetisFormat

logger = logging.getLogger(__name__)


@dataclass
class MetisVertex:
    """One parsed vertex line"""
    size: int = 1
    weights: List[int] = field(default_factory=list)
    neighbors: List[int] = field(default_factory=list)
    edge_weights: List[int] = field(default_factory=list)


@dataclass
class MetisSummary:
    """Parsed METIS file"""
    vertex_count: int
    edge_count: int
    fmt: MetisFormat
    vertices: List[MetisVertex] = field(default_factory=list)

    @property
    def adjacency(self) -> Dict[int, List[int]]:
        """1-based vertex index -> neighbor indices"""
        return {i: list(v.neighbors) for i, v in enumerate(self.vertices, start=1)}

    @property
    def adjacency_entries(self) -> int:
        return sum(len(v.neighbors) for v in self.vertices)

    def to_dict(self) -> Dict:
        return {
            'vertex_count': self.vertex_count,
            'edge_count': self.edge_count,
            'fmt': self.fmt.code,
            'ncon': self.fmt.ncon,
            'adjacency_entries': self.adjacency_entries,
        }


def read_metis(source: Union[str, Path, TextIO]) -> MetisSummary:
    """
    Parse a METIS graph file

    Args:
        source: File path or open text stream

    Returns:
        MetisSummary with header counts and per-vertex lines

    Raises:
        FileNotFoundError: If the file doesn't exist
        MetisFormatError: If the header or a vertex line is malformed
    """
    if hasattr(source, 'read'):
        text = source.read()
    else:
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {source}")
        logger.info(f"Reading METIS file: {source}")
        text = path.read_text(encoding='utf-8')
    return parse_metis(text)


def parse_metis(text: str) -> MetisSummary:
    lines = [line for line in text.splitlines() if not line.lstrip().startswith('%')]
    if not lines:
        raise MetisFormatError("Missing METIS header line")

    header = lines[0].split()
    if not 2 <= len(header) <= 4 or not all(h.isdigit() for h in header):
        raise MetisFormatError(f"Invalid METIS header: {lines[0]!r}")

    vertex_count, edge_count = int(header[0]), int(header[1])
    fmt = MetisFormat()
    if len(header) > 2:
        ncon = int(header[3]) if len(header) > 3 else 1
        try:
            fmt = MetisFormat.from_code(header[2], ncon)
        except ValueError as e:
            raise MetisFormatError(str(e)) from e

    body = lines[1:]
    # Trailing blank lines after the last vertex are not vertices
    while len(body) > vertex_count and not body[-1].strip():
        body.pop()
    if len(body) != vertex_count:
        raise MetisFormatError(f"Header declares {vertex_count} vertices, found {len(body)} vertex lines")

    vertices = [_parse_vertex_line(i, line, fmt, vertex_count) for i, line in enumerate(body, start=1)]
    summary = MetisSummary(vertex_count=vertex_count, edge_count=edge_count, fmt=fmt, vertices=vertices)
    _check_symmetry(summary)
    return summary


def _check_symmetry(summary: MetisSummary) -> None:
    """Every edge must appear once on each endpoint line, 2m entries in total"""
    if summary.adjacency_entries != 2 * summary.edge_count:
        raise MetisFormatError(
            f"Header declares {summary.edge_count} edges, "
            f"found {summary.adjacency_entries} adjacency entries"
        )

    # (u, v) multiplicities, so parallel edges have to match on both sides
    pairs = Counter()
    for u, vertex in enumerate(summary.vertices, start=1):
        for v in vertex.neighbors:
            if v == u:
                raise MetisFormatError(f"Vertex {u} lists itself as a neighbor")
            pairs[(u, v)] += 1

    for (u, v), count in pairs.items():
        if pairs[(v, u)] != count:
            raise MetisFormatError(f"Edge {u}-{v} is not listed on both endpoint lines")


def _parse_vertex_line(number: int, line: str, fmt: MetisFormat, vertex_count: int) -> MetisVertex:
    tokens = line.split()
    if not all(t.isdigit() for t in tokens):
        raise MetisFormatError(f"Vertex {number}: non-integer token in {line!r}")
    values = [int(t) for t in tokens]

    vertex = MetisVertex()
    pos = 0
    if fmt.vertex_sizes:
        if pos >= len(values):
            raise MetisFormatError(f"Vertex {number}: missing vertex size")
        vertex.size = values[pos]
        pos += 1
    if fmt.vertex_weights:
        if pos + fmt.ncon > len(values):
            raise MetisFormatError(f"Vertex {number}: expected {fmt.ncon} vertex weights")
        vertex.weights = values[pos:pos + fmt.ncon]
        pos += fmt.ncon

    rest = values[pos:]
    step = 2 if fmt.edge_weights else 1
    if len(rest) % step:
        raise MetisFormatError(f"Vertex {number}: neighbor without edge weight")
    for k in range(0, len(rest), step):
        neighbor = rest[k]
        if not 1 <= neighbor <= vertex_count:
            raise MetisFormatError(f"Vertex {number}: neighbor {neighbor} out of range")
        vertex.neighbors.append(neighbor)
        if fmt.edge_weights:
            vertex.edge_weights.append(rest[k + 1])
    return vertex
