"""
Topograph Core Module

Expands a logical stream topology (spouts and bolts with parallelism
hints) into an instance-level graph and exports it for graph
partitioners.

Graph Model:
    Vertices: one per task instance, "<component>-<index>"
    Edges: source instance -> bolt instance, for every bolt input

Usage:
    from topograph.core import TopologyDefinition, build_instance_graph, GraphExporter

    topology = TopologyDefinition("word-count")
    topology.add_spout("sentences", parallelism=2)
    topology.add_bolt("split", parallelism=3).shuffle_grouping("sentences")

    graph = build_instance_graph(topology)
    GraphExporter().export_to_metis(graph, "output/word-count.graph")
"""

# Errors
from .exceptions import (
    TopographError,
    ComponentNameError,
    ParallelismParseError,
    DanglingReferenceError,
    GraphModelError,
    DuplicateVertexError,
    UnknownVertexError,
    GraphExportError,
    MetisFormatError,
)

# Graph Model - Data structures
from .graph_model import (
    INFINITY,
    Vertex,
    Edge,
    Graph,
)

# Topology Definition - Logical components
from .topology import (
    ComponentKind,
    Grouping,
    InputStream,
    Spout,
    Bolt,
    TopologyDefinition,
    load_topology,
)

# Component Resolver
from .component_resolver import (
    ComponentResolver,
    resolve_by_name,
    parallelism_of,
)

# Graph Builder - Instance expansion
from .graph_builder import (
    InstanceGraphBuilder,
    build_instance_graph,
    expected_counts,
)

# Graph Exporter - METIS and friends
from .graph_exporter import (
    MetisFormat,
    GraphExporter,
)
from .metis_reader import (
    MetisSummary,
    read_metis,
)

__all__ = [
    # Errors
    "TopographError",
    "ComponentNameError",
    "ParallelismParseError",
    "DanglingReferenceError",
    "GraphModelError",
    "DuplicateVertexError",
    "UnknownVertexError",
    "GraphExportError",
    "MetisFormatError",
    # Model
    "INFINITY",
    "Vertex",
    "Edge",
    "Graph",
    # Topology
    "ComponentKind",
    "Grouping",
    "InputStream",
    "Spout",
    "Bolt",
    "TopologyDefinition",
    "load_topology",
    # Resolver
    "ComponentResolver",
    "resolve_by_name",
    "parallelism_of",
    # Builder
    "InstanceGraphBuilder",
    "build_instance_graph",
    "expected_counts",
    # Exporter
    "MetisFormat",
    "GraphExporter",
    "MetisSummary",
    "read_metis",
]
