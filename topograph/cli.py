#!/usr/bin/env python3
"""
CLI to expand a topology definition into its instance graph and export it.

Example usage:
    topograph-export topology.yaml --output output/topology.graph
    topograph-export topology.json --output graph.graph --edge-weights
    topograph-export topology.yaml --output graph.json --format json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import Settings
from .core import (
    GraphExporter,
    MetisFormat,
    TopographError,
    build_instance_graph,
    load_topology,
)


def setup_logging(level: str = "INFO") -> None:
    """Configure logging"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Export the instance graph of a stream topology",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "topology",
        type=Path,
        help="Path to topology definition (JSON or YAML)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Output file path (defaults to <output_dir>/<topology name>.<ext>)",
    )
    parser.add_argument(
        "--format",
        choices=["metis", "json", "graphml"],
        default="metis",
        help="Output format",
    )
    parser.add_argument(
        "--vertex-sizes",
        action="store_true",
        help="Write vertex sizes (METIS only)",
    )
    parser.add_argument(
        "--vertex-weights",
        action="store_true",
        help="Write vertex weights (METIS only)",
    )
    parser.add_argument(
        "--ncon",
        type=int,
        default=1,
        help="Number of vertex weights per vertex (METIS only)",
    )
    parser.add_argument(
        "--edge-weights",
        action="store_true",
        help="Write edge weights (METIS only)",
    )
    parser.add_argument(
        "--parallelism-key",
        default=settings.parallelism_key,
        help="Component configuration key holding the parallelism",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for graph export CLI."""
    settings = Settings.from_env()
    args = build_parser(settings).parse_args(argv)
    setup_logging(args.log_level)

    extensions = {"metis": "graph", "json": "json", "graphml": "graphml"}

    try:
        topology = load_topology(args.topology, parallelism_key=args.parallelism_key)
        graph = build_instance_graph(topology, parallelism_key=args.parallelism_key)

        output = args.output or Path(settings.output_dir) / f"{topology.name}.{extensions[args.format]}"
        exporter = GraphExporter()

        if args.format == "metis":
            fmt = MetisFormat(
                vertex_sizes=args.vertex_sizes,
                vertex_weights=args.vertex_weights,
                edge_weights=args.edge_weights,
                ncon=args.ncon,
            )
            path = exporter.export_to_metis(graph, output, fmt)
        elif args.format == "json":
            path = exporter.export_to_json(graph, output)
        else:
            path = exporter.export_to_graphml(graph, output)

    except (TopographError, FileNotFoundError, ValueError) as e:
        print(f"Export failed: {e}", file=sys.stderr)
        return 1

    print(f"Success! Saved to {path}")
    print_export_stats(graph)
    return 0


def print_export_stats(graph) -> None:
    """Print formatted export statistics."""
    stats = graph.get_statistics()
    print("-" * 30)
    print(f"  Vertices:      {stats['num_vertices']}")
    print(f"  Edges:         {stats['num_edges']}")
    print(f"  Max out-degree:{stats['max_out_degree']:>4}")
    print(f"  Max in-degree: {stats['max_in_degree']:>4}")
    print("-" * 30)


if __name__ == "__main__":
    sys.exit(main())
