"""
Unit Tests for topograph.core.metis_reader
"""

import io

import pytest

from topograph.core.exceptions import MetisFormatError
from topograph.core.metis_reader import parse_metis, read_metis


class TestParseMetis:
    """Tests for METIS parsing."""

    def test_plain_graph(self):
        summary = parse_metis("3 2\n2\n1 3\n2\n")
        assert summary.vertex_count == 3
        assert summary.edge_count == 2
        assert summary.adjacency == {1: [2], 2: [1, 3], 3: [2]}

    def test_comments_are_skipped(self):
        summary = parse_metis("% instance graph\n2 1\n2\n% middle\n1\n")
        assert summary.adjacency == {1: [2], 2: [1]}

    def test_weights_and_sizes(self):
        summary = parse_metis("2 1 111 2\n5 1 2 2 9\n6 3 4 1 9\n")
        first, second = summary.vertices
        assert first.size == 5
        assert first.weights == [1, 2]
        assert first.neighbors == [2]
        assert first.edge_weights == [9]
        assert second.weights == [3, 4]

    def test_isolated_vertex_line(self):
        summary = parse_metis("2 0\n\n\n")
        assert summary.adjacency == {1: [], 2: []}

    def test_parallel_edges(self):
        summary = parse_metis("2 2\n2 2\n1 1\n")
        assert summary.adjacency_entries == 4

    def test_read_from_stream(self):
        summary = read_metis(io.StringIO("1 0\n\n"))
        assert summary.to_dict()["vertex_count"] == 1

    @pytest.mark.parametrize("text", [
        "",
        "x 1\n",
        "1\n",
        "2 1\n2\n",
        "2 1\n3\n1\n",
        "2 1 001\n2\n1 1\n",
        "2 1 9\n2\n1\n",
        "2 5\n2\n1\n",
        "1 1\n1 1\n",
        "3 1\n2\n3\n\n",
        "3 2\n2 2\n1 3\n\n",
    ], ids=[
        "empty", "header-token", "short-header", "missing-line", "out-of-range",
        "unpaired-weight", "bad-fmt", "edge-count", "self-loop", "one-sided",
        "parallel-one-sided",
    ])
    def test_malformed(self, text):
        with pytest.raises(MetisFormatError):
            parse_metis(text)

    def test_missing_file(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            read_metis(temp_dir / "nope.graph")
