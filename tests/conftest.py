"""
Test Configuration and Fixtures
================================

Shared pytest fixtures for testing topograph.

Usage:
    pytest tests/                    # Run all tests
    pytest tests/ -v                 # Verbose output
"""

import json
import tempfile
from pathlib import Path
from typing import Any, Dict

import pytest

from topograph.core import TopologyDefinition


# =============================================================================
# Topology Fixtures
# =============================================================================

@pytest.fixture
def simple_topology() -> TopologyDefinition:
    """Spout "1" x2 feeding bolt "3" x3"""
    topology = TopologyDefinition("simple")
    topology.add_spout("1", parallelism=2)
    topology.add_bolt("3", parallelism=3).shuffle_grouping("1")
    return topology


@pytest.fixture
def word_count_data() -> Dict[str, Any]:
    """Word count topology as a plain dictionary"""
    return {
        "name": "word-count",
        "spouts": [
            {"name": "sentences", "parallelism": 2},
            {"name": "tweets", "parallelism": 1},
        ],
        "bolts": [
            {
                "name": "split",
                "parallelism": 3,
                "inputs": [
                    "sentences",
                    {"component": "tweets", "grouping": "shuffle"},
                ],
            },
            {
                "name": "count",
                "parallelism": 4,
                "inputs": [
                    {"component": "split", "grouping": "fields", "fields": ["word"]},
                ],
            },
            {
                "name": "report",
                "parallelism": 1,
                "inputs": [{"component": "count", "grouping": "global"}],
            },
        ],
    }


@pytest.fixture
def word_count(word_count_data) -> TopologyDefinition:
    return TopologyDefinition.from_dict(word_count_data)


# =============================================================================
# File Fixtures
# =============================================================================

@pytest.fixture
def temp_dir():
    """Temporary directory for test outputs"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def word_count_file(word_count_data, temp_dir) -> Path:
    """Word count topology saved to a JSON file"""
    filepath = temp_dir / "word_count.json"
    with open(filepath, 'w') as f:
        json.dump(word_count_data, f)
    return filepath
