"""
Unit Tests for topograph.core.component_resolver

Tests for:
    - resolve_by_name: spouts before bolts, absence as None
    - parallelism_of: last entry wins, defaults, malformed values
    - ComponentResolver caching
"""

import pytest

from topograph.config import TOPOLOGY_COMPONENT_PARALLELISM as KEY
from topograph.core.component_resolver import ComponentResolver, parallelism_of, resolve_by_name
from topograph.core.exceptions import ParallelismParseError
from topograph.core.topology import Bolt, Spout, TopologyDefinition


# =============================================================================
# resolve_by_name Tests
# =============================================================================

class TestResolveByName:
    """Tests for component lookup."""

    def test_finds_spout_and_bolt(self, simple_topology):
        assert resolve_by_name("1", simple_topology) is simple_topology.spouts[0]
        assert resolve_by_name("3", simple_topology) is simple_topology.bolts[0]

    def test_missing_component_is_none(self, simple_topology):
        assert resolve_by_name("ghost", simple_topology) is None

    def test_spouts_are_searched_first(self):
        """With a hand-built name clash, the spout is returned."""
        topology = TopologyDefinition()
        topology.bolts.append(Bolt("x"))
        topology.spouts.append(Spout("x"))
        assert isinstance(resolve_by_name("x", topology), Spout)


# =============================================================================
# parallelism_of Tests
# =============================================================================

class TestParallelismOf:
    """Tests for reading parallelism from component config."""

    def test_reads_value(self):
        assert parallelism_of(Spout("s", config=[(KEY, "4")])) == 4

    def test_last_entry_wins(self):
        bolt = Bolt("b", config=[(KEY, "2"), ("other", "9"), (KEY, "7")])
        assert parallelism_of(bolt) == 7

    def test_missing_setting_is_zero(self):
        assert parallelism_of(Bolt("b", config=[("other", "3")])) == 0

    def test_missing_component_is_zero(self):
        assert parallelism_of(None) == 0

    def test_custom_key(self):
        spout = Spout("s", config=[(KEY, "2"), ("my.parallelism", "6")])
        assert parallelism_of(spout, key="my.parallelism") == 6

    @pytest.mark.parametrize("raw", ["abc", "", "2.5", "-1", "+3", "1_0", "３"])
    def test_malformed_value_raises(self, raw):
        """Anything but plain non-negative digits is an error, never zero."""
        with pytest.raises(ParallelismParseError) as exc_info:
            parallelism_of(Spout("s", config=[(KEY, raw)]))
        assert exc_info.value.component == "s"
        assert exc_info.value.raw_value == raw

    def test_negative_value_message(self):
        with pytest.raises(ParallelismParseError, match="not a non-negative integer"):
            parallelism_of(Spout("s", config=[(KEY, "-2")]))

    def test_surrounding_whitespace_is_ignored(self):
        assert parallelism_of(Spout("s", config=[(KEY, " 4 ")])) == 4

    def test_earlier_malformed_value_is_overridden(self):
        """Only the winning entry has to parse."""
        assert parallelism_of(Spout("s", config=[(KEY, "oops"), (KEY, "3")])) == 3


# =============================================================================
# ComponentResolver Tests
# =============================================================================

class TestComponentResolver:
    """Tests for the per-topology resolver."""

    def test_parallelism_by_name(self, simple_topology):
        resolver = ComponentResolver(simple_topology)
        assert resolver.parallelism_by_name("1") == 2
        assert resolver.parallelism_by_name("3") == 3
        assert resolver.parallelism_by_name("ghost") == 0

    def test_uses_topology_key(self):
        topology = TopologyDefinition(parallelism_key="custom.key")
        topology.add_spout("s", parallelism=5)
        assert ComponentResolver(topology).parallelism_by_name("s") == 5
