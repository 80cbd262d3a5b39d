"""
Topograph - instance graphs of stream topologies for graph partitioning.
"""

__version__ = "1.0.0"
