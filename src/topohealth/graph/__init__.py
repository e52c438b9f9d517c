"""Weighted topology graph and shortest path engine."""

from topohealth.graph.builder import build_topology_graph, calculate_edge_weight, is_active_link
from topohealth.graph.compute import ComputePathResult, compute_path
from topohealth.graph.dijkstra import dijkstra_shortest_path
from topohealth.graph.priority_queue import PriorityQueue, PriorityQueueItem
from topohealth.graph.types import (
    GraphEdge,
    GraphNode,
    NetworkPath,
    TopologyGraph,
    WeightingStrategy,
)

__all__ = [
    "ComputePathResult",
    "GraphEdge",
    "GraphNode",
    "NetworkPath",
    "PriorityQueue",
    "PriorityQueueItem",
    "TopologyGraph",
    "WeightingStrategy",
    "build_topology_graph",
    "calculate_edge_weight",
    "compute_path",
    "dijkstra_shortest_path",
    "is_active_link",
]
