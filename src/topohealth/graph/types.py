"""Graph data structures for shortest path computation.

- Nodes (devices, with coordinates)
- Edges (links, with weight, latency, bandwidth and health)
- TopologyGraph (undirected, with an adjacency index)
- NetworkPath (a computed path with aggregate metrics)
"""

from enum import Enum
from typing import Any

import networkx as nx
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from topohealth.errors import UnknownStrategyError
from topohealth.model.topology import HealthStatus


class WeightingStrategy(str, Enum):
    """How edge weights are derived from link data."""

    LATENCY = "latency"
    HOPS = "hops"
    BANDWIDTH = "bandwidth"
    ISIS_METRIC = "isis-metric"
    COMBINED = "combined"

    @classmethod
    def parse(cls, value: "WeightingStrategy | str") -> "WeightingStrategy":
        """Coerce a strategy name, raising UnknownStrategyError if unsupported."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownStrategyError(str(value)) from None


class _GraphModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class GraphNode(_GraphModel):
    """A device in the topology graph."""

    id: str = Field(..., description="Device code")
    type: str = Field(default="device")
    name: str
    latitude: float
    longitude: float
    metadata: dict[str, Any] = Field(default_factory=dict)


class GraphEdge(_GraphModel):
    """An undirected link between two devices."""

    id: str = Field(..., description="Link primary key")
    source: str
    target: str
    weight: float = Field(..., ge=0, description="Strategy-dependent path cost")
    latency_us: float = Field(..., description="Measured p95, else declared delay")
    bandwidth_gbps: float | None = None
    health_status: HealthStatus = HealthStatus.HEALTHY
    bidirectional: bool = True

    def connects(self, a: str, b: str) -> bool:
        if self.source == a and self.target == b:
            return True
        return self.bidirectional and self.source == b and self.target == a


class TopologyGraph:
    """Weighted, undirected topology graph.

    Path searches only read from the graph, so one instance can serve
    concurrent queries once construction is finished.

    Example:
        graph = TopologyGraph()
        graph.add_node(GraphNode(id="A", name="A", latitude=0, longitude=0))
        graph.add_node(GraphNode(id="B", name="B", latitude=0, longitude=1))
        graph.add_edge(GraphEdge(id="A-B", source="A", target="B", weight=1, latency_us=1))
    """

    def __init__(self, strategy: WeightingStrategy = WeightingStrategy.LATENCY):
        self.strategy = strategy
        self.nodes: dict[str, GraphNode] = {}
        self.edges: dict[str, GraphEdge] = {}
        self.adjacency: dict[str, list[str]] = {}
        self._edges_by_pair: dict[frozenset[str], list[GraphEdge]] = {}

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def add_node(self, node: GraphNode) -> None:
        """Add a node; an existing node with the same id is kept."""
        self.nodes.setdefault(node.id, node)
        self.adjacency.setdefault(node.id, [])

    def add_edge(self, edge: GraphEdge) -> None:
        """Add an edge between two existing nodes."""
        self.edges[edge.id] = edge
        self._edges_by_pair.setdefault(frozenset((edge.source, edge.target)), []).append(edge)
        self._link_neighbors(edge.source, edge.target)
        if edge.bidirectional:
            self._link_neighbors(edge.target, edge.source)

    def _link_neighbors(self, node_id: str, neighbor_id: str) -> None:
        neighbors = self.adjacency.setdefault(node_id, [])
        if neighbor_id not in neighbors:
            neighbors.append(neighbor_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self.nodes

    def get_node(self, node_id: str) -> GraphNode | None:
        return self.nodes.get(node_id)

    def neighbors(self, node_id: str) -> list[str]:
        """Neighbor ids of a node, in insertion order."""
        return self.adjacency.get(node_id, [])

    def edges_between(self, a: str, b: str) -> list[GraphEdge]:
        """All edges usable to travel from ``a`` to ``b``."""
        return [e for e in self._edges_by_pair.get(frozenset((a, b)), []) if e.connects(a, b)]

    def find_edge(self, a: str, b: str) -> GraphEdge | None:
        """Lowest-weight edge from ``a`` to ``b``, if any."""
        candidates = self.edges_between(a, b)
        if not candidates:
            return None
        return min(candidates, key=lambda e: e.weight)

    def to_networkx(self) -> nx.MultiGraph:
        """Export as a NetworkX MultiGraph keyed by link id."""
        graph = nx.MultiGraph(strategy=self.strategy.value)
        for node_id, node in self.nodes.items():
            graph.add_node(
                node_id,
                name=node.name,
                latitude=node.latitude,
                longitude=node.longitude,
            )
        for edge in self.edges.values():
            graph.add_edge(
                edge.source,
                edge.target,
                key=edge.id,
                weight=edge.weight,
                latency_us=edge.latency_us,
                bandwidth_gbps=edge.bandwidth_gbps,
                health_status=edge.health_status.value,
            )
        return graph


class NetworkPath(_GraphModel):
    """A computed path from source to destination.

    ``total_latency_us`` is the true latency of the chosen links,
    whichever strategy was used to choose them.
    """

    source: GraphNode
    destination: GraphNode
    hops: list[GraphNode] = Field(..., min_length=1, description="Nodes, source to destination")
    links: list[GraphEdge] = Field(default_factory=list, description="Edges in path order")
    total_latency_us: float = Field(..., ge=0)
    total_hops: int = Field(..., ge=0)
    min_bandwidth_gbps: float | None = Field(
        default=None, description="Bottleneck bandwidth; None if any link lacks one"
    )
    path_reliability: float = Field(..., ge=0, le=1, description="Fraction of HEALTHY links")
    strategy: WeightingStrategy = WeightingStrategy.LATENCY
    algorithm: str = "dijkstra"

    @property
    def node_ids(self) -> list[str]:
        return [node.id for node in self.hops]

    @property
    def path_string(self) -> str:
        """Human-readable path representation."""
        return " → ".join(self.node_ids)
