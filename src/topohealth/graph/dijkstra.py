"""Dijkstra's shortest path algorithm.

Time complexity: O((V + E) log V); space: O(V).

The graph is only read. Distances, predecessors and the heap are
local to each call, so concurrent searches on one graph are safe.
"""

import math

from topohealth.graph.priority_queue import PriorityQueue
from topohealth.graph.types import GraphEdge, NetworkPath, TopologyGraph
from topohealth.model.topology import HealthStatus


def dijkstra_shortest_path(
    graph: TopologyGraph,
    source_id: str,
    destination_id: str,
) -> NetworkPath | None:
    """Compute the shortest path between two devices.

    Args:
        graph: Weighted topology graph
        source_id: Source device code
        destination_id: Destination device code

    Returns:
        NetworkPath with metrics, or None if either id is unknown or
        no path exists

    Example:
        graph = build_topology_graph(links, "latency")
        path = dijkstra_shortest_path(graph, "dev-a", "dev-z")
        if path:
            print(path.path_string, path.total_latency_us)
    """
    if not graph.has_node(source_id) or not graph.has_node(destination_id):
        return None

    if source_id == destination_id:
        node = graph.nodes[source_id]
        return NetworkPath(
            source=node,
            destination=node,
            hops=[node],
            links=[],
            total_latency_us=0,
            total_hops=0,
            min_bandwidth_gbps=None,
            path_reliability=1.0,
            strategy=graph.strategy,
        )

    distances: dict[str, float] = {source_id: 0.0}
    previous: dict[str, tuple[str, GraphEdge]] = {}
    visited: set[str] = set()

    pq: PriorityQueue[str] = PriorityQueue()
    pq.enqueue(source_id, 0.0)

    while not pq.is_empty():
        current = pq.dequeue()
        current_id = current.value

        if current_id in visited:
            continue
        visited.add(current_id)

        if current_id == destination_id:
            break

        current_distance = distances[current_id]
        for neighbor_id in graph.neighbors(current_id):
            if neighbor_id in visited:
                continue

            # Parallel links are relaxed individually
            for edge in graph.edges_between(current_id, neighbor_id):
                new_distance = current_distance + edge.weight
                if new_distance < distances.get(neighbor_id, math.inf):
                    distances[neighbor_id] = new_distance
                    previous[neighbor_id] = (current_id, edge)
                    pq.enqueue(neighbor_id, new_distance)

    if destination_id not in visited:
        return None

    return _reconstruct_path(graph, source_id, destination_id, previous)


def _reconstruct_path(
    graph: TopologyGraph,
    source_id: str,
    destination_id: str,
    previous: dict[str, tuple[str, GraphEdge]],
) -> NetworkPath | None:
    """Walk predecessors back from the destination and aggregate metrics."""
    node_ids = [destination_id]
    edges: list[GraphEdge] = []

    current = destination_id
    while current != source_id:
        step = previous.get(current)
        if step is None:
            return None
        current, edge = step
        node_ids.append(current)
        edges.append(edge)

    node_ids.reverse()
    edges.reverse()

    total_latency = sum(edge.latency_us for edge in edges)

    bandwidths = [edge.bandwidth_gbps for edge in edges]
    min_bandwidth = None if any(b is None for b in bandwidths) else min(bandwidths)

    healthy = sum(1 for edge in edges if edge.health_status == HealthStatus.HEALTHY)
    reliability = healthy / len(edges) if edges else 1.0

    return NetworkPath(
        source=graph.nodes[source_id],
        destination=graph.nodes[destination_id],
        hops=[graph.nodes[node_id] for node_id in node_ids],
        links=edges,
        total_latency_us=total_latency,
        total_hops=len(edges),
        min_bandwidth_gbps=min_bandwidth,
        path_reliability=reliability,
        strategy=graph.strategy,
    )
