"""Path query service.

Wraps graph construction and Dijkstra into one call that reports
expected failures as messages instead of raising.
"""

import time
from collections.abc import Sequence
from dataclasses import dataclass

from topohealth.errors import TopoHealthError
from topohealth.graph.builder import build_topology_graph
from topohealth.graph.dijkstra import dijkstra_shortest_path
from topohealth.graph.types import NetworkPath, WeightingStrategy
from topohealth.logging import get_logger
from topohealth.model.topology import Link

logger = get_logger(__name__)


@dataclass
class ComputePathResult:
    """Outcome of a path query."""

    path: NetworkPath | None
    error: str | None
    compute_time_ms: float

    @property
    def success(self) -> bool:
        return self.path is not None


def compute_path(
    links: Sequence[Link],
    source_id: str | None,
    destination_id: str | None,
    strategy: WeightingStrategy | str = WeightingStrategy.LATENCY,
    active_only: bool = False,
) -> ComputePathResult:
    """Compute the shortest path between two devices.

    Args:
        links: Correlated links to build the graph from
        source_id: Source device code
        destination_id: Destination device code
        strategy: Weighting strategy
        active_only: Exclude inactive links from the graph

    Returns:
        ComputePathResult with either a path or a descriptive error

    Raises:
        UnknownStrategyError: If the strategy name is not supported
    """
    start = time.perf_counter()
    strategy = WeightingStrategy.parse(strategy)

    def done(path: NetworkPath | None, error: str | None) -> ComputePathResult:
        elapsed_ms = (time.perf_counter() - start) * 1000
        return ComputePathResult(path=path, error=error, compute_time_ms=elapsed_ms)

    if not links:
        return done(None, "No topology data available")
    if not source_id:
        return done(None, "Source device not specified")
    if not destination_id:
        return done(None, "Destination device not specified")

    try:
        graph = build_topology_graph(links, strategy, active_only=active_only)

        if not graph.has_node(source_id):
            return done(None, f'Source device "{source_id}" not found in topology')
        if not graph.has_node(destination_id):
            return done(None, f'Destination device "{destination_id}" not found in topology')

        path = dijkstra_shortest_path(graph, source_id, destination_id)
    except TopoHealthError as e:
        logger.error("Path computation failed: %s", e)
        return done(None, f"Path computation failed: {e.message}")

    if path is None:
        return done(None, f'No path exists between "{source_id}" and "{destination_id}"')

    result = done(path, None)
    logger.info(
        "Computed %s path %s (%d hops) in %.2f ms",
        strategy.value,
        path.path_string,
        path.total_hops,
        result.compute_time_ms,
    )
    return result
