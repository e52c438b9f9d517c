"""Graph construction from correlated links.

Builds a weighted, undirected TopologyGraph with one node per device
and one edge per link. Edge weights depend on the weighting strategy;
edge latency does not.
"""

from collections.abc import Iterable

from topohealth.graph.types import GraphEdge, GraphNode, TopologyGraph, WeightingStrategy
from topohealth.logging import get_logger
from topohealth.model.topology import Link

logger = get_logger(__name__)

# Fallbacks when a link lacks the data a strategy needs
UNKNOWN_LATENCY_US = 1_000_000.0
UNKNOWN_BANDWIDTH_GBPS = 10.0
UNKNOWN_ISIS_METRIC = 10_000.0
ZERO_BANDWIDTH_WEIGHT = 1e12

# Links at or above this declared delay are treated as inactive
INACTIVE_DELAY_US = 1_000_000.0


def _known_latency_us(link: Link) -> float | None:
    # Negative values are measurement or provisioning noise, treated as missing
    for value in (link.measured_p95_us, link.expected_delay_us):
        if value is not None and value >= 0:
            return value
    return None


def link_latency_us(link: Link) -> float:
    """Latency reported for a link: measured p95, else declared delay."""
    latency = _known_latency_us(link)
    return latency if latency is not None else 0.0


def _latency_weight(link: Link) -> float:
    latency = _known_latency_us(link)
    return latency if latency is not None else UNKNOWN_LATENCY_US


def _bandwidth_weight(link: Link) -> float:
    gbps = link.bandwidth_gbps if link.bandwidth_gbps is not None else UNKNOWN_BANDWIDTH_GBPS
    if gbps <= 0:
        return ZERO_BANDWIDTH_WEIGHT
    return 1 / gbps


def calculate_edge_weight(link: Link, strategy: WeightingStrategy) -> float:
    """Edge weight for a link under a weighting strategy.

    - latency: measured p95, else declared delay, else 1 s
    - hops: 1
    - bandwidth: 1 / Gbps, unknown treated as 10 Gbps
    - isis-metric: IS-IS metric, else 10000
    - combined: 70% latency weight + 30% bandwidth weight scaled to microseconds
    """
    if strategy is WeightingStrategy.LATENCY:
        return _latency_weight(link)
    if strategy is WeightingStrategy.HOPS:
        return 1.0
    if strategy is WeightingStrategy.BANDWIDTH:
        return _bandwidth_weight(link)
    if strategy is WeightingStrategy.ISIS_METRIC:
        return float(link.isis_metric) if link.isis_metric is not None else UNKNOWN_ISIS_METRIC
    if strategy is WeightingStrategy.COMBINED:
        return 0.7 * _latency_weight(link) + 0.3 * _bandwidth_weight(link) * 1_000_000
    raise AssertionError(f"Unhandled strategy: {strategy}")


def is_active_link(link: Link) -> bool:
    """True for links with IS-IS data, non-zero p95 and a sub-second declared delay."""
    if not link.has_isis:
        return False
    if link.measured_p95_us == 0:
        return False
    if link.expected_delay_us is not None and link.expected_delay_us >= INACTIVE_DELAY_US:
        return False
    return True


def _node_for_side(link: Link, side: str) -> GraphNode:
    code = getattr(link, f"device_{side}_code")
    return GraphNode(
        id=code,
        type="device",
        name=code,
        latitude=getattr(link, f"device_{side}_lat"),
        longitude=getattr(link, f"device_{side}_lon"),
        metadata={
            "location_name": getattr(link, f"device_{side}_location_name"),
            "location_code": getattr(link, f"device_{side}_location_code"),
            "country": getattr(link, f"device_{side}_country"),
        },
    )


def build_topology_graph(
    links: Iterable[Link],
    strategy: WeightingStrategy | str = WeightingStrategy.LATENCY,
    active_only: bool = False,
) -> TopologyGraph:
    """Build a topology graph from correlated links.

    Args:
        links: Correlated links
        strategy: Weighting strategy for edge weights
        active_only: Drop links that is_active_link rejects

    Returns:
        A new TopologyGraph

    Raises:
        UnknownStrategyError: If the strategy name is not supported
    """
    strategy = WeightingStrategy.parse(strategy)
    graph = TopologyGraph(strategy=strategy)

    dropped = 0
    for link in links:
        if active_only and not is_active_link(link):
            dropped += 1
            continue

        graph.add_node(_node_for_side(link, "a"))
        graph.add_node(_node_for_side(link, "z"))
        graph.add_edge(
            GraphEdge(
                id=link.link_pk,
                source=link.device_a_code,
                target=link.device_z_code,
                weight=calculate_edge_weight(link, strategy),
                latency_us=link_latency_us(link),
                bandwidth_gbps=link.bandwidth_gbps,
                health_status=link.health_status,
                bidirectional=True,
            )
        )

    if dropped:
        logger.info("Excluded %d inactive links from graph", dropped)
    logger.debug(
        "Built %s graph: %d nodes, %d edges",
        strategy.value,
        graph.node_count,
        graph.edge_count,
    )
    return graph
