"""Bandwidth statistics over correlated links."""

from collections.abc import Iterable, Sequence

from topohealth.model.topology import BandwidthStats, BandwidthTier, Link
from topohealth.parsers.bandwidth import bandwidth_tier


def calculate_bandwidth_stats(links: Iterable[Link]) -> BandwidthStats:
    """Calculate total capacity, average bandwidth and tier distribution.

    Links with unknown bandwidth are excluded from every figure. The
    distribution only contains tiers that occur.

    Example:
        stats = calculate_bandwidth_stats(result.topology)
        stats.distribution  # {10: 69, 50: 1, 100: 17, 200: 1}
    """
    distribution: dict[int, int] = {}
    total_capacity = 0.0
    valid_count = 0

    for link in links:
        gbps = link.bandwidth_gbps
        if gbps is None:
            continue

        total_capacity += gbps
        valid_count += 1

        tier = bandwidth_tier(gbps)
        if tier == BandwidthTier.UNKNOWN:
            continue
        distribution[int(tier)] = distribution.get(int(tier), 0) + 1

    average = total_capacity / valid_count if valid_count > 0 else 0

    return BandwidthStats(
        total_capacity_gbps=total_capacity,
        average_bandwidth_gbps=average,
        distribution=distribution,
        links_by_tier=dict(distribution),
    )


def links_by_tier(links: Iterable[Link], tier: BandwidthTier | int) -> list[Link]:
    """Links whose bandwidth falls in the given tier."""
    return [link for link in links if bandwidth_tier(link.bandwidth_gbps) == tier]


def links_by_tiers(links: Iterable[Link], tiers: Sequence[BandwidthTier | int]) -> list[Link]:
    """Links whose bandwidth falls in any of the given tiers."""
    wanted = {int(t) for t in tiers}
    return [link for link in links if int(bandwidth_tier(link.bandwidth_gbps)) in wanted]
