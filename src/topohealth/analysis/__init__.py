"""Correlation, classification and statistics."""

from topohealth.analysis.bandwidth_stats import calculate_bandwidth_stats, links_by_tier, links_by_tiers
from topohealth.analysis.correlator import (
    LinkCorrelator,
    classify_data_completeness,
    classify_health,
    process_topology,
)
from topohealth.analysis.filters import FilterCriteria, filter_links, filter_stats, matches
from topohealth.analysis.isis import IsisAdjacency, build_isis_index, lookup_metric
from topohealth.analysis.statistics import LatencyDistribution, median, percentile

__all__ = [
    "FilterCriteria",
    "IsisAdjacency",
    "LatencyDistribution",
    "LinkCorrelator",
    "build_isis_index",
    "calculate_bandwidth_stats",
    "classify_data_completeness",
    "classify_health",
    "filter_links",
    "filter_stats",
    "links_by_tier",
    "links_by_tiers",
    "lookup_metric",
    "matches",
    "median",
    "percentile",
    "process_topology",
]
