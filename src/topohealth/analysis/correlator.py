"""Link correlation and classification.

This is the core of the platform. For every declared link it joins:
1. Expected delay and capacity from the serviceability snapshot
2. Measured latency distribution from the telemetry snapshot
3. IGP metric from the IS-IS database, via the link's /31 tunnel subnet

and classifies each link's health and data completeness. Links whose
code is malformed or whose endpoints cannot be located are skipped
and logged, never raised.
"""

from datetime import datetime, timezone
from typing import Any

from topohealth.analysis.bandwidth_stats import calculate_bandwidth_stats
from topohealth.analysis.isis import IsisIndex, build_isis_index, lookup_metric
from topohealth.analysis.statistics import LatencyDistribution
from topohealth.logging import get_logger
from topohealth.model.addressing import slash31_addresses
from topohealth.model.documents import IsisDocument, LinkRecord, SnapshotDocument
from topohealth.model.loader import DocumentLoader
from topohealth.model.topology import (
    DataCompleteness,
    HealthStatus,
    Link,
    TopologyResult,
    TopologySummary,
)
from topohealth.parsers.bandwidth import bandwidth_tier, format_bandwidth, parse_to_gbps
from topohealth.parsers.locations import DeviceLocation, build_device_location_map, build_locations

logger = get_logger(__name__)

DEFAULT_DRIFT_THRESHOLD_PCT = 10.0


def classify_health(
    has_telemetry: bool,
    has_isis: bool,
    drift_pct: float | None,
    drift_threshold_pct: float = DEFAULT_DRIFT_THRESHOLD_PCT,
) -> HealthStatus:
    """Classify link health; first match wins.

    Missing telemetry dominates missing IS-IS, so a link lacking both
    is MISSING_TELEMETRY.
    """
    if not has_telemetry:
        return HealthStatus.MISSING_TELEMETRY
    if not has_isis:
        return HealthStatus.MISSING_ISIS
    if drift_pct is not None and drift_pct >= drift_threshold_pct:
        return HealthStatus.DRIFT_HIGH
    return HealthStatus.HEALTHY


def classify_data_completeness(has_telemetry: bool, has_isis: bool) -> DataCompleteness:
    """Classify which data sources contributed to a link.

    Serviceability is always present for a surviving link.
    """
    if has_telemetry and has_isis:
        return DataCompleteness.COMPLETE
    if has_telemetry:
        return DataCompleteness.MISSING_ISIS
    if has_isis:
        return DataCompleteness.MISSING_TELEMETRY
    return DataCompleteness.MISSING_BOTH


def calculate_drift_pct(measured_p50_us: float | None, expected_delay_us: float | None) -> float | None:
    """Percentage deviation of measured p50 from declared delay."""
    if measured_p50_us is None or expected_delay_us is None or expected_delay_us <= 0:
        return None
    return abs(measured_p50_us - expected_delay_us) / expected_delay_us * 100


def split_link_code(code: str | None) -> tuple[str, str] | None:
    """Split ``"<deviceA>:<deviceZ>"`` into both device codes.

    Returns None unless the code has exactly two non-empty parts.
    """
    if not code:
        return None
    parts = code.split(":")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        return None
    return parts[0], parts[1]


class LinkCorrelator:
    """Reconciles the three data sources into per-link records.

    Example:
        correlator = LinkCorrelator()
        result = correlator.correlate(snapshot, isis)
        print(result.summary.healthy, "of", result.summary.total_links)
    """

    def __init__(self, drift_threshold_pct: float = DEFAULT_DRIFT_THRESHOLD_PCT):
        self.drift_threshold_pct = drift_threshold_pct

    def correlate(self, snapshot: SnapshotDocument, isis: IsisDocument) -> TopologyResult:
        """Run a full correlation pass.

        Args:
            snapshot: Decoded serviceability and telemetry documents
            isis: Decoded IS-IS database

        Returns:
            TopologyResult with links, locations, summary and bandwidth stats
        """
        serviceability = snapshot.serviceability
        isis_index = build_isis_index(isis)
        device_map = build_device_location_map(serviceability)
        samples_by_link = snapshot.telemetry.samples_by_link()

        links: list[Link] = []
        for link_pk, record in serviceability.links.items():
            link = self._correlate_link(link_pk, record, device_map, samples_by_link, isis_index)
            if link is not None:
                links.append(link)

        skipped = len(serviceability.links) - len(links)
        if skipped:
            logger.warning("Skipped %d of %d links", skipped, len(serviceability.links))

        summary = self.summarize(links)
        logger.info(
            "Correlated %d links: %d healthy, %d drift high, %d missing telemetry, %d missing IS-IS",
            summary.total_links,
            summary.healthy,
            summary.drift_high,
            summary.missing_telemetry,
            summary.missing_isis,
        )

        return TopologyResult(
            topology=links,
            locations=build_locations(serviceability, device_map),
            summary=summary,
            bandwidth_stats=calculate_bandwidth_stats(links),
            processed_at=datetime.now(timezone.utc).isoformat(),
        )

    def _correlate_link(
        self,
        link_pk: str,
        record: LinkRecord,
        device_map: dict[str, DeviceLocation],
        samples_by_link: dict[str, list[float]],
        isis_index: IsisIndex,
    ) -> Link | None:
        if not record.code:
            logger.warning("Skipping link %s: missing link code", link_pk)
            return None

        devices = split_link_code(record.code)
        if devices is None:
            logger.warning("Skipping link %s: invalid link code format: %s", link_pk, record.code)
            return None
        device_a, device_z = devices

        side_a = device_map.get(device_a)
        side_z = device_map.get(device_z)
        if side_a is None or side_z is None:
            logger.warning("Skipping link %s: missing device coordinates", record.code)
            return None

        delay_ns = record.delay_ns
        expected_delay_us = delay_ns / 1000 if delay_ns is not None else None

        distribution = LatencyDistribution(samples_by_link.get(link_pk, []))
        measured_p50 = distribution.p50

        isis_metric = lookup_metric(isis_index, slash31_addresses(record.tunnel_net))

        drift_pct = calculate_drift_pct(measured_p50, expected_delay_us)

        bandwidth_gbps = parse_to_gbps(record.bandwidth)

        has_telemetry = measured_p50 is not None
        has_isis = isis_metric is not None

        return Link(
            link_pk=link_pk,
            link_code=record.code,
            device_a_code=device_a,
            device_z_code=device_z,
            device_a_lat=side_a.lat,
            device_a_lon=side_a.lon,
            device_a_location_name=side_a.location_name,
            device_a_location_code=side_a.location_code,
            device_a_country=side_a.country,
            device_z_lat=side_z.lat,
            device_z_lon=side_z.lon,
            device_z_location_name=side_z.location_name,
            device_z_location_code=side_z.location_code,
            device_z_country=side_z.country,
            side_a_iface_name=record.side_a_iface_name,
            side_b_iface_name=record.side_z_iface_name,
            expected_delay_ns=delay_ns,
            expected_delay_us=expected_delay_us,
            bandwidth_bps=record.bandwidth,
            bandwidth_gbps=bandwidth_gbps,
            bandwidth_label=format_bandwidth(bandwidth_gbps),
            bandwidth_tier=bandwidth_tier(bandwidth_gbps),
            measured_p50_us=measured_p50,
            measured_p90_us=distribution.p90,
            measured_p95_us=distribution.p95,
            measured_p99_us=distribution.p99,
            telemetry_sample_count=distribution.count,
            isis_metric=isis_metric,
            isis_interface_name=record.tunnel_net,
            drift_pct=drift_pct,
            health_status=classify_health(
                has_telemetry, has_isis, drift_pct, self.drift_threshold_pct
            ),
            data_status=classify_data_completeness(has_telemetry, has_isis),
            has_serviceability=True,
            has_telemetry=has_telemetry,
            has_isis=has_isis,
        )

    @staticmethod
    def summarize(links: list[Link]) -> TopologySummary:
        """Count links per health status."""
        counts = {status: 0 for status in HealthStatus}
        for link in links:
            counts[link.health_status] += 1
        return TopologySummary(
            total_links=len(links),
            healthy=counts[HealthStatus.HEALTHY],
            drift_high=counts[HealthStatus.DRIFT_HIGH],
            missing_telemetry=counts[HealthStatus.MISSING_TELEMETRY],
            missing_isis=counts[HealthStatus.MISSING_ISIS],
        )


def process_topology(
    snapshot_data: dict[str, Any],
    isis_data: dict[str, Any],
    drift_threshold_pct: float = DEFAULT_DRIFT_THRESHOLD_PCT,
) -> TopologyResult:
    """Correlate already-parsed JSON trees.

    Raises:
        DocumentValidationError: If a tree cannot be decoded
    """
    loader = DocumentLoader()
    snapshot = loader.decode_snapshot(snapshot_data)
    isis = loader.decode_isis(isis_data)
    return LinkCorrelator(drift_threshold_pct).correlate(snapshot, isis)
