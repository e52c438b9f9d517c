"""Data model components."""

from topohealth.model.addressing import slash31_addresses
from topohealth.model.documents import (
    IsisDocument,
    ServiceabilityDocument,
    SnapshotDocument,
    TelemetryDocument,
)
from topohealth.model.loader import DocumentLoader, load_documents
from topohealth.model.topology import (
    BandwidthStats,
    BandwidthTier,
    DataCompleteness,
    HealthStatus,
    Link,
    Location,
    TopologyResult,
    TopologySummary,
)

__all__ = [
    "BandwidthStats",
    "BandwidthTier",
    "DataCompleteness",
    "DocumentLoader",
    "HealthStatus",
    "IsisDocument",
    "Link",
    "Location",
    "ServiceabilityDocument",
    "SnapshotDocument",
    "TelemetryDocument",
    "TopologyResult",
    "TopologySummary",
    "load_documents",
    "slash31_addresses",
]
