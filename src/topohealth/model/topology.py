"""Reconciled topology data models.

Pydantic models for the output of a correlation pass:
- Links (one per declared link, with derived health data)
- Locations (sites with valid coordinates and their devices)
- Summary counts and fleet-wide bandwidth statistics

Field names and enum values are a wire contract consumed by
external renderers.
"""

from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, Field


class HealthStatus(str, Enum):
    """Link health, evaluated telemetry-first."""

    HEALTHY = "HEALTHY"
    DRIFT_HIGH = "DRIFT_HIGH"
    MISSING_TELEMETRY = "MISSING_TELEMETRY"
    MISSING_ISIS = "MISSING_ISIS"


class DataCompleteness(str, Enum):
    """Which data sources contributed to a link record."""

    COMPLETE = "COMPLETE"
    MISSING_ISIS = "MISSING_ISIS"
    MISSING_TELEMETRY = "MISSING_TELEMETRY"
    MISSING_BOTH = "MISSING_BOTH"


class BandwidthTier(IntEnum):
    """Discretized bandwidth bucket in Gbps; 0 means unknown."""

    UNKNOWN = 0
    TIER_10 = 10
    TIER_50 = 50
    TIER_100 = 100
    TIER_200 = 200


class Location(BaseModel):
    """A site with valid coordinates and the devices situated there."""

    location_pk: str = Field(..., description="Location primary key")
    code: str = Field(..., description="Location code")
    name: str = Field(..., description="Display name")
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)
    country: str | None = Field(default=None)
    device_count: int = Field(default=0, ge=0)
    devices: list[str] = Field(default_factory=list, description="Device codes")


class Link(BaseModel):
    """A reconciled link record.

    Fully derived from the input documents on every correlation pass
    and never mutated after construction.
    """

    model_config = ConfigDict(frozen=True)

    link_pk: str
    link_code: str = Field(..., description="'<deviceA>:<deviceZ>'")
    device_a_code: str
    device_z_code: str

    device_a_lat: float
    device_a_lon: float
    device_a_location_name: str
    device_a_location_code: str
    device_a_country: str
    device_z_lat: float
    device_z_lon: float
    device_z_location_name: str
    device_z_location_code: str
    device_z_country: str

    side_a_iface_name: str | None = None
    side_b_iface_name: str | None = None

    expected_delay_ns: float | None = None
    expected_delay_us: float | None = None

    bandwidth_bps: int | float | str | None = None
    bandwidth_gbps: float | None = None
    bandwidth_label: str = "Unknown"
    bandwidth_tier: BandwidthTier = BandwidthTier.UNKNOWN

    measured_p50_us: float | None = None
    measured_p90_us: float | None = None
    measured_p95_us: float | None = None
    measured_p99_us: float | None = None
    telemetry_sample_count: int = Field(default=0, ge=0)

    isis_metric: int | float | None = None
    isis_interface_name: str | None = Field(
        default=None, description="Tunnel subnet used to resolve the IS-IS metric"
    )

    drift_pct: float | None = None
    health_status: HealthStatus
    data_status: DataCompleteness

    has_serviceability: bool = True
    has_telemetry: bool = False
    has_isis: bool = False

    @property
    def endpoints(self) -> tuple[str, str]:
        """Device codes of both sides."""
        return self.device_a_code, self.device_z_code


class TopologySummary(BaseModel):
    """Health status counts over all surviving links."""

    total_links: int = 0
    healthy: int = 0
    drift_high: int = 0
    missing_telemetry: int = 0
    missing_isis: int = 0


class BandwidthStats(BaseModel):
    """Fleet-wide capacity statistics.

    ``distribution`` is sparse: tiers with no links are omitted.
    ``links_by_tier`` carries the same counts for older consumers.
    """

    total_capacity_gbps: float = 0
    average_bandwidth_gbps: float = 0
    distribution: dict[int, int] = Field(default_factory=dict)
    links_by_tier: dict[int, int] = Field(default_factory=dict)


class TopologyResult(BaseModel):
    """Complete output of one correlation pass."""

    topology: list[Link] = Field(default_factory=list)
    locations: list[Location] = Field(default_factory=list)
    summary: TopologySummary = Field(default_factory=TopologySummary)
    bandwidth_stats: BandwidthStats = Field(default_factory=BandwidthStats)
    processed_at: str = Field(..., description="ISO-8601 processing timestamp")

    @property
    def link_count(self) -> int:
        return len(self.topology)

    @property
    def device_codes(self) -> set[str]:
        """Codes of every device referenced by a surviving link."""
        codes: set[str] = set()
        for link in self.topology:
            codes.update(link.endpoints)
        return codes
