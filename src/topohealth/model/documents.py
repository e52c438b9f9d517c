"""Input document models.

Explicit optional-field models for the three source documents:
- Serviceability snapshot (locations, devices, links)
- Telemetry snapshot (latency samples per link)
- IS-IS link-state database (adjacency metrics)

Documents are decoded once at the boundary. Missing or null fields
decode to None or an empty container so that the correlator can apply
its skip-on-missing-data policy without null-chaining.
"""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _empty_if_none(factory):
    def coerce(cls, v: Any) -> Any:
        return factory() if v is None else v

    return coerce


def _optional_str(cls, v: Any) -> str | None:
    if v is None or isinstance(v, str):
        return v
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return None


def _optional_number(cls, v: Any) -> float | int | None:
    if isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        return v
    if isinstance(v, str):
        try:
            return float(v)
        except ValueError:
            return None
    return None


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


# Serviceability


class LocationRecord(_Record):
    """A location entry keyed by primary key in the serviceability snapshot."""

    code: str | None = None
    name: str | None = None
    lat: float | None = None
    lng: float | None = None
    country: str | None = None

    coerce_strings = field_validator("code", "name", "country", mode="before")(_optional_str)
    coerce_coords = field_validator("lat", "lng", mode="before")(_optional_number)

    @property
    def has_valid_coordinates(self) -> bool:
        """True when both coordinates are present, finite and in range."""
        if self.lat is None or self.lng is None:
            return False
        if math.isnan(self.lat) or math.isnan(self.lng):
            return False
        return -90 <= self.lat <= 90 and -180 <= self.lng <= 180


class DeviceRecord(_Record):
    """A device entry; belongs to exactly one location."""

    code: str | None = None
    location_pk: str | None = None

    coerce_strings = field_validator("code", "location_pk", mode="before")(_optional_str)


class LinkRecord(_Record):
    """A declared link between two devices."""

    code: str | None = None
    delay_ns: int | float | None = None
    bandwidth: int | float | str | None = None
    tunnel_net: str | None = None
    side_a_iface_name: str | None = None
    side_z_iface_name: str | None = None

    coerce_strings = field_validator(
        "code", "tunnel_net", "side_a_iface_name", "side_z_iface_name", mode="before"
    )(_optional_str)
    coerce_delay = field_validator("delay_ns", mode="before")(_optional_number)

    @field_validator("bandwidth", mode="before")
    @classmethod
    def validate_bandwidth(cls, v: Any) -> Any:
        if isinstance(v, bool):
            return None
        if isinstance(v, (int, float, str)):
            return v
        return None


class ServiceabilityDocument(_Record):
    """Serviceability snapshot: declared topology and capacities."""

    locations: dict[str, LocationRecord] = Field(default_factory=dict)
    devices: dict[str, DeviceRecord] = Field(default_factory=dict)
    links: dict[str, LinkRecord] = Field(default_factory=dict)

    coerce_containers = field_validator("locations", "devices", "links", mode="before")(
        _empty_if_none(dict)
    )


# Telemetry


class TelemetrySample(_Record):
    """Latency samples measured for one link."""

    link_pk: str | None = None
    samples: list[float] | None = None

    coerce_link = field_validator("link_pk", mode="before")(_optional_str)

    @field_validator("samples", mode="before")
    @classmethod
    def validate_samples(cls, v: Any) -> Any:
        return v if isinstance(v, list) else None


class TelemetryDocument(_Record):
    """Telemetry snapshot: measured round-trip latency per link."""

    device_latency_samples: list[TelemetrySample] = Field(default_factory=list)

    coerce_containers = field_validator("device_latency_samples", mode="before")(
        _empty_if_none(list)
    )

    def samples_by_link(self) -> dict[str, list[float]]:
        """Index samples by link primary key; later entries win."""
        by_link: dict[str, list[float]] = {}
        for entry in self.device_latency_samples:
            if entry.link_pk and entry.samples is not None:
                by_link[entry.link_pk] = list(entry.samples)
        return by_link


class SnapshotDocument(_Record):
    """Serviceability and telemetry as shipped together by the exporter."""

    serviceability: ServiceabilityDocument = Field(default_factory=ServiceabilityDocument)
    telemetry: TelemetryDocument = Field(default_factory=TelemetryDocument)

    @classmethod
    def from_raw(cls, data: dict[str, Any]) -> "SnapshotDocument":
        """Decode a snapshot tree.

        Accepts the exporter envelope
        ``{"fetch_data": {"dz_serviceability": ..., "dz_telemetry": ...}}``
        or a flat document carrying ``links``/``devices``/``locations`` and
        ``device_latency_samples`` at the top level.
        """
        if "fetch_data" in data:
            fetch_data = data.get("fetch_data") or {}
            serviceability = fetch_data.get("dz_serviceability") or {}
            telemetry = fetch_data.get("dz_telemetry") or {}
        else:
            serviceability = data
            telemetry = data
        return cls(
            serviceability=ServiceabilityDocument.model_validate(serviceability),
            telemetry=TelemetryDocument.model_validate(telemetry),
        )


# IS-IS link-state database


class IsisAdjacencyAddress(_Record):
    adj_interface_address: str | None = Field(default=None, alias="adjInterfaceAddress")

    coerce_address = field_validator("adj_interface_address", mode="before")(_optional_str)


class IsisNeighbor(_Record):
    """A neighbor advertised in an LSP, with its metric and interface addresses."""

    system_id: str | None = Field(default=None, alias="systemId")
    metric: int | float | None = None
    adj_interface_addresses: list[IsisAdjacencyAddress] = Field(
        default_factory=list, alias="adjInterfaceAddresses"
    )

    coerce_system = field_validator("system_id", mode="before")(_optional_str)
    coerce_metric = field_validator("metric", mode="before")(_optional_number)
    coerce_addresses = field_validator("adj_interface_addresses", mode="before")(
        _empty_if_none(list)
    )


class IsisLsp(_Record):
    neighbors: list[IsisNeighbor] = Field(default_factory=list)

    coerce_neighbors = field_validator("neighbors", mode="before")(_empty_if_none(list))


class IsisLevel(_Record):
    lsps: dict[str, IsisLsp] = Field(default_factory=dict)

    coerce_lsps = field_validator("lsps", mode="before")(_empty_if_none(dict))


class IsisInstance(_Record):
    level: dict[str, IsisLevel] = Field(default_factory=dict)

    coerce_level = field_validator("level", mode="before")(_empty_if_none(dict))


class IsisVrf(_Record):
    isis_instances: dict[str, IsisInstance] = Field(
        default_factory=dict, alias="isisInstances"
    )

    coerce_instances = field_validator("isis_instances", mode="before")(_empty_if_none(dict))


class IsisDocument(_Record):
    """IS-IS database as exported from the routers."""

    vrfs: dict[str, IsisVrf] = Field(default_factory=dict)

    coerce_vrfs = field_validator("vrfs", mode="before")(_empty_if_none(dict))

    def lsps(
        self, vrf: str = "default", instance: str = "1", level: str = "2"
    ) -> dict[str, IsisLsp]:
        """Return the LSPs for one VRF/instance/level, or {} if any part is absent."""
        vrf_data = self.vrfs.get(vrf)
        if vrf_data is None:
            return {}
        instance_data = vrf_data.isis_instances.get(instance)
        if instance_data is None:
            return {}
        level_data = instance_data.level.get(level)
        if level_data is None:
            return {}
        return level_data.lsps
