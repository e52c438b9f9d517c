"""Input value parsers."""

from topohealth.parsers.bandwidth import (
    arc_width,
    bandwidth_tier,
    format_bandwidth,
    parse_to_gbps,
    tier_label,
)
from topohealth.parsers.locations import (
    DeviceLocation,
    build_device_location_map,
    build_location_coordinate_map,
    build_locations,
    parse_locations,
)

__all__ = [
    "DeviceLocation",
    "arc_width",
    "bandwidth_tier",
    "build_device_location_map",
    "build_location_coordinate_map",
    "build_locations",
    "format_bandwidth",
    "parse_locations",
    "parse_to_gbps",
    "tier_label",
]
