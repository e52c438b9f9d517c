"""Location resolution from the serviceability snapshot.

Builds the device -> location lookup used by the correlator and the
location list returned to renderers. Locations with missing or
out-of-range coordinates are dropped, and so are the devices at them.
"""

from dataclasses import dataclass

from topohealth.logging import get_logger
from topohealth.model.documents import ServiceabilityDocument
from topohealth.model.topology import Location

logger = get_logger(__name__)


@dataclass(frozen=True)
class DeviceLocation:
    """Resolved location data for one device."""

    location_pk: str
    location_code: str
    location_name: str
    lat: float
    lon: float
    country: str


def parse_locations(document: ServiceabilityDocument) -> list[Location]:
    """Parse locations with valid coordinates.

    Device membership is not filled in; see build_locations.
    """
    locations: list[Location] = []

    for location_pk, record in document.locations.items():
        if record.lat is None or record.lng is None:
            logger.warning("Skipping location %s: invalid coordinates", location_pk)
            continue
        if not record.has_valid_coordinates:
            logger.warning(
                "Skipping location %s: out of range coordinates (lat=%s, lng=%s)",
                location_pk,
                record.lat,
                record.lng,
            )
            continue

        locations.append(
            Location(
                location_pk=location_pk,
                code=record.code or location_pk,
                name=record.name or "Unknown",
                lat=record.lat,
                lon=record.lng,
                country=record.country,
            )
        )

    return locations


def build_device_location_map(document: ServiceabilityDocument) -> dict[str, DeviceLocation]:
    """Map device code to its resolved location.

    Devices without a code, without a known location, or at a location
    with invalid coordinates are left out.
    """
    device_map: dict[str, DeviceLocation] = {}

    for device_pk, device in document.devices.items():
        if not device.code:
            logger.debug("Ignoring device %s: missing code", device_pk)
            continue

        location = document.locations.get(device.location_pk) if device.location_pk else None
        if location is None or not location.has_valid_coordinates:
            logger.debug("Device %s has no usable location", device.code)
            continue

        device_map[device.code] = DeviceLocation(
            location_pk=device.location_pk,
            location_code=location.code or device.location_pk,
            location_name=location.name or "Unknown",
            lat=location.lat,
            lon=location.lng,
            country=location.country or "",
        )

    return device_map


def build_locations(
    document: ServiceabilityDocument,
    device_map: dict[str, DeviceLocation] | None = None,
) -> list[Location]:
    """Build the location list with device membership."""
    if device_map is None:
        device_map = build_device_location_map(document)

    devices_by_location: dict[str, list[str]] = {}
    for device_code, info in device_map.items():
        members = devices_by_location.setdefault(info.location_pk, [])
        if device_code not in members:
            members.append(device_code)

    locations = []
    for location in parse_locations(document):
        devices = devices_by_location.get(location.location_pk, [])
        locations.append(
            location.model_copy(update={"devices": devices, "device_count": len(devices)})
        )
    return locations


def build_location_coordinate_map(locations: list[Location]) -> dict[str, tuple[float, float]]:
    """Map location primary key to (lon, lat) for map renderers."""
    return {location.location_pk: (location.lon, location.lat) for location in locations}
