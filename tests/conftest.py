"""Shared fixtures: a small four-site WAN and a link factory.

Topology (device codes):

    ams-dz1 --(100G, healthy)-- fra-dz1 --(10G, drift high)-- lon-dz1
       |                                                        |
       +------(unknown bw, no IS-IS)------ nyc-dz1 --(200G, no telemetry)--+

Plus three links that correlation must skip: one to a device at a
location without coordinates, one with a malformed code and one with
no code.
"""

import json
from pathlib import Path
from typing import Any

import pytest

from topohealth.model.topology import DataCompleteness, HealthStatus, Link
from topohealth.parsers.bandwidth import bandwidth_tier, format_bandwidth


def sample_serviceability() -> dict[str, Any]:
    return {
        "locations": {
            "loc-ams": {"code": "ams", "name": "Amsterdam", "lat": 52.37, "lng": 4.90, "country": "NL"},
            "loc-fra": {"code": "fra", "name": "Frankfurt", "lat": 50.11, "lng": 8.68, "country": "DE"},
            "loc-lon": {"code": "lon", "name": "London", "lat": 51.51, "lng": -0.13, "country": "GB"},
            "loc-nyc": {"code": "nyc", "name": "New York", "lat": 40.71, "lng": -74.01, "country": "US"},
            "loc-bad": {"code": "bad", "name": "Nowhere", "lat": None, "lng": 10.0},
        },
        "devices": {
            "dev-ams": {"code": "ams-dz1", "location_pk": "loc-ams"},
            "dev-fra": {"code": "fra-dz1", "location_pk": "loc-fra"},
            "dev-lon": {"code": "lon-dz1", "location_pk": "loc-lon"},
            "dev-nyc": {"code": "nyc-dz1", "location_pk": "loc-nyc"},
            "dev-bad": {"code": "bad-dz1", "location_pk": "loc-bad"},
        },
        "links": {
            "link-1": {
                "code": "ams-dz1:fra-dz1",
                "delay_ns": 5_000_000,
                "bandwidth": 100_000_000_000,
                "tunnel_net": "172.16.0.0/31",
                "side_a_iface_name": "Ethernet1",
                "side_z_iface_name": "Ethernet2",
            },
            "link-2": {
                "code": "fra-dz1:lon-dz1",
                "delay_ns": 8_000_000,
                "bandwidth": "10G",
                "tunnel_net": "172.16.0.2/31",
            },
            "link-3": {
                "code": "lon-dz1:nyc-dz1",
                "delay_ns": 35_000_000,
                "bandwidth": 200_000_000_000,
                "tunnel_net": "172.16.0.4/31",
            },
            "link-4": {
                "code": "ams-dz1:nyc-dz1",
                "delay_ns": 40_000_000,
                "bandwidth": None,
                "tunnel_net": "172.16.0.6/31",
            },
            "link-5": {
                "code": "bad-dz1:ams-dz1",
                "delay_ns": 1_000_000,
                "bandwidth": 10_000_000_000,
                "tunnel_net": "172.16.0.8/31",
            },
            "link-6": {"code": "malformed", "delay_ns": 1_000_000},
            "link-7": {"code": None, "delay_ns": 1_000_000},
        },
    }


def sample_telemetry() -> dict[str, Any]:
    return {
        "device_latency_samples": [
            {"link_pk": "link-1", "samples": [5200.0, 5000.0, 5100.0]},
            {"link_pk": "link-2", "samples": [10000.0, 10000.0, 10000.0]},
            {"link_pk": "link-4", "samples": [40100.0, 40000.0]},
        ]
    }


def sample_snapshot() -> dict[str, Any]:
    return {
        "fetch_data": {
            "dz_serviceability": sample_serviceability(),
            "dz_telemetry": sample_telemetry(),
        }
    }


def sample_isis() -> dict[str, Any]:
    return {
        "vrfs": {
            "default": {
                "isisInstances": {
                    "1": {
                        "level": {
                            "2": {
                                "lsps": {
                                    "ams-dz1.00-00": {
                                        "neighbors": [
                                            {
                                                "systemId": "fra-dz1",
                                                "metric": 10,
                                                "adjInterfaceAddresses": [
                                                    {"adjInterfaceAddress": "172.16.0.1"}
                                                ],
                                            }
                                        ]
                                    },
                                    "fra-dz1.00-00": {
                                        "neighbors": [
                                            {
                                                "systemId": "lon-dz1",
                                                "metric": 20,
                                                "adjInterfaceAddresses": [
                                                    {"adjInterfaceAddress": "172.16.0.2"}
                                                ],
                                            }
                                        ]
                                    },
                                    "nyc-dz1.00-00": {
                                        "neighbors": [
                                            {
                                                "systemId": "lon-dz1",
                                                "metric": 300,
                                                "adjInterfaceAddresses": [
                                                    {"adjInterfaceAddress": "172.16.0.5"}
                                                ],
                                            }
                                        ]
                                    },
                                }
                            }
                        }
                    }
                }
            }
        }
    }


@pytest.fixture
def snapshot_data() -> dict[str, Any]:
    return sample_snapshot()


@pytest.fixture
def isis_data() -> dict[str, Any]:
    return sample_isis()


@pytest.fixture
def data_files(tmp_path: Path) -> tuple[Path, Path]:
    """Sample documents written to disk."""
    snapshot_file = tmp_path / "snapshot.json"
    isis_file = tmp_path / "isis-db.json"
    snapshot_file.write_text(json.dumps(sample_snapshot()))
    isis_file.write_text(json.dumps(sample_isis()))
    return snapshot_file, isis_file


@pytest.fixture
def make_link():
    """Factory for correlated links with only the graph-relevant fields varying."""

    def _make(
        link_pk: str,
        device_a: str,
        device_z: str,
        p95_us: float | None = None,
        expected_delay_us: float | None = None,
        bandwidth_gbps: float | None = None,
        isis_metric: int | None = None,
        health_status: HealthStatus = HealthStatus.HEALTHY,
    ) -> Link:
        return Link(
            link_pk=link_pk,
            link_code=f"{device_a}:{device_z}",
            device_a_code=device_a,
            device_z_code=device_z,
            device_a_lat=0.0,
            device_a_lon=0.0,
            device_a_location_name=f"{device_a} site",
            device_a_location_code=device_a.lower(),
            device_a_country="",
            device_z_lat=1.0,
            device_z_lon=1.0,
            device_z_location_name=f"{device_z} site",
            device_z_location_code=device_z.lower(),
            device_z_country="",
            expected_delay_us=expected_delay_us,
            bandwidth_gbps=bandwidth_gbps,
            bandwidth_label=format_bandwidth(bandwidth_gbps),
            bandwidth_tier=bandwidth_tier(bandwidth_gbps),
            measured_p50_us=p95_us,
            measured_p95_us=p95_us,
            isis_metric=isis_metric,
            health_status=health_status,
            data_status=DataCompleteness.COMPLETE,
            has_telemetry=p95_us is not None,
            has_isis=isis_metric is not None,
        )

    return _make
