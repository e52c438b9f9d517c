"""Bandwidth parsing utilities.

Parses, formats and categorizes link capacity values. Inputs are
either numeric bits per second or free-form strings such as "100G",
"100GE", "100 Gbps" or "1000 Mbps".
"""

import re

from topohealth.model.topology import BandwidthTier

# Gbps units are tried before Mbps units
_GBPS_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*g(?:bps|e)?", re.IGNORECASE)
_MBPS_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*m(?:bps)?", re.IGNORECASE)

_TIER_LABELS: dict[BandwidthTier, str] = {
    BandwidthTier.UNKNOWN: "Unknown",
    BandwidthTier.TIER_10: "< 50 Gbps",
    BandwidthTier.TIER_50: "50-100 Gbps",
    BandwidthTier.TIER_100: "100-200 Gbps",
    BandwidthTier.TIER_200: "200+ Gbps",
}

_ARC_WIDTHS: dict[BandwidthTier, int] = {
    BandwidthTier.UNKNOWN: 3,
    BandwidthTier.TIER_10: 3,
    BandwidthTier.TIER_50: 5,
    BandwidthTier.TIER_100: 8,
    BandwidthTier.TIER_200: 10,
}


def parse_to_gbps(value: int | float | str | None) -> float | None:
    """Parse a bandwidth value to Gbps.

    Args:
        value: Numeric bits per second, a unit-suffixed string, or None

    Returns:
        Bandwidth in Gbps, or None if missing or unrecognized

    Example:
        >>> parse_to_gbps(10_000_000_000)
        10.0
        >>> parse_to_gbps("100GE")
        100.0
        >>> parse_to_gbps("1000 Mbps")
        1.0
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        return value / 1_000_000_000

    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    match = _GBPS_PATTERN.search(text)
    if match:
        return float(match.group(1))

    match = _MBPS_PATTERN.search(text)
    if match:
        return float(match.group(1)) / 1000

    return None


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_bandwidth(gbps: float | None) -> str:
    """Format bandwidth for display.

    Values of 1 Gbps and above render as Gbps, smaller values as Mbps.

    Example:
        >>> format_bandwidth(100)
        '100 Gbps'
        >>> format_bandwidth(0.5)
        '500 Mbps'
    """
    if gbps is None:
        return "Unknown"
    if gbps >= 1:
        return f"{_format_number(gbps)} Gbps"
    return f"{_format_number(gbps * 1000)} Mbps"


def bandwidth_tier(gbps: float | None) -> BandwidthTier:
    """Get the bandwidth tier for grouping and filtering.

    Each bucket includes its lower edge: 50 maps to the 50 tier.
    Zero is a known value and maps to the 10 tier; None maps to 0.
    """
    if gbps is None:
        return BandwidthTier.UNKNOWN
    if gbps < 50:
        return BandwidthTier.TIER_10
    if gbps < 100:
        return BandwidthTier.TIER_50
    if gbps < 200:
        return BandwidthTier.TIER_100
    return BandwidthTier.TIER_200


def tier_label(tier: BandwidthTier | int) -> str:
    """Human-readable label for a bandwidth tier."""
    return _TIER_LABELS[BandwidthTier(tier)]


def arc_width(gbps: float | None) -> int:
    """Map arc width in pixels for a link of the given bandwidth."""
    return _ARC_WIDTHS[bandwidth_tier(gbps)]
