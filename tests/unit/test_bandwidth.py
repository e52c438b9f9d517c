"""Unit tests for bandwidth parsing, formatting and tiers."""

import pytest

from topohealth.model.topology import BandwidthTier
from topohealth.parsers.bandwidth import arc_width, bandwidth_tier, format_bandwidth, parse_to_gbps, tier_label


class TestParseToGbps:
    """Tests for parse_to_gbps."""

    def test_numeric_bits_per_second(self):
        """Test that numbers are treated as bits per second."""
        assert parse_to_gbps(10_000_000_000) == 10
        assert parse_to_gbps(1_500_000_000.0) == 1.5

    @pytest.mark.parametrize("value", ["100G", "100GE", "100 Gbps", "100Gbps", "100g", "100 gbps"])
    def test_gbps_strings(self, value):
        """Test Gbps unit spellings, case-insensitively."""
        assert parse_to_gbps(value) == 100

    def test_mbps_strings(self):
        """Test that Mbps values are converted to Gbps."""
        assert parse_to_gbps("1000M") == 1
        assert parse_to_gbps("500 Mbps") == 0.5

    def test_decimal_value(self):
        """Test fractional Gbps values."""
        assert parse_to_gbps("2.5G") == 2.5

    def test_surrounding_whitespace(self):
        """Test that surrounding whitespace is ignored."""
        assert parse_to_gbps("  10G  ") == 10

    @pytest.mark.parametrize("value", [None, "", "   ", "Gbps", "invalid", "100"])
    def test_unrecognized_returns_none(self, value):
        """Test missing, unit-less and unrecognized input."""
        assert parse_to_gbps(value) is None

    def test_bool_is_not_a_number(self):
        """Test that booleans are not treated as numeric bandwidth."""
        assert parse_to_gbps(True) is None


class TestFormatBandwidth:
    """Tests for format_bandwidth."""

    def test_unknown(self):
        assert format_bandwidth(None) == "Unknown"

    def test_gbps(self):
        """Test values of 1 Gbps and above."""
        assert format_bandwidth(100) == "100 Gbps"
        assert format_bandwidth(1) == "1 Gbps"
        assert format_bandwidth(2.5) == "2.5 Gbps"

    def test_mbps(self):
        """Test values below 1 Gbps render as Mbps."""
        assert format_bandwidth(0.5) == "500 Mbps"


class TestBandwidthTier:
    """Tests for bandwidth tier boundaries."""

    @pytest.mark.parametrize(
        "gbps,expected",
        [
            (None, 0),
            (0, 10),
            (10, 10),
            (49.99, 10),
            (50, 50),
            (50.01, 50),
            (99.99, 50),
            (100, 100),
            (100.01, 100),
            (199.99, 100),
            (200, 200),
            (200.01, 200),
            (400, 200),
        ],
    )
    def test_boundaries(self, gbps, expected):
        """Test that each bucket includes its lower edge."""
        assert bandwidth_tier(gbps) == expected

    def test_zero_is_known(self):
        """Test that zero bandwidth is distinct from unknown."""
        assert bandwidth_tier(0) is BandwidthTier.TIER_10
        assert bandwidth_tier(None) is BandwidthTier.UNKNOWN


class TestPresentationHelpers:
    """Tests for tier labels and arc widths."""

    def test_tier_label(self):
        assert tier_label(BandwidthTier.UNKNOWN) == "Unknown"
        assert tier_label(100) == "100-200 Gbps"

    @pytest.mark.parametrize(
        "gbps,width",
        [(None, 3), (10, 3), (50, 5), (100, 8), (200, 10)],
    )
    def test_arc_width(self, gbps, width):
        assert arc_width(gbps) == width
