"""Tests for candidate address enumeration."""

import pytest

from ipmi_discovery.core.target_enumerator import enumerate_targets
from ipmi_discovery.utils.error_handler import ConfigurationError


@pytest.mark.parametrize("start,end", [(1, 1), (1, 3), (0, 255), (200, 210)])
def test_enumerate_count_and_format(start, end):
    """Range yields end - start + 1 addresses, each literally prefix.N."""
    targets = enumerate_targets("10.0.0", start, end)
    assert len(targets) == end - start + 1
    assert targets == [f"10.0.0.{n}" for n in range(start, end + 1)]


def test_enumerate_preserves_order():
    """Addresses come out in ascending octet order."""
    assert enumerate_targets("192.168.1", 8, 11) == [
        "192.168.1.8", "192.168.1.9", "192.168.1.10", "192.168.1.11",
    ]


def test_start_greater_than_end_is_configuration_error():
    """An inverted range is rejected."""
    with pytest.raises(ConfigurationError):
        enumerate_targets("10.0.0", 5, 4)


@pytest.mark.parametrize("start,end", [(-1, 10), (1, 256)])
def test_out_of_range_bytes_rejected(start, end):
    """Octets outside 0-255 are rejected."""
    with pytest.raises(ConfigurationError):
        enumerate_targets("10.0.0", start, end)


@pytest.mark.parametrize("prefix", ["10.0", "10.0.0.0", "10.0.x", "10.300.0", ""])
def test_malformed_prefix_rejected(prefix):
    """Prefix must be three octets in range."""
    with pytest.raises(ConfigurationError):
        enumerate_targets(prefix, 1, 2)
