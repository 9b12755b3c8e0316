"""
Candidate address enumeration for a /24-style subnet prefix.
"""

from typing import List

from ..utils.error_handler import ConfigurationError


def validate_prefix(prefix: str) -> None:
    """
    Check that ``prefix`` is three dotted octets, e.g. ``192.168.1``.

    Raises:
        ConfigurationError: If the prefix is malformed
    """
    parts = prefix.split('.') if isinstance(prefix, str) else []
    if len(parts) != 3:
        raise ConfigurationError(f"Subnet prefix must have three octets, got '{prefix}'")
    for part in parts:
        if not part.isdigit() or not 0 <= int(part) <= 255:
            raise ConfigurationError(f"Invalid octet '{part}' in subnet prefix '{prefix}'")


def enumerate_targets(prefix: str, start: int, end: int) -> List[str]:
    """
    Build the ordered list of candidate addresses ``prefix.start`` .. ``prefix.end``.

    Args:
        prefix: Subnet prefix such as ``10.0.0``
        start: First final octet (inclusive)
        end: Last final octet (inclusive)

    Returns:
        List of addresses, ``end - start + 1`` long

    Raises:
        ConfigurationError: If the range is inverted or out of bounds
    """
    for name, value in (("start", start), ("end", end)):
        if not 0 <= value <= 255:
            raise ConfigurationError(f"--{name} must be between 0 and 255, got {value}")
    if start > end:
        raise ConfigurationError(f"--start ({start}) must not be greater than --end ({end})")
    validate_prefix(prefix)

    return [f"{prefix}.{octet}" for octet in range(start, end + 1)]
