"""
Partitions classified hosts into per-tier, sorted address lists.
"""

import ipaddress
from typing import Iterable, List

from .data_models import ConfidenceTier, ScanResult, TieredReport


def sort_addresses(addresses: Iterable[str], order: str = "lexical") -> List[str]:
    """
    Sort addresses for display.

    ``lexical`` compares plain strings, so ``10.0.0.10`` sorts before
    ``10.0.0.9``; ``numeric`` compares the addresses as IPv4 values.

    Args:
        addresses: Addresses to sort
        order: ``lexical`` or ``numeric``

    Returns:
        New sorted list
    """
    if order == "numeric":
        return sorted(addresses, key=ipaddress.IPv4Address)
    if order != "lexical":
        raise ValueError(f"Unknown report order: {order}")
    return sorted(addresses)


class TierClassifier:
    """Builds a TieredReport from the address-to-tier map of a scan."""

    def __init__(self, order: str = "lexical"):
        self.order = order

    def classify(self, result: ScanResult) -> TieredReport:
        buckets = {tier: [] for tier in ConfidenceTier}
        for address, tier in result.tiers.items():
            buckets[tier].append(address)

        return TieredReport(
            confirmed=sort_addresses(buckets[ConfidenceTier.CONFIRMED], self.order),
            possible=sort_addresses(buckets[ConfidenceTier.POSSIBLE], self.order),
            non_matching=sort_addresses(buckets[ConfidenceTier.NON_MATCHING], self.order),
        )
