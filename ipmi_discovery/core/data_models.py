"""
Core data models and enums for the IPMI discovery scanner.

This module defines the confidence tiers a scanned host can end up in, the
per-address result map built while evaluations complete, and the sorted report
and statistics produced at the end of a run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List


class ConfidenceTier(Enum):
    """Terminal classification of a host that answered the liveness check."""
    CONFIRMED = "confirmed"
    POSSIBLE = "possible"
    NON_MATCHING = "non_matching"


@dataclass
class ScanResult:
    """
    Mapping of address to confidence tier, filled in as evaluations complete.

    Attributes:
        tiers: Address to tier assignments recorded so far
    """
    tiers: Dict[str, ConfidenceTier] = field(default_factory=dict)

    def record(self, address: str, tier: ConfidenceTier) -> None:
        """
        Assign ``tier`` to ``address``.

        Raises:
            ValueError: If the address was already classified
        """
        if address in self.tiers:
            raise ValueError(f"{address} already classified as {self.tiers[address].value}")
        self.tiers[address] = tier

    def __len__(self) -> int:
        return len(self.tiers)

    def __contains__(self, address: str) -> bool:
        return address in self.tiers


@dataclass
class TieredReport:
    """
    Sorted addresses for each confidence tier.

    Attributes:
        confirmed: Hosts whose IPMI handshake succeeded
        possible: Hosts that answered on an IPMI port but failed the handshake
        non_matching: Hosts that answered ping but showed no IPMI evidence
    """
    confirmed: List[str] = field(default_factory=list)
    possible: List[str] = field(default_factory=list)
    non_matching: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.confirmed or self.possible or self.non_matching)


@dataclass
class ScanStatistics:
    """
    Statistics about a completed scan.

    Attributes:
        candidates: Number of addresses enumerated
        alive: Number of addresses that answered the liveness check
        tier_counts: Number of hosts in each tier, keyed by tier value
        stage_times: Duration of each stage in seconds
    """
    candidates: int = 0
    alive: int = 0
    tier_counts: Dict[str, int] = field(default_factory=dict)
    stage_times: Dict[str, float] = field(default_factory=dict)


@dataclass
class CompleteScanResult:
    """Everything a finished scan produced."""
    result: ScanResult
    report: TieredReport
    statistics: ScanStatistics = field(default_factory=ScanStatistics)
