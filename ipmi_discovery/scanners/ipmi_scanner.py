"""
IPMI scanner for the IPMI discovery scanner.

This module implements the evaluation stage run against every live host. The
checks escalate and stop at the first success:

1. an authenticated IPMI handshake on port 623 -> CONFIRMED
2. a UDP reply or TCP connect on 623/664      -> POSSIBLE
3. nothing                                    -> NON_MATCHING
"""

import asyncio
from typing import Awaitable, Callable, Iterable, List, Optional

from .base_scanner import BaseScanner
from .handshake_validator import HandshakeValidator
from .port_prober import tcp_probe, udp_probe
from ..config.config_loader import ProbeConfig
from ..core.data_models import ConfidenceTier, ScanResult
from ..core.work_scheduler import BoundedScheduler
from ..utils.logger import Logger

# (address, port, timeout) -> True when the port answered
PortProbe = Callable[[str, int, float], Awaitable[bool]]


class IPMIScanner(BaseScanner):
    """
    Classifies live hosts into confidence tiers.

    Evaluations for different hosts run concurrently under the scheduler's
    worker budget; results are recorded from the single loop consuming the
    scheduler, so the ScanResult has one writer.
    """

    def __init__(
        self,
        scheduler: BoundedScheduler,
        handshake: HandshakeValidator,
        config: Optional[ProbeConfig] = None,
        logger: Optional[Logger] = None,
        udp: Optional[PortProbe] = None,
        tcp: Optional[PortProbe] = None,
    ):
        """
        Initialize the IPMI scanner.

        Args:
            scheduler: Bounded scheduler used to fan out evaluations
            handshake: Validator performing the IPMI session handshake
            config: UDP/TCP probe ports and timeout
            logger: Logger instance for outputting scan progress
            udp: Replacement UDP probe, mainly for tests
            tcp: Replacement TCP probe, mainly for tests
        """
        super().__init__(scheduler, logger)
        self.handshake = handshake
        self.config = config or ProbeConfig()
        self.udp = udp or udp_probe
        self.tcp = tcp or tcp_probe

    async def scan(self, targets: Iterable[str]) -> ScanResult:
        """
        Evaluate every live host and record its tier.

        Args:
            targets: Addresses that answered the liveness check

        Returns:
            ScanResult mapping each evaluated address to its tier
        """
        targets = list(targets)
        self._log_info(f"Evaluating {len(targets)} live hosts for IPMI")
        self._start_scan_timer()

        result = ScanResult()
        async for address, tier in self.scheduler.as_completed(targets, self.evaluate):
            result.record(address, tier)
            self._log_debug(f"{address} classified as {tier.value}")

        duration = self._end_scan_timer()
        self._log_info(f"IPMI stage completed. {len(result)} hosts classified in {duration:.2f} seconds")
        return result

    async def evaluate(self, address: str) -> ConfidenceTier:
        """
        Run the escalation for one host.

        Args:
            address: Live IPv4 address

        Returns:
            The tier assigned by the first check that succeeds
        """
        if await self.handshake.attempt(address):
            return ConfidenceTier.CONFIRMED
        if await self.port_responds(address):
            return ConfidenceTier.POSSIBLE
        return ConfidenceTier.NON_MATCHING

    async def port_responds(self, address: str) -> bool:
        """Run the UDP and TCP probes together; any single success counts."""
        timeout = self.config.timeout
        checks: List[Awaitable[bool]] = [
            self.udp(address, port, timeout) for port in self.config.udp_ports
        ]
        checks += [self.tcp(address, port, timeout) for port in self.config.tcp_ports]

        outcomes = await asyncio.gather(*checks, return_exceptions=True)
        return any(outcome is True for outcome in outcomes)
