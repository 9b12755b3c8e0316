"""
Ping scanner for the IPMI discovery scanner.

This module implements the liveness stage: every candidate address is pinged
with the platform ``ping`` binary, and only addresses that produce a clean
reply move on to the IPMI stage. Addresses that do not answer are dropped
silently; they never appear in the final report.
"""

import asyncio
import platform
from typing import Awaitable, Callable, List, Optional, Set

from .base_scanner import BaseScanner
from ..config.config_loader import PingConfig
from ..core.work_scheduler import BoundedScheduler
from ..utils.logger import Logger

# Any of these in the ping output means the host did not answer
FAILURE_MARKERS = (
    "timed out",
    "unreachable",
    "0 received",
    "100% packet loss",
)


def build_ping_command(address: str, config: PingConfig, system: Optional[str] = None) -> List[str]:
    """
    Build the native ping command line for ``address``.

    Args:
        address: IPv4 address to ping
        config: Ping configuration
        system: Lower-cased platform name, detected when omitted

    Returns:
        Argument list for the ping subprocess
    """
    system = system or platform.system().lower()
    if system == "windows":
        # Windows ping: ping -n 1 -w 1000 IP
        return ["ping", "-n", str(config.count), "-w", str(config.timeout * 1000), address]
    # Unix ping: ping -c 1 -W 1 IP
    return ["ping", "-c", str(config.count), "-W", str(config.timeout), address]


def analyze_ping_output(returncode: Optional[int], output: str) -> bool:
    """
    Decide whether a ping run shows a live host.

    Args:
        returncode: Exit code of the ping process
        output: Combined stdout and stderr of the ping process

    Returns:
        True only for a zero exit code with non-empty output free of failure markers
    """
    if returncode != 0 or not output or not output.strip():
        return False

    output_lower = output.lower()
    return not any(marker in output_lower for marker in FAILURE_MARKERS)


class PingScanner(BaseScanner):
    """
    Liveness scanner built on the platform ping binary.

    Each ping is a subprocess awaited on the event loop, so the scheduler's
    worker budget is the only limit on how many run at once.
    """

    def __init__(
        self,
        scheduler: BoundedScheduler,
        config: Optional[PingConfig] = None,
        logger: Optional[Logger] = None,
        probe: Optional[Callable[[str], Awaitable[bool]]] = None,
    ):
        """
        Initialize the ping scanner.

        Args:
            scheduler: Bounded scheduler used to fan out pings
            config: Ping configuration
            logger: Logger instance for outputting scan progress
            probe: Replacement liveness check, mainly for tests
        """
        super().__init__(scheduler, logger)
        self.config = config or PingConfig()
        self.probe = probe or self.ping_host

    async def scan(self, targets: List[str]) -> Set[str]:
        """
        Ping every target and return the addresses that answered.

        Args:
            targets: Candidate IPv4 addresses

        Returns:
            Set of live addresses, in no particular order
        """
        self._log_info(f"Pinging {len(targets)} candidate addresses")
        self._start_scan_timer()

        alive: Set[str] = set()
        async for address, is_alive in self.scheduler.as_completed(targets, self.probe):
            if is_alive:
                alive.add(address)
                self._log_debug(f"Ping successful: {address}")

        duration = self._end_scan_timer()
        self._log_info(f"Ping stage completed. {len(alive)} of {len(targets)} hosts alive in {duration:.2f} seconds")
        return alive

    async def ping_host(self, address: str) -> bool:
        """
        Ping a single address.

        Args:
            address: IPv4 address to ping

        Returns:
            True if the host answered, False for no answer or any local failure
        """
        cmd = build_ping_command(address, self.config)
        deadline = self.config.timeout * self.config.count + 2

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as e:
            self._log_debug(f"Could not start ping for {address}: {e}")
            return False

        try:
            stdout, _ = await asyncio.wait_for(process.communicate(), timeout=deadline)
        except asyncio.TimeoutError:
            if process.returncode is None:
                process.kill()
                await process.wait()
            self._log_debug(f"Ping timeout for {address} after {deadline} seconds")
            return False

        output = stdout.decode(errors="ignore") if stdout else ""
        return analyze_ping_output(process.returncode, output)
