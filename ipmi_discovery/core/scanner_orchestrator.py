"""
Scanner Orchestrator for the IPMI discovery scanner.

This module provides the ScannerOrchestrator class that manages the complete
scan pipeline: enumerate candidates, ping them, evaluate live hosts for IPMI,
then partition the results into confidence tiers.
"""

import asyncio
from datetime import datetime
from typing import Awaitable, Callable, Optional

from .data_models import CompleteScanResult, ConfidenceTier, ScanStatistics
from .target_enumerator import enumerate_targets
from .tier_classifier import TierClassifier
from .work_scheduler import BoundedScheduler
from ..config.config_loader import ScanConfig
from ..scanners.handshake_validator import HandshakeClient, HandshakeValidator
from ..scanners.ipmi_scanner import IPMIScanner, PortProbe
from ..scanners.ping_scanner import PingScanner
from ..utils.logger import get_logger


class ScannerOrchestrator:
    """
    Orchestrates the complete IPMI discovery pipeline.

    The probe callables default to the real network implementations and can be
    replaced to drive the pipeline without touching the network.
    """

    def __init__(
        self,
        config: ScanConfig,
        ping_probe: Optional[Callable[[str], Awaitable[bool]]] = None,
        handshake_client: Optional[HandshakeClient] = None,
        udp_probe: Optional[PortProbe] = None,
        tcp_probe: Optional[PortProbe] = None,
    ):
        """
        Initialize the scanner orchestrator.

        Args:
            config: Settings for this run
            ping_probe: Replacement liveness check
            handshake_client: Replacement blocking IPMI login
            udp_probe: Replacement UDP presence probe
            tcp_probe: Replacement TCP presence probe
        """
        self.config = config
        self.logger = get_logger(__name__)
        self.ping_probe = ping_probe
        self.handshake_client = handshake_client
        self.udp_probe = udp_probe
        self.tcp_probe = tcp_probe
        self.classifier = TierClassifier(config.report.order)

    def execute_full_scan(self) -> CompleteScanResult:
        """
        Execute the complete scan pipeline.

        The range is validated before the event loop starts, so a bad range
        never causes network activity.

        Returns:
            CompleteScanResult with the tiered report and statistics

        Raises:
            ConfigurationError: If the range or worker budget is invalid
        """
        targets = enumerate_targets(self.config.subnet, self.config.start, self.config.end)
        scheduler = BoundedScheduler(self.config.workers)
        return asyncio.run(self._run_pipeline(targets, scheduler))

    async def _run_pipeline(self, targets, scheduler: BoundedScheduler) -> CompleteScanResult:
        self.logger.section("IPMI DISCOVERY SCAN")
        self.logger.info(
            f"Scanning {self.config.subnet}.{self.config.start}-{self.config.end}",
            candidates=len(targets),
            workers=self.config.workers,
        )
        statistics = ScanStatistics(candidates=len(targets))
        scan_start = datetime.now()

        # Stage 1: liveness
        self.logger.progress_start("Stage 1: pinging candidate addresses")
        ping_scanner = PingScanner(scheduler, self.config.ping, self.logger, probe=self.ping_probe)
        alive = await ping_scanner.scan(targets)
        statistics.alive = len(alive)
        statistics.stage_times["ping"] = ping_scanner.last_duration
        self.logger.progress_end(f"{len(alive)} hosts responded to ping")

        # Stages 2-3: handshake, then port probes
        self.logger.progress_start("Stage 2: probing live hosts for IPMI")
        with HandshakeValidator(
            self.config.user,
            self.config.password,
            config=self.config.handshake,
            max_threads=self.config.workers,
            client=self.handshake_client,
            logger=self.logger,
        ) as handshake:
            ipmi_scanner = IPMIScanner(
                scheduler,
                handshake,
                config=self.config.probe,
                logger=self.logger,
                udp=self.udp_probe,
                tcp=self.tcp_probe,
            )
            result = await ipmi_scanner.scan(alive)
        statistics.stage_times["ipmi"] = ipmi_scanner.last_duration
        self.logger.progress_end("IPMI evaluation completed")

        report = self.classifier.classify(result)
        statistics.tier_counts = {
            ConfidenceTier.CONFIRMED.value: len(report.confirmed),
            ConfidenceTier.POSSIBLE.value: len(report.possible),
            ConfidenceTier.NON_MATCHING.value: len(report.non_matching),
        }
        statistics.stage_times["total"] = (datetime.now() - scan_start).total_seconds()

        self.logger.info("Scan summary", **statistics.tier_counts)
        self.logger.debug(
            "Stage durations",
            **{stage: f"{seconds:.2f}s" for stage, seconds in statistics.stage_times.items()},
        )
        return CompleteScanResult(result=result, report=report, statistics=statistics)
