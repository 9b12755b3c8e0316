"""
Base scanner interface for the IPMI discovery scanner.

This module defines the abstract base class shared by the stage scanners,
giving them a common async ``scan`` entry point, a bounded scheduler and
timing and logging helpers.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, List, Optional

from ..core.work_scheduler import BoundedScheduler
from ..utils.logger import Logger


class BaseScanner(ABC):
    """
    Abstract base class for the stage scanners.

    Each stage fans its per-host work out through the same BoundedScheduler,
    so the worker budget applies identically to the ping and IPMI stages.
    """

    def __init__(self, scheduler: BoundedScheduler, logger: Optional[Logger] = None):
        """
        Initialize the base scanner.

        Args:
            scheduler: Bounded scheduler used to fan out per-host work
            logger: Logger instance for outputting scan progress
        """
        self.scheduler = scheduler
        self.logger = logger
        self.scan_start_time: Optional[datetime] = None
        self.scan_end_time: Optional[datetime] = None
        self.last_duration = 0.0

    @abstractmethod
    async def scan(self, targets: List[str]) -> Any:
        """
        Execute this stage against ``targets``.

        Args:
            targets: IPv4 addresses to scan

        Returns:
            Stage-specific result
        """
        pass

    def _start_scan_timer(self) -> None:
        """Start the scan timing measurement."""
        self.scan_start_time = datetime.now()

    def _end_scan_timer(self) -> float:
        """
        End the scan timing measurement and return duration.

        Returns:
            Scan duration in seconds as a float
        """
        self.scan_end_time = datetime.now()
        if self.scan_start_time:
            self.last_duration = (self.scan_end_time - self.scan_start_time).total_seconds()
        return self.last_duration

    def _log_info(self, message: str) -> None:
        if self.logger:
            self.logger.info(message)

    def _log_debug(self, message: str) -> None:
        if self.logger:
            self.logger.debug(message)
