"""
Error types and pre-flight tool validation for the IPMI discovery scanner.

Configuration problems are raised as exceptions and reported once by the CLI.
Per-host probe failures never reach this module: they are absorbed into the
classification of the host.
"""

import shutil
from typing import Dict, List, Optional

from .logger import Logger, get_logger


class IPMIDiscoveryError(Exception):
    """Base exception class for the IPMI discovery scanner."""

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(IPMIDiscoveryError):
    """Exception for invalid scan ranges, worker budgets or config files."""
    pass


class ToolMissingError(IPMIDiscoveryError):
    """Exception for missing external tools."""
    pass


class ToolValidator:
    """
    Validator for external tool availability.

    The scanner shells out to the platform ``ping`` binary for the liveness
    stage, so a missing binary would silently report every host as down.
    """

    INSTALL_SUGGESTIONS = {
        "ping": [
            "Ubuntu/Debian: sudo apt-get install iputils-ping",
            "CentOS/RHEL: sudo yum install iputils",
            "Alpine: apk add iputils",
            "macOS/Windows: ping ships with the operating system",
        ],
    }

    def __init__(self, logger: Optional[Logger] = None):
        """
        Initialize the ToolValidator.

        Args:
            logger: Logger instance for reporting missing tools
        """
        self.logger = logger or get_logger(__name__)

    def check_tool(self, tool_name: str) -> bool:
        """
        Check if a tool is available in the system PATH.

        Args:
            tool_name: Name of the tool to check

        Returns:
            bool: True if tool is available, False otherwise
        """
        tool_path = shutil.which(tool_name)
        if tool_path:
            self.logger.debug(f"Found {tool_name} at: {tool_path}")
            return True

        self.logger.error(f"Required tool '{tool_name}' not found in PATH")
        self._suggest_tool_installation(tool_name)
        return False

    def require_tools(self, tool_names: List[str]) -> None:
        """
        Raise ToolMissingError unless every tool in ``tool_names`` is present.

        Args:
            tool_names: Names of the tools to check
        """
        missing = [name for name in tool_names if not self.check_tool(name)]
        if missing:
            raise ToolMissingError(
                f"Missing required tools: {', '.join(missing)}",
                details={"missing": ", ".join(missing)},
            )

    def _suggest_tool_installation(self, tool_name: str) -> None:
        """Provide tool installation suggestions."""
        if tool_name in self.INSTALL_SUGGESTIONS:
            self.logger.info(f"Installation suggestions for {tool_name}:")
            for suggestion in self.INSTALL_SUGGESTIONS[tool_name]:
                self.logger.info(f"  • {suggestion}")
        else:
            self.logger.info(f"Please install {tool_name} using your system's package manager")
