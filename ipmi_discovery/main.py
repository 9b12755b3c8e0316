"""
Main entry point for the IPMI discovery scanner.

This module provides the command-line interface: argument parsing, config
loading, the pre-flight check for the ping tool, and printing the report.
"""

import argparse
import sys
from typing import List, Optional

from . import __version__
from .config.config_loader import ConfigLoader, REPORT_ORDERS, ScanConfig
from .core.scanner_orchestrator import ScannerOrchestrator
from .core.target_enumerator import enumerate_targets
from .utils.error_handler import ConfigurationError, IPMIDiscoveryError, ToolValidator
from .utils.logger import LogLevel, get_logger, set_log_level
from .utils.report_printer import ReportPrinter


class IPMIDiscoveryApp:
    """
    Main application class for the IPMI discovery scanner.

    Handles configuration, pre-flight checks and the report for one run.
    """

    def __init__(self):
        self.logger = get_logger(__name__)
        self.printer = ReportPrinter()

    def build_config(self, args: argparse.Namespace) -> ScanConfig:
        """
        Merge the optional YAML tuning file with the command-line arguments.

        Args:
            args: Parsed command line arguments

        Returns:
            ScanConfig for this run

        Raises:
            ConfigurationError: If the range or worker budget is invalid
        """
        config = ConfigLoader().load(args.config)
        config.subnet = args.subnet
        config.start = args.start
        config.end = args.end
        config.workers = args.workers
        config.user = args.user
        config.password = args.password
        if args.order:
            config.report.order = args.order

        enumerate_targets(config.subnet, config.start, config.end)
        if config.workers < 1:
            raise ConfigurationError(
                f"--workers must be at least 1, got {config.workers}",
                details={"workers": str(config.workers)},
            )
        return config

    def run(self, args: argparse.Namespace) -> int:
        """
        Run the IPMI discovery application.

        Args:
            args: Parsed command line arguments

        Returns:
            int: Exit code (0 for success, non-zero for failure)
        """
        try:
            config = self.build_config(args)
            orchestrator = ScannerOrchestrator(config)

            if args.skip_checks:
                self.logger.warning("Skipping pre-flight checks as requested")
            else:
                ToolValidator(self.logger).require_tools(["ping"])

            scan_result = orchestrator.execute_full_scan()
        except IPMIDiscoveryError as e:
            self.logger.error(str(e))
            return 1
        except KeyboardInterrupt:
            self.logger.warning("Scan interrupted by user")
            return 130  # Standard exit code for SIGINT

        self.printer.print_report(scan_result.report)
        return 0


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command line argument parser.

    Returns:
        argparse.ArgumentParser: Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="ipmi_discovery",
        description="IPMI Discovery - find BMCs on a subnet by ping, IPMI handshake and port probes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m ipmi_discovery                                  # Scan 192.168.1.1-255
  python -m ipmi_discovery --subnet 10.0.0 --start 1 --end 50
  python -m ipmi_discovery --user ADMIN --password ADMIN    # Use vendor credentials
  python -m ipmi_discovery --config scan.yml --order numeric
        """
    )

    parser.add_argument("--subnet", default="192.168.1",
                        help="Subnet prefix of three octets (default: 192.168.1)")
    parser.add_argument("--start", type=int, default=1,
                        help="First host octet to scan (default: 1)")
    parser.add_argument("--end", type=int, default=255,
                        help="Last host octet to scan (default: 255)")
    parser.add_argument("--workers", type=int, default=32,
                        help="Maximum number of concurrent probes (default: 32)")
    parser.add_argument("--user", default="root",
                        help="IPMI user name for the handshake (default: root)")
    parser.add_argument("--password", default="root",
                        help="IPMI password for the handshake (default: root)")
    parser.add_argument("--config", type=str,
                        help="YAML file tuning timeouts, ports, ping count and report order")
    parser.add_argument("--order", choices=REPORT_ORDERS,
                        help="Sort addresses as strings (lexical) or as IPv4 values (numeric)")
    parser.add_argument("--skip-checks", action="store_true",
                        help="Skip the pre-flight check for the ping tool")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable verbose logging output")
    parser.add_argument("--version", action="version",
                        version=f"IPMI Discovery {__version__}")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the IPMI discovery scanner.

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level(LogLevel.DEBUG)

    app = IPMIDiscoveryApp()
    return app.run(args)


if __name__ == "__main__":
    sys.exit(main())
