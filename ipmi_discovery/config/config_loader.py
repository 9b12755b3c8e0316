"""
Configuration loader for the IPMI discovery scanner.
Handles loading and validation of the optional YAML tuning file with fallback to defaults.
"""

import yaml
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field
from pathlib import Path

from ..utils.error_handler import ConfigurationError
from ..utils.logger import get_logger


IPMI_PORT = 623
IPMI_SECURE_PORT = 664
REPORT_ORDERS = ("lexical", "numeric")


@dataclass
class PingConfig:
    """Configuration for the liveness stage."""
    count: int = 1
    timeout: int = 1


@dataclass
class ProbeConfig:
    """Configuration for the lightweight UDP/TCP presence probes."""
    udp_ports: List[int] = field(default_factory=lambda: [IPMI_PORT, IPMI_SECURE_PORT])
    tcp_ports: List[int] = field(default_factory=lambda: [IPMI_PORT, IPMI_SECURE_PORT])
    timeout: float = 1.0


@dataclass
class HandshakeConfig:
    """Configuration for the IPMI session handshake."""
    port: int = IPMI_PORT
    timeout: float = 3.0


@dataclass
class ReportConfig:
    """Configuration for the tiered report."""
    order: str = "lexical"


@dataclass
class ScanConfig:
    """Complete settings for one scan run."""
    subnet: str = "192.168.1"
    start: int = 1
    end: int = 255
    workers: int = 32
    user: str = "root"
    password: str = "root"
    ping: PingConfig = field(default_factory=PingConfig)
    probe: ProbeConfig = field(default_factory=ProbeConfig)
    handshake: HandshakeConfig = field(default_factory=HandshakeConfig)
    report: ReportConfig = field(default_factory=ReportConfig)


class ConfigLoader:
    """
    Loads and validates the YAML tuning file for a scan.

    Range, worker budget and credentials come from the command line; the file
    only tunes timeouts, ports, ping count and report ordering. Invalid values
    are replaced by defaults with a warning, while an unparseable file is a
    configuration error.
    """

    def __init__(self):
        self.logger = get_logger(__name__)

    def load(self, config_path: Optional[str] = None) -> ScanConfig:
        """
        Load a ScanConfig from a YAML file.

        Args:
            config_path: Path to the YAML file, or None for defaults

        Returns:
            ScanConfig with loaded or default tuning values

        Raises:
            ConfigurationError: If the file exists but cannot be parsed
        """
        config = ScanConfig()
        if config_path is None:
            return config

        path = Path(config_path)
        if not path.exists():
            self.logger.warning(f"Config file not found at {path}. Using default configuration.")
            return config

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Error parsing config file {path}: {e}", details={"config_file": str(path)}
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read config file {path}: {e}", details={"config_file": str(path)}
            ) from e

        if not config_data:
            self.logger.warning(f"Config file {path} is empty. Using default configuration.")
            return config
        if not isinstance(config_data, dict):
            raise ConfigurationError(
                f"Config file {path} must contain a mapping", details={"config_file": str(path)}
            )

        config.ping = self._load_ping(config_data.get('ping') or {})
        config.probe = self._load_probe(config_data.get('probe') or {})
        config.handshake = self._load_handshake(config_data.get('handshake') or {})
        config.report = self._load_report(config_data.get('report') or {})

        self.logger.debug(f"Loaded configuration from {path}")
        return config

    def _load_ping(self, data: Dict[str, Any]) -> PingConfig:
        count = self._validate_positive_int(data.get('count', 1), 'ping.count', 1)
        if count > 2:
            self.logger.warning(f"ping.count {count} exceeds 2. Using 2.")
            count = 2
        return PingConfig(
            count=count,
            timeout=self._validate_positive_int(data.get('timeout', 1), 'ping.timeout', 1),
        )

    def _load_probe(self, data: Dict[str, Any]) -> ProbeConfig:
        defaults = ProbeConfig()
        return ProbeConfig(
            udp_ports=self._validate_ports(data.get('udp_ports', defaults.udp_ports), 'probe.udp_ports', defaults.udp_ports),
            tcp_ports=self._validate_ports(data.get('tcp_ports', defaults.tcp_ports), 'probe.tcp_ports', defaults.tcp_ports),
            timeout=self._validate_positive_float(data.get('timeout', 1.0), 'probe.timeout', 1.0),
        )

    def _load_handshake(self, data: Dict[str, Any]) -> HandshakeConfig:
        port = self._validate_ports([data.get('port', IPMI_PORT)], 'handshake.port', [IPMI_PORT])[0]
        return HandshakeConfig(
            port=port,
            timeout=self._validate_positive_float(data.get('timeout', 3.0), 'handshake.timeout', 3.0),
        )

    def _load_report(self, data: Dict[str, Any]) -> ReportConfig:
        order = data.get('order', 'lexical')
        if order not in REPORT_ORDERS:
            self.logger.warning(f"Invalid report.order: {order}. Must be one of {list(REPORT_ORDERS)}. Using default: lexical")
            order = 'lexical'
        return ReportConfig(order=order)

    def _validate_positive_int(self, value: Any, field_name: str, default: int) -> int:
        """
        Validate that a value is a positive integer.

        Args:
            value: Value to validate
            field_name: Name of the field for warnings
            default: Default value to use if validation fails

        Returns:
            Validated integer value or default
        """
        try:
            int_value = int(value)
        except (ValueError, TypeError):
            self.logger.warning(f"Invalid {field_name}: {value}. Must be an integer. Using default: {default}")
            return default
        if int_value <= 0:
            self.logger.warning(f"Invalid {field_name}: {value}. Must be positive. Using default: {default}")
            return default
        return int_value

    def _validate_positive_float(self, value: Any, field_name: str, default: float) -> float:
        try:
            float_value = float(value)
        except (ValueError, TypeError):
            self.logger.warning(f"Invalid {field_name}: {value}. Must be a number. Using default: {default}")
            return default
        if float_value <= 0:
            self.logger.warning(f"Invalid {field_name}: {value}. Must be positive. Using default: {default}")
            return default
        return float_value

    def _validate_ports(self, ports: Any, field_name: str, default: List[int]) -> List[int]:
        """
        Validate a list of port numbers.

        Args:
            ports: Ports to validate
            field_name: Name of the field for warnings
            default: Default ports to use if validation fails

        Returns:
            Validated ports list or default
        """
        if not isinstance(ports, list):
            self.logger.warning(f"Invalid {field_name}: {ports}. Must be a list. Using default: {default}")
            return list(default)

        valid_ports = []
        for port in ports:
            if isinstance(port, int) and not isinstance(port, bool) and 1 <= port <= 65535:
                valid_ports.append(port)
            else:
                self.logger.warning(f"Invalid port in {field_name}: {port}. Skipping.")

        if not valid_ports:
            self.logger.warning(f"No valid ports in {field_name}. Using default: {default}")
            return list(default)

        return valid_ports
