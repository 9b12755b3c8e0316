"""Tests for the YAML tuning file loader."""

import tempfile
from pathlib import Path

import pytest

from ipmi_discovery.config.config_loader import ConfigLoader, ScanConfig
from ipmi_discovery.utils.error_handler import ConfigurationError


def write_config(d, text):
    path = Path(d) / "scan.yml"
    path.write_text(text)
    return str(path)


def test_defaults_without_file():
    """No file means the documented defaults."""
    config = ConfigLoader().load(None)
    assert config == ScanConfig()
    assert (config.subnet, config.start, config.end, config.workers) == ("192.168.1", 1, 255, 32)
    assert (config.user, config.password) == ("root", "root")
    assert config.probe.udp_ports == [623, 664]
    assert config.probe.tcp_ports == [623, 664]
    assert config.handshake.port == 623
    assert config.handshake.timeout == 3.0
    assert config.ping.count == 1 and config.ping.timeout == 1
    assert config.report.order == "lexical"


def test_missing_file_falls_back_to_defaults():
    with tempfile.TemporaryDirectory() as d:
        assert ConfigLoader().load(str(Path(d) / "absent.yml")) == ScanConfig()


def test_values_loaded_from_yaml():
    """Valid sections override the defaults."""
    with tempfile.TemporaryDirectory() as d:
        path = write_config(d, """
ping:
  count: 2
  timeout: 2
probe:
  udp_ports: [623]
  timeout: 0.5
handshake:
  timeout: 5
report:
  order: numeric
""")
        config = ConfigLoader().load(path)
    assert config.ping.count == 2 and config.ping.timeout == 2
    assert config.probe.udp_ports == [623]
    assert config.probe.tcp_ports == [623, 664]
    assert config.probe.timeout == 0.5
    assert config.handshake.timeout == 5.0
    assert config.report.order == "numeric"


def test_invalid_values_replaced_by_defaults():
    """Bad values warn and fall back; ping count is clamped to two."""
    with tempfile.TemporaryDirectory() as d:
        path = write_config(d, """
ping:
  count: 9
  timeout: -1
probe:
  udp_ports: [0, "x"]
  tcp_ports: nope
report:
  order: random
""")
        config = ConfigLoader().load(path)
    assert config.ping.count == 2
    assert config.ping.timeout == 1
    assert config.probe.udp_ports == [623, 664]
    assert config.probe.tcp_ports == [623, 664]
    assert config.report.order == "lexical"


def test_unparseable_yaml_is_configuration_error():
    with tempfile.TemporaryDirectory() as d:
        path = write_config(d, "ping: [unclosed\n")
        with pytest.raises(ConfigurationError):
            ConfigLoader().load(path)


def test_non_mapping_document_is_configuration_error():
    with tempfile.TemporaryDirectory() as d:
        path = write_config(d, "- just\n- a list\n")
        with pytest.raises(ConfigurationError):
            ConfigLoader().load(path)
