"""Tests for the handshake and port-probe escalation."""

import asyncio
import time
from itertools import product

import pytest

from ipmi_discovery.core.data_models import ConfidenceTier
from ipmi_discovery.core.work_scheduler import BoundedScheduler
from ipmi_discovery.config.config_loader import HandshakeConfig
from ipmi_discovery.scanners.handshake_validator import HandshakeValidator
from ipmi_discovery.scanners.ipmi_scanner import IPMIScanner


def make_scanner(handshake_ok=False, udp_ports=(), tcp_ports=(), client=None, calls=None):
    calls = calls if calls is not None else []

    async def udp(address, port, timeout):
        calls.append(("udp", port))
        return port in udp_ports

    async def tcp(address, port, timeout):
        calls.append(("tcp", port))
        return port in tcp_ports

    validator = HandshakeValidator(
        "root", "root", client=client or (lambda host, port, user, password: handshake_ok)
    )
    return IPMIScanner(BoundedScheduler(4), validator, udp=udp, tcp=tcp), calls


@pytest.mark.parametrize("udp_ports,tcp_ports", [
    ((), ()), ((623,), ()), ((), (664,)), ((623, 664), (623, 664)),
])
def test_handshake_success_is_confirmed(udp_ports, tcp_ports):
    """A successful handshake wins regardless of probe outcomes and skips them."""
    scanner, calls = make_scanner(True, udp_ports, tcp_ports)
    with scanner.handshake:
        assert asyncio.run(scanner.evaluate("10.0.0.1")) is ConfidenceTier.CONFIRMED
    assert calls == []


@pytest.mark.parametrize("protocol,port", list(product(["udp", "tcp"], [623, 664])))
def test_any_single_probe_success_is_possible(protocol, port):
    """Each of the four lightweight probes alone is enough for POSSIBLE."""
    udp_ports = (port,) if protocol == "udp" else ()
    tcp_ports = (port,) if protocol == "tcp" else ()
    scanner, _ = make_scanner(False, udp_ports, tcp_ports)
    with scanner.handshake:
        assert asyncio.run(scanner.evaluate("10.0.0.2")) is ConfidenceTier.POSSIBLE


def test_no_evidence_is_non_matching():
    """All four probes are tried before falling back to NON_MATCHING."""
    scanner, calls = make_scanner(False)
    with scanner.handshake:
        assert asyncio.run(scanner.evaluate("10.0.0.3")) is ConfidenceTier.NON_MATCHING
    assert sorted(calls) == [("tcp", 623), ("tcp", 664), ("udp", 623), ("udp", 664)]


def test_handshake_exception_falls_through():
    """A raising protocol client counts as a failed handshake."""

    def client(host, port, user, password):
        raise ConnectionError("BMC rejected session")

    scanner, _ = make_scanner(client=client, udp_ports=(623,))
    with scanner.handshake:
        assert asyncio.run(scanner.evaluate("10.0.0.4")) is ConfidenceTier.POSSIBLE


def test_handshake_timeout_is_failure():
    """A handshake slower than its timeout is abandoned."""

    def slow_client(host, port, user, password):
        time.sleep(0.5)
        return True

    validator = HandshakeValidator(
        "root", "root", config=HandshakeConfig(timeout=0.05), client=slow_client
    )
    with validator:
        assert asyncio.run(validator.attempt("10.0.0.5")) is False


def test_handshake_receives_credentials_and_port():
    """The client is called with host, IPMI port and the supplied credentials."""
    seen = []

    def client(host, port, user, password):
        seen.append((host, port, user, password))
        return True

    with HandshakeValidator("ADMIN", "secret", client=client) as validator:
        assert asyncio.run(validator.attempt("10.0.0.6"))
    assert seen == [("10.0.0.6", 623, "ADMIN", "secret")]


def test_probe_exception_counts_as_no_response():
    """A probe that raises does not abort the evaluation."""

    async def udp(address, port, timeout):
        raise OSError("bind failed")

    async def tcp(address, port, timeout):
        return False

    validator = HandshakeValidator("root", "root", client=lambda *args: False)
    scanner = IPMIScanner(BoundedScheduler(1), validator, udp=udp, tcp=tcp)
    with validator:
        assert asyncio.run(scanner.evaluate("10.0.0.7")) is ConfidenceTier.NON_MATCHING


def test_scan_records_each_address_once():
    """scan() classifies every live host exactly once."""
    scanner, _ = make_scanner(False, udp_ports=(623,))
    with scanner.handshake:
        result = asyncio.run(scanner.scan(["10.0.0.1", "10.0.0.2"]))
    assert result.tiers == {
        "10.0.0.1": ConfidenceTier.POSSIBLE,
        "10.0.0.2": ConfidenceTier.POSSIBLE,
    }


def test_handshake_timeout_starts_when_a_thread_is_free():
    """A BMC queued behind an abandoned, still-running login is still confirmed."""

    def client(host, port, user, password):
        if host == "10.0.0.1":
            time.sleep(0.8)  # silent host; outlives its own timeout
            return False
        time.sleep(0.05)
        return True

    async def no_reply(address, port, timeout):
        return False

    validator = HandshakeValidator(
        "root", "root", config=HandshakeConfig(timeout=0.3), max_threads=1, client=client
    )
    scanner = IPMIScanner(BoundedScheduler(1), validator, udp=no_reply, tcp=no_reply)
    with validator:
        result = asyncio.run(scanner.scan(["10.0.0.1", "10.0.0.2"]))

    assert result.tiers["10.0.0.1"] is ConfidenceTier.NON_MATCHING
    assert result.tiers["10.0.0.2"] is ConfidenceTier.CONFIRMED
