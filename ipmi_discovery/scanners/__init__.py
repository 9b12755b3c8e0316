"""
Scanner modules for the IPMI discovery scanner.

This package contains the base scanner interface, the ping liveness stage and
the IPMI evaluation stage with its handshake and port probes.
"""

from .base_scanner import BaseScanner
from .ping_scanner import PingScanner
from .handshake_validator import HandshakeValidator
from .ipmi_scanner import IPMIScanner

__all__ = [
    'BaseScanner',
    'PingScanner',
    'HandshakeValidator',
    'IPMIScanner',
]
