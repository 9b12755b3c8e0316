"""
Configuration module for the IPMI discovery scanner.
Provides configuration loading and validation for every scan stage.
"""

from .config_loader import (
    ConfigLoader, ScanConfig, PingConfig, ProbeConfig, HandshakeConfig, ReportConfig
)

__all__ = ['ConfigLoader', 'ScanConfig', 'PingConfig', 'ProbeConfig', 'HandshakeConfig', 'ReportConfig']
