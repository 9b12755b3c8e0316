"""
Utility functions and helper classes.
"""

from .logger import Logger, LogLevel, logger, set_log_level, get_logger
from .error_handler import (
    IPMIDiscoveryError, ConfigurationError, ToolMissingError, ToolValidator
)
from .report_printer import ReportPrinter

__all__ = [
    'Logger',
    'LogLevel',
    'logger',
    'set_log_level',
    'get_logger',
    'IPMIDiscoveryError',
    'ConfigurationError',
    'ToolMissingError',
    'ToolValidator',
    'ReportPrinter',
]
