"""
Core components for IPMI discovery functionality.
"""

from .data_models import (
    ConfidenceTier,
    ScanResult,
    TieredReport,
    ScanStatistics,
    CompleteScanResult
)
from .target_enumerator import enumerate_targets
from .work_scheduler import BoundedScheduler
from .tier_classifier import TierClassifier, sort_addresses

__all__ = [
    'ConfidenceTier',
    'ScanResult',
    'TieredReport',
    'ScanStatistics',
    'CompleteScanResult',
    'enumerate_targets',
    'BoundedScheduler',
    'TierClassifier',
    'sort_addresses'
]
