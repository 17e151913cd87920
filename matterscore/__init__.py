"""
matterscore - Compliance scores and capability analysis for Matter devices

Scores how completely a smart-home device implements the Matter device
types it claims, explains what it can do in plain terms, and lines
several devices up side by side.

Example:
    >>> from matterscore import calculate_device_score, analyze_capabilities
    >>> endpoints = [{"endpoint_id": 1, "device_types": [256],
    ...               "server_clusters": [3, 4, 6, 98], "client_clusters": []}]
    >>> calculate_device_score(endpoints).star_rating
    4.0
    >>> analyze_capabilities(endpoints).summary.supported
    4
"""

__version__ = "1.0.0"

from .capabilities import AnalyzerResult, CapabilityAnalyzer, analyze_capabilities
from .compare import aggregate_capabilities, support_matrix
from .config import Config, get_config
from .registry import MatterRegistry, get_registry
from .scoring import DeviceScore, DeviceScoreEngine, DeviceTypeScore, calculate_device_score

__all__ = [
    "__version__",
    "Config",
    "get_config",
    "MatterRegistry",
    "get_registry",
    "DeviceScore",
    "DeviceTypeScore",
    "DeviceScoreEngine",
    "calculate_device_score",
    "AnalyzerResult",
    "CapabilityAnalyzer",
    "analyze_capabilities",
    "aggregate_capabilities",
    "support_matrix",
]
