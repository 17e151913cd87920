"""
Device scoring - Compliance scores and star ratings for Matter devices.
"""

from .models import (
    BreakdownItem,
    DeviceScore,
    DeviceTypeScore,
)
from .engine import (
    DeviceScoreEngine,
    RankedDevice,
    calculate_device_score,
    rank_devices,
    score_to_stars,
)

__all__ = [
    # Models
    "BreakdownItem",
    "DeviceScore",
    "DeviceTypeScore",
    # Engine
    "DeviceScoreEngine",
    "RankedDevice",
    "calculate_device_score",
    "rank_devices",
    "score_to_stars",
]
