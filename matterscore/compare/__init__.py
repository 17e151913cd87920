"""Side-by-side device comparison."""
from .aggregator import (
    AggregatedCategory,
    CapabilityMeta,
    aggregate_capabilities,
    select_devices,
    support_matrix,
)

__all__ = [
    "AggregatedCategory",
    "CapabilityMeta",
    "aggregate_capabilities",
    "select_devices",
    "support_matrix",
]
