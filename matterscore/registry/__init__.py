"""Matter cluster and device type registry."""
from .clusters import (
    CLUSTERS,
    ClusterElement,
    ClusterFeature,
    ClusterMetadata,
    ClusterType,
)
from .device_types import (
    DEVICE_TYPES,
    DeviceTypeMetadata,
    MatterDeviceType,
)
from .matter import (
    UNKNOWN_CLUSTER,
    UNKNOWN_DEVICE_TYPE,
    ClusterGapAnalysis,
    MatterRegistry,
    get_registry,
)

__all__ = [
    "CLUSTERS",
    "ClusterElement",
    "ClusterFeature",
    "ClusterMetadata",
    "ClusterType",
    "DEVICE_TYPES",
    "DeviceTypeMetadata",
    "MatterDeviceType",
    "UNKNOWN_CLUSTER",
    "UNKNOWN_DEVICE_TYPE",
    "ClusterGapAnalysis",
    "MatterRegistry",
    "get_registry",
]
