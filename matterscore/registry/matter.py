"""
Matter Registry - Lookups for cluster and device type reference data.

Lookup misses never raise. Unknown IDs resolve to a sentinel with
``known=False`` so callers can skip them and carry on.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .clusters import CLUSTERS, ClusterElement, ClusterMetadata
from .device_types import DEVICE_TYPES, DeviceTypeMetadata

logger = logging.getLogger(__name__)


UNKNOWN_CLUSTER = ClusterMetadata(id=-1, name="Unknown Cluster", category="unknown", known=False)
UNKNOWN_DEVICE_TYPE = DeviceTypeMetadata(
    id=-1, name="Unknown Device Type", category="unknown", display_category="Unknown",
    scored=False, known=False,
)


@dataclass
class ClusterGapAnalysis:
    """How a set of implemented clusters compares to a device type's requirements."""
    device_type: DeviceTypeMetadata
    missing_mandatory_server: List[int] = field(default_factory=list)
    missing_mandatory_client: List[int] = field(default_factory=list)
    implemented_optional_server: List[int] = field(default_factory=list)
    implemented_optional_client: List[int] = field(default_factory=list)
    extra_server: List[int] = field(default_factory=list)
    extra_client: List[int] = field(default_factory=list)

    @property
    def is_compliant(self) -> bool:
        """True when every mandatory cluster is implemented."""
        return not self.missing_mandatory_server and not self.missing_mandatory_client


class MatterRegistry:
    """
    Read-only registry of Matter clusters and device types.

    Tables default to the packaged reference data; pass your own dicts to
    test against a reduced registry.
    """

    def __init__(
        self,
        clusters: Optional[Dict[int, ClusterMetadata]] = None,
        device_types: Optional[Dict[int, DeviceTypeMetadata]] = None,
    ):
        self._clusters = CLUSTERS if clusters is None else clusters
        self._device_types = DEVICE_TYPES if device_types is None else device_types

    # -------------------------------------------------------------------------
    # Clusters
    # -------------------------------------------------------------------------

    def get_cluster_metadata(self, cluster_id: int) -> ClusterMetadata:
        """Get cluster metadata, or the ``UNKNOWN_CLUSTER`` sentinel."""
        metadata = self._clusters.get(cluster_id)
        if metadata is None:
            logger.debug(f"Unknown cluster 0x{cluster_id:04X}")
            return UNKNOWN_CLUSTER
        return metadata

    def is_known_cluster(self, cluster_id: int) -> bool:
        return cluster_id in self._clusters

    def get_cluster_name(self, cluster_id: int) -> str:
        metadata = self._clusters.get(cluster_id)
        if metadata is None:
            return f"Cluster 0x{cluster_id:04X}"
        return metadata.name

    def get_cluster_spec_version(self, cluster_id: int) -> Optional[str]:
        metadata = self._clusters.get(cluster_id)
        return metadata.spec_version if metadata else None

    def get_cluster_commands(self, cluster_id: int) -> List[ClusterElement]:
        return list(self.get_cluster_metadata(cluster_id).commands)

    def get_cluster_attributes(self, cluster_id: int) -> List[ClusterElement]:
        return list(self.get_cluster_metadata(cluster_id).attributes)

    def get_cluster_command_name(self, cluster_id: int, command_id: int) -> Optional[str]:
        for command in self.get_cluster_metadata(cluster_id).commands:
            if command.id == command_id:
                return command.name
        return None

    def get_cluster_attribute_name(self, cluster_id: int, attribute_id: int) -> Optional[str]:
        for attribute in self.get_cluster_metadata(cluster_id).attributes:
            if attribute.id == attribute_id:
                return attribute.name
        return None

    def has_feature(self, cluster_id: int, feature_code: str, feature_map: int) -> bool:
        """Check whether ``feature_code`` is set in a cluster's FeatureMap."""
        feature = self.get_cluster_metadata(cluster_id).get_feature(feature_code)
        if feature is None:
            return False
        return bool(feature_map & (1 << feature.bit))

    def decode_feature_map(self, cluster_id: int, feature_map: int) -> List[Dict[str, object]]:
        """
        Decode a FeatureMap into named features.

        Returns one entry per feature the cluster defines, in bit order:
            [{"bit": 0, "code": "HEAT", "name": "Heating", "enabled": True}, ...]
        """
        features = sorted(self.get_cluster_metadata(cluster_id).features, key=lambda f: f.bit)
        return [
            {
                "bit": f.bit,
                "code": f.code,
                "name": f.name,
                "enabled": bool(feature_map & (1 << f.bit)),
            }
            for f in features
        ]

    def get_all_cluster_names(self) -> Dict[int, str]:
        return {cid: c.name for cid, c in self._clusters.items()}

    # -------------------------------------------------------------------------
    # Device types
    # -------------------------------------------------------------------------

    def get_device_type_metadata(self, device_type_id: int) -> DeviceTypeMetadata:
        """Get device type metadata, or the ``UNKNOWN_DEVICE_TYPE`` sentinel."""
        metadata = self._device_types.get(device_type_id)
        if metadata is None:
            logger.debug(f"Unknown device type {device_type_id}")
            return UNKNOWN_DEVICE_TYPE
        return metadata

    def get_device_type_name(self, device_type_id: int) -> str:
        metadata = self._device_types.get(device_type_id)
        if metadata is None:
            return f"Device Type {device_type_id}"
        return metadata.name

    def get_device_type_spec_version(self, device_type_id: int) -> Optional[str]:
        metadata = self._device_types.get(device_type_id)
        return metadata.spec_version if metadata else None

    def get_device_type_category(self, device_type_id: int) -> Optional[str]:
        metadata = self._device_types.get(device_type_id)
        return metadata.category if metadata else None

    def get_device_type_display_category(self, device_type_id: int) -> Optional[str]:
        metadata = self._device_types.get(device_type_id)
        return metadata.display_category if metadata else None

    def get_device_type_icon(self, device_type_id: int) -> Optional[str]:
        metadata = self._device_types.get(device_type_id)
        return metadata.icon if metadata else None

    def get_device_types_by_category(self, category: str) -> List[DeviceTypeMetadata]:
        return [dt for dt in self._device_types.values() if dt.category == category]

    def get_device_types_by_display_category(self, display_category: str) -> List[DeviceTypeMetadata]:
        return [dt for dt in self._device_types.values() if dt.display_category == display_category]

    def get_device_types_by_spec_version(self, spec_version: str) -> List[DeviceTypeMetadata]:
        return [dt for dt in self._device_types.values() if dt.spec_version == spec_version]

    def get_all_categories(self) -> List[str]:
        return _unique(dt.category for dt in self._device_types.values())

    def get_all_display_categories(self) -> List[str]:
        return _unique(dt.display_category for dt in self._device_types.values())

    def get_all_spec_versions(self) -> List[str]:
        versions = {dt.spec_version for dt in self._device_types.values() if dt.spec_version}
        return sorted(versions, key=lambda v: tuple(int(p) for p in v.split(".")))

    def get_all_device_type_names(self) -> Dict[int, str]:
        return {dtid: dt.name for dtid, dt in self._device_types.items()}

    def get_all_device_type_metadata(self) -> Dict[int, DeviceTypeMetadata]:
        return dict(self._device_types)

    def analyze_cluster_gaps(
        self,
        device_type_id: int,
        server_clusters: Iterable[int],
        client_clusters: Iterable[int],
    ) -> ClusterGapAnalysis:
        """Compare implemented clusters against a device type's requirements."""
        device_type = self.get_device_type_metadata(device_type_id)
        server = set(server_clusters)
        client = set(client_clusters)

        required_server = set(device_type.mandatory_server_clusters) | set(device_type.optional_server_clusters)
        required_client = set(device_type.mandatory_client_clusters) | set(device_type.optional_client_clusters)

        return ClusterGapAnalysis(
            device_type=device_type,
            missing_mandatory_server=[c for c in device_type.mandatory_server_clusters if c not in server],
            missing_mandatory_client=[c for c in device_type.mandatory_client_clusters if c not in client],
            implemented_optional_server=[c for c in device_type.optional_server_clusters if c in server],
            implemented_optional_client=[c for c in device_type.optional_client_clusters if c in client],
            extra_server=sorted(server - required_server),
            extra_client=sorted(client - required_client),
        )


def _unique(values: Iterable[str]) -> List[str]:
    seen: Dict[str, None] = {}
    for value in values:
        seen.setdefault(value, None)
    return list(seen)


# Global registry instance
_registry: Optional[MatterRegistry] = None


def get_registry() -> MatterRegistry:
    """Get the shared registry backed by the packaged reference data."""
    global _registry
    if _registry is None:
        _registry = MatterRegistry()
    return _registry
