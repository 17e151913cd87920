"""
Capability analysis results.

A capability is a user-facing feature ("Dimming", "Energy monitoring")
backed by one or more Matter clusters.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ClusterElementStatus:
    """
    A command (action) or attribute (status) of a capability's cluster.

    ``implemented`` is None when the device reported no telemetry to
    check against.
    """
    id: int
    technical: str
    friendly: str
    implemented: Optional[bool] = None
    optional: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "technical": self.technical,
            "friendly": self.friendly,
            "implemented": self.implemented,
            "optional": self.optional,
        }


@dataclass
class CapabilityDetails:
    """Spec versus implementation view of the cluster backing a capability."""
    cluster_id: int
    cluster_name: str
    spec_version: Optional[str] = None
    actions: List[ClusterElementStatus] = field(default_factory=list)
    statuses: List[ClusterElementStatus] = field(default_factory=list)
    features: List[str] = field(default_factory=list)  # Enabled feature names

    @property
    def implemented_actions(self) -> List[ClusterElementStatus]:
        return [a for a in self.actions if a.implemented]

    @property
    def missing_actions(self) -> List[ClusterElementStatus]:
        return [a for a in self.actions if a.implemented is False]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cluster_id": self.cluster_id,
            "cluster_name": self.cluster_name,
            "spec_version": self.spec_version,
            "actions": [a.to_dict() for a in self.actions],
            "statuses": [s.to_dict() for s in self.statuses],
            "features": list(self.features),
        }


@dataclass
class Capability:
    """A capability as presented for one device."""
    key: str
    label: str
    emoji: str = ""
    icon: str = ""
    description: str = ""
    category: str = "other"
    spec_version: Optional[str] = None
    details: Optional[CapabilityDetails] = None

    @property
    def has_details(self) -> bool:
        return self.details is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "label": self.label,
            "emoji": self.emoji,
            "icon": self.icon,
            "description": self.description,
            "category": self.category,
            "spec_version": self.spec_version,
            "has_details": self.has_details,
            "details": self.details.to_dict() if self.details else None,
        }


@dataclass
class CategoryGroup:
    """Supported and unsupported capabilities within one category."""
    label: str
    supported: Dict[str, Capability] = field(default_factory=dict)
    unsupported: Dict[str, Capability] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.supported and not self.unsupported

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "supported": {k: c.to_dict() for k, c in self.supported.items()},
            "unsupported": {k: c.to_dict() for k, c in self.unsupported.items()},
        }


@dataclass
class CapabilitySummary:
    total: int = 0
    supported: int = 0
    percentage: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "total": self.total,
            "supported": self.supported,
            "percentage": self.percentage,
        }


@dataclass
class AnalyzerResult:
    """
    Everything the analyzer knows about one device's capabilities.

    ``by_category`` is ordered canonically and never holds empty groups.
    ``standouts`` and ``missing`` are capability labels.
    """
    supported: Dict[str, Capability] = field(default_factory=dict)
    unsupported: Dict[str, Capability] = field(default_factory=dict)
    by_category: Dict[str, CategoryGroup] = field(default_factory=dict)
    summary: CapabilitySummary = field(default_factory=CapabilitySummary)
    standouts: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    device_category: Optional[str] = None

    def is_supported(self, key: str) -> bool:
        return key in self.supported

    def to_dict(self) -> Dict[str, Any]:
        return {
            "supported": {k: c.to_dict() for k, c in self.supported.items()},
            "unsupported": {k: c.to_dict() for k, c in self.unsupported.items()},
            "by_category": {k: g.to_dict() for k, g in self.by_category.items()},
            "summary": self.summary.to_dict(),
            "standouts": list(self.standouts),
            "missing": list(self.missing),
            "device_category": self.device_category,
        }
