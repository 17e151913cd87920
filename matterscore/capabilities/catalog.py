"""
Capability catalog - Capability definitions loaded from YAML.

The packaged definitions live in ``matterscore/data/capabilities.yaml``;
point ``Config.capabilities_path`` at another file to override them.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

import yaml

from ..models import CLIENT, SERVER, parse_int, parse_int_list

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent.parent / "data" / "capabilities.yaml"


@dataclass
class ClusterRequirement:
    """One cluster that can back a capability."""
    cluster_id: int
    role: str = SERVER
    features: List[str] = field(default_factory=list)  # Any one suffices
    attributes: List[int] = field(default_factory=list)
    commands: List[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional["ClusterRequirement"]:
        cluster_id = parse_int(data.get("id"))
        if cluster_id is None:
            return None
        role = data.get("role", SERVER)
        return cls(
            cluster_id=cluster_id,
            role=CLIENT if role == CLIENT else SERVER,
            features=[str(f) for f in data.get("features") or []],
            attributes=parse_int_list(data.get("attributes") or []),
            commands=parse_int_list(data.get("commands") or []),
        )


@dataclass
class CapabilityDefinition:
    key: str
    label: str
    emoji: str = ""
    icon: str = ""
    description: str = ""
    category: str = "other"
    clusters: List[ClusterRequirement] = field(default_factory=list)
    actions: Dict[int, str] = field(default_factory=dict)   # command id -> friendly name
    statuses: Dict[int, str] = field(default_factory=dict)  # attribute id -> friendly name

    @property
    def primary_cluster_id(self) -> Optional[int]:
        return self.clusters[0].cluster_id if self.clusters else None

    @classmethod
    def from_dict(cls, key: str, data: Dict[str, Any]) -> "CapabilityDefinition":
        clusters = []
        for entry in data.get("clusters") or []:
            requirement = ClusterRequirement.from_dict(entry) if isinstance(entry, dict) else None
            if requirement is None:
                logger.debug(f"Capability {key}: skipping cluster entry without id")
                continue
            clusters.append(requirement)

        return cls(
            key=key,
            label=str(data.get("label") or key),
            emoji=str(data.get("emoji", "")),
            icon=str(data.get("icon", "")),
            description=str(data.get("description", "")),
            category=str(data.get("category") or "other"),
            clusters=clusters,
            actions=_friendly_names(data.get("actions"), "cmd"),
            statuses=_friendly_names(data.get("statuses"), "attr"),
        )


def _friendly_names(entries: Any, id_key: str) -> Dict[int, str]:
    names = {}
    for entry in entries or []:
        if not isinstance(entry, dict):
            continue
        element_id = parse_int(entry.get(id_key))
        if element_id is not None:
            names[element_id] = str(entry.get("friendly", ""))
    return names


@dataclass
class CapabilityCatalog:
    """All capability definitions plus per-category presentation rules."""
    capabilities: Dict[str, CapabilityDefinition] = field(default_factory=dict)
    categories: Dict[str, str] = field(default_factory=dict)  # category key -> label
    relevant: Dict[str, List[str]] = field(default_factory=dict)  # device category -> capability keys
    standouts: List[str] = field(default_factory=list)
    notable_missing: Dict[str, List[str]] = field(default_factory=dict)

    def get(self, key: str) -> Optional[CapabilityDefinition]:
        return self.capabilities.get(key)

    def relevant_for(self, device_category: Optional[str]) -> Optional[Set[str]]:
        """Capability keys relevant to a device category, or None for all of them."""
        if device_category is None:
            return None
        keys = self.relevant.get(device_category)
        return set(keys) if keys else None

    def missing_candidates(self, device_category: Optional[str]) -> List[str]:
        if device_category in self.notable_missing:
            return list(self.notable_missing[device_category])
        return list(self.notable_missing.get("default", []))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CapabilityCatalog":
        capabilities = {
            str(key): CapabilityDefinition.from_dict(str(key), value or {})
            for key, value in (data.get("capabilities") or {}).items()
        }
        return cls(
            capabilities=capabilities,
            categories={str(k): str(v) for k, v in (data.get("categories") or {}).items()},
            relevant={
                str(k): [str(key) for key in v or []]
                for k, v in (data.get("device_type_relevant_capabilities") or {}).items()
            },
            standouts=[str(key) for key in data.get("standouts") or []],
            notable_missing={
                str(k): [str(key) for key in v or []]
                for k, v in (data.get("notable_missing") or {}).items()
            },
        )


def load_catalog_from_yaml(path: Path) -> CapabilityCatalog:
    """
    Load a capability catalog from a YAML file.

    Raises:
        ValueError: If the file does not hold a mapping
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Capability file {path} must contain a mapping")

    catalog = CapabilityCatalog.from_dict(data)
    logger.debug(f"Loaded {len(catalog.capabilities)} capabilities from {path}")
    return catalog


# Packaged catalog, loaded once
_default_catalog: Optional[CapabilityCatalog] = None


def get_catalog(path: Optional[Path] = None) -> CapabilityCatalog:
    """Get a catalog: the packaged one by default, or one loaded from ``path``."""
    global _default_catalog
    if path is not None:
        return load_catalog_from_yaml(Path(path))
    if _default_catalog is None:
        _default_catalog = load_catalog_from_yaml(DEFAULT_CATALOG_PATH)
    return _default_catalog
