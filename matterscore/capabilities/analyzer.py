"""
Capability Analyzer - Translates Matter clusters into user-facing capabilities.

Takes the endpoints a device reports and answers "what can this device
do?" in terms people recognise (dimming, energy monitoring, scheduling)
rather than cluster IDs.

Support rules for a capability backed by one or more clusters:

    - ANY of its clusters present on the right role is enough, provided
    - at least one of the listed features is set in the FeatureMap, and
    - every listed attribute/command is implemented.

Devices that predate FeatureMap/AttributeList telemetry are given the
benefit of the doubt: if the data isn't there, presence of the cluster
counts as support.
"""

import logging
import math
import re
from typing import Dict, List, Optional, Sequence, Set

from ..config import CategoryConfig
from ..models import CLIENT, SERVER, ClusterInstance, Endpoint, parse_endpoints
from ..registry import MatterRegistry, get_registry
from ..registry.clusters import GLOBAL_ATTRIBUTE_MIN
from .catalog import CapabilityCatalog, CapabilityDefinition, ClusterRequirement, get_catalog
from .models import (
    AnalyzerResult,
    Capability,
    CapabilityDetails,
    CapabilitySummary,
    CategoryGroup,
    ClusterElementStatus,
)

logger = logging.getLogger(__name__)

MAX_STANDOUTS = 3
MAX_MISSING = 3


def humanize(name: str) -> str:
    """Turn a technical name like ``MoveToLevelWithOnOff`` into 'Move to level with on off'."""
    spaced = re.sub(r"([a-z])([A-Z])", r"\1 \2", name)
    spaced = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1 \2", spaced)
    spaced = spaced.lower()
    return spaced[:1].upper() + spaced[1:]


class _ClusterInventory:
    """Clusters present on a device, across all its endpoints."""

    def __init__(self, endpoints: List[Endpoint], registry: MatterRegistry):
        self.server: Set[int] = set()
        self.client: Set[int] = set()
        self.telemetry: Dict[int, ClusterInstance] = {}

        for endpoint in endpoints:
            for cluster in endpoint.clusters:
                if not registry.is_known_cluster(cluster.cluster_id):
                    logger.debug(
                        f"Endpoint {endpoint.endpoint_id}: unknown cluster 0x{cluster.cluster_id:04X}"
                    )
                if cluster.side == CLIENT:
                    self.client.add(cluster.cluster_id)
                    continue
                self.server.add(cluster.cluster_id)
                # Later endpoints overwrite earlier telemetry for the same cluster
                if _has_telemetry(cluster):
                    self.telemetry[cluster.cluster_id] = cluster

    def has(self, requirement: ClusterRequirement) -> bool:
        present = self.client if requirement.role == CLIENT else self.server
        return requirement.cluster_id in present

    def telemetry_for(self, requirement: ClusterRequirement) -> Optional[ClusterInstance]:
        if requirement.role != SERVER:
            return None
        return self.telemetry.get(requirement.cluster_id)


def _has_telemetry(cluster: ClusterInstance) -> bool:
    return (
        cluster.feature_map is not None
        or cluster.has_attribute_list
        or cluster.has_command_list
    )


class CapabilityAnalyzer:
    """
    Classifies a device's clusters into supported and unsupported capabilities.

    Holds no per-device state; one analyzer can serve any number of devices.
    """

    def __init__(
        self,
        catalog: Optional[CapabilityCatalog] = None,
        registry: Optional[MatterRegistry] = None,
        categories: Optional[CategoryConfig] = None,
    ):
        self.catalog = catalog or get_catalog()
        self.registry = registry or get_registry()
        self.categories = categories or CategoryConfig()

    def analyze(self, endpoints: Sequence) -> AnalyzerResult:
        """
        Analyze a device's endpoints.

        Raises:
            TypeError: If ``endpoints`` is not a list
        """
        parsed = parse_endpoints(endpoints)
        inventory = _ClusterInventory(parsed, self.registry)
        device_category = self.infer_device_category(parsed)
        relevant = self.catalog.relevant_for(device_category)

        supported: Dict[str, Capability] = {}
        unsupported: Dict[str, Capability] = {}
        grouped: Dict[str, CategoryGroup] = {}

        for key, definition in self.catalog.capabilities.items():
            if self.is_supported(definition, inventory):
                capability = self._capability(definition, inventory, with_details=True)
                supported[key] = capability
                self._group(grouped, definition.category).supported[key] = capability
            elif relevant is None or key in relevant:
                capability = self._capability(definition, inventory, with_details=False)
                unsupported[key] = capability
                self._group(grouped, definition.category).unsupported[key] = capability

        by_category = {
            category: grouped[category]
            for category in self.categories.sort_keys(list(grouped))
            if not grouped[category].is_empty
        }

        total = len(supported) + len(unsupported)
        percentage = int(math.floor(len(supported) / total * 100 + 0.5)) if total else 0

        return AnalyzerResult(
            supported=supported,
            unsupported=unsupported,
            by_category=by_category,
            summary=CapabilitySummary(total=total, supported=len(supported), percentage=percentage),
            standouts=self._standouts(supported),
            missing=self._missing(unsupported, device_category),
            device_category=device_category,
        )

    def infer_device_category(self, endpoints: List[Endpoint]) -> Optional[str]:
        """Category of the first application device type on a non-root endpoint."""
        for endpoint in endpoints:
            if endpoint.is_root:
                continue
            for device_type_id in endpoint.device_type_ids:
                metadata = self.registry.get_device_type_metadata(device_type_id)
                if metadata.known and metadata.scored:
                    return metadata.category
        return None

    def is_supported(self, definition: CapabilityDefinition, inventory: _ClusterInventory) -> bool:
        for requirement in definition.clusters:
            if not inventory.has(requirement):
                continue

            telemetry = inventory.telemetry_for(requirement)
            if telemetry is None:
                # No telemetry to check against
                return True

            if requirement.features and telemetry.feature_map is not None:
                if not any(
                    self.registry.has_feature(requirement.cluster_id, code, telemetry.feature_map)
                    for code in requirement.features
                ):
                    continue

            if requirement.attributes and telemetry.has_attribute_list:
                if not set(requirement.attributes) <= set(telemetry.attributes):
                    continue

            if requirement.commands and telemetry.has_command_list:
                if not set(requirement.commands) <= set(telemetry.commands):
                    continue

            return True

        return False

    def _capability(
        self,
        definition: CapabilityDefinition,
        inventory: _ClusterInventory,
        with_details: bool,
    ) -> Capability:
        spec_version = None
        if definition.primary_cluster_id is not None:
            spec_version = self.registry.get_cluster_spec_version(definition.primary_cluster_id)

        return Capability(
            key=definition.key,
            label=definition.label,
            emoji=definition.emoji,
            icon=definition.icon,
            description=definition.description,
            category=definition.category,
            spec_version=spec_version,
            details=self.build_details(definition, inventory) if with_details else None,
        )

    def _group(self, grouped: Dict[str, CategoryGroup], category: str) -> CategoryGroup:
        if category not in grouped:
            label = self.catalog.categories.get(category) or self.categories.label_for(category)
            grouped[category] = CategoryGroup(label=label)
        return grouped[category]

    # -------------------------------------------------------------------------
    # Details
    # -------------------------------------------------------------------------

    def build_details(
        self,
        definition: CapabilityDefinition,
        inventory: _ClusterInventory,
    ) -> Optional[CapabilityDetails]:
        """
        Spec versus implementation for the first present cluster of a capability.

        Each command and attribute the cluster defines is listed with
        ``implemented`` True/False when the device reported its lists, or
        None when it did not. Returns None when there is nothing to show.
        """
        requirement = next((r for r in definition.clusters if inventory.has(r)), None)
        if requirement is None:
            return None

        cluster_id = requirement.cluster_id
        telemetry = inventory.telemetry_for(requirement)
        accepted = set(telemetry.commands) if telemetry else set()
        attribute_list = set(telemetry.attributes) if telemetry else set()
        feature_map = telemetry.feature_map if telemetry else None

        actions = self._elements(
            cluster_id,
            spec=self.registry.get_cluster_commands(cluster_id),
            reported=accepted,
            friendly=definition.actions,
            fallback_prefix="Command",
            name_lookup=self.registry.get_cluster_command_name,
        )
        statuses = self._elements(
            cluster_id,
            spec=self.registry.get_cluster_attributes(cluster_id),
            reported={a for a in attribute_list if a < GLOBAL_ATTRIBUTE_MIN},
            friendly=definition.statuses,
            fallback_prefix="Attribute",
            name_lookup=self.registry.get_cluster_attribute_name,
        )

        features = []
        if feature_map:
            features = [
                f["name"]
                for f in self.registry.decode_feature_map(cluster_id, feature_map)
                if f["enabled"]
            ]

        if not actions and not statuses and not features:
            return None

        return CapabilityDetails(
            cluster_id=cluster_id,
            cluster_name=self.registry.get_cluster_name(cluster_id),
            spec_version=self.registry.get_cluster_spec_version(cluster_id),
            actions=actions,
            statuses=statuses,
            features=features,
        )

    def _elements(
        self,
        cluster_id: int,
        spec,
        reported: Set[int],
        friendly: Dict[int, str],
        fallback_prefix: str,
        name_lookup,
    ) -> List[ClusterElementStatus]:
        # Full spec list, marked against telemetry when we have it
        if spec:
            return [
                ClusterElementStatus(
                    id=element.id,
                    technical=element.name,
                    friendly=friendly.get(element.id) or humanize(element.name),
                    implemented=(element.id in reported) if reported else None,
                    optional=element.optional,
                )
                for element in spec
            ]

        # No spec data: show what the device reported
        if reported:
            elements = []
            for element_id in sorted(reported):
                technical = name_lookup(cluster_id, element_id) or f"{fallback_prefix} {element_id}"
                elements.append(ClusterElementStatus(
                    id=element_id,
                    technical=technical,
                    friendly=friendly.get(element_id) or humanize(technical),
                    implemented=True,
                ))
            return elements

        # Neither: fall back to the capability's own friendly names
        return [
            ClusterElementStatus(
                id=element_id,
                technical=name_lookup(cluster_id, element_id) or f"{fallback_prefix} {element_id}",
                friendly=name,
                implemented=None,
            )
            for element_id, name in friendly.items()
        ]

    # -------------------------------------------------------------------------
    # Highlights
    # -------------------------------------------------------------------------

    def _standouts(self, supported: Dict[str, Capability]) -> List[str]:
        labels = [supported[key].label for key in self.catalog.standouts if key in supported]
        return labels[:MAX_STANDOUTS]

    def _missing(self, unsupported: Dict[str, Capability], device_category: Optional[str]) -> List[str]:
        labels = [
            unsupported[key].label
            for key in self.catalog.missing_candidates(device_category)
            if key in unsupported
        ]
        return labels[:MAX_MISSING]


def analyze_capabilities(
    endpoints: Sequence,
    catalog: Optional[CapabilityCatalog] = None,
    registry: Optional[MatterRegistry] = None,
    categories: Optional[CategoryConfig] = None,
) -> AnalyzerResult:
    """Analyze a device's endpoints with a one-off analyzer."""
    return CapabilityAnalyzer(catalog=catalog, registry=registry, categories=categories).analyze(endpoints)
