"""
Compare Aggregator - Merges several devices' capabilities into one table.

Rows are the union of every capability any compared device lists
(supported or not), grouped by category; columns are devices.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..capabilities.models import AnalyzerResult, Capability
from ..config import CategoryConfig

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEVICES = 5


@dataclass
class CapabilityMeta:
    """A comparison row: one capability, independent of any device."""
    key: str
    label: str
    emoji: str = ""
    category: str = "other"
    spec_version: Optional[str] = None
    has_details: bool = False

    @classmethod
    def from_capability(cls, capability: Capability, has_details: bool) -> "CapabilityMeta":
        return cls(
            key=capability.key,
            label=capability.label,
            emoji=capability.emoji,
            category=capability.category,
            spec_version=capability.spec_version,
            has_details=has_details,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "label": self.label,
            "emoji": self.emoji,
            "category": self.category,
            "spec_version": self.spec_version,
            "has_details": self.has_details,
        }


@dataclass
class AggregatedCategory:
    label: str
    capabilities: Dict[str, CapabilityMeta] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "capabilities": {k: c.to_dict() for k, c in self.capabilities.items()},
        }


def aggregate_capabilities(
    device_capabilities: Mapping[str, AnalyzerResult],
    categories: Optional[CategoryConfig] = None,
) -> Dict[str, AggregatedCategory]:
    """
    Merge per-device analyzer results into category -> capability rows.

    Two passes:

        1. Collect metadata. The first device to list a capability
           (supported or unsupported) supplies its metadata.
        2. Mark ``has_details`` for any capability some device supports
           with details.

    Categories come out in canonical order, unknown ones after them in the
    order they were first seen. Device count is not checked here; callers
    limit it (see ``select_devices``).
    """
    categories = categories or CategoryConfig()

    metas: Dict[str, CapabilityMeta] = {}
    category_labels: Dict[str, str] = {}

    # Pass 1: first occurrence wins
    for result in device_capabilities.values():
        for category_key, group in result.by_category.items():
            category_labels.setdefault(category_key, group.label)

            for key, capability in group.supported.items():
                if key not in metas:
                    metas[key] = CapabilityMeta.from_capability(capability, capability.has_details)

            for key, capability in group.unsupported.items():
                if key not in metas:
                    metas[key] = CapabilityMeta.from_capability(capability, False)

    # Pass 2: upgrade has_details
    for result in device_capabilities.values():
        for key, capability in result.supported.items():
            if capability.has_details and key in metas:
                metas[key].has_details = True

    grouped: Dict[str, AggregatedCategory] = {}
    for key, meta in metas.items():
        if meta.category not in grouped:
            label = category_labels.get(meta.category) or categories.label_for(meta.category)
            grouped[meta.category] = AggregatedCategory(label=label)
        grouped[meta.category].capabilities[key] = meta

    return {key: grouped[key] for key in categories.sort_keys(list(grouped))}


def support_matrix(
    device_capabilities: Mapping[str, AnalyzerResult],
) -> Dict[str, Dict[str, Optional[bool]]]:
    """
    Capability key -> {device slug: support}.

    Support is True (supported), False (listed as unsupported) or None
    (not listed for that device at all, e.g. irrelevant to its category).
    """
    keys: Dict[str, None] = {}
    for result in device_capabilities.values():
        for key in list(result.supported) + list(result.unsupported):
            keys.setdefault(key, None)

    matrix: Dict[str, Dict[str, Optional[bool]]] = {}
    for key in keys:
        row: Dict[str, Optional[bool]] = {}
        for slug, result in device_capabilities.items():
            if key in result.supported:
                row[slug] = True
            elif key in result.unsupported:
                row[slug] = False
            else:
                row[slug] = None
        matrix[key] = row
    return matrix


def select_devices(slugs: Iterable[str], limit: int = DEFAULT_MAX_DEVICES) -> List[str]:
    """Trim blanks and duplicates from a list of slugs and keep at most ``limit``."""
    selected: List[str] = []
    for slug in slugs:
        slug = slug.strip()
        if not slug or slug in selected:
            continue
        selected.append(slug)

    if len(selected) > limit:
        logger.warning(f"Comparing the first {limit} of {len(selected)} devices")
    return selected[:limit]
