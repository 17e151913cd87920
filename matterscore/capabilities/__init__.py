"""
Capability analysis - What a device can do, in plain terms.
"""

from .models import (
    AnalyzerResult,
    Capability,
    CapabilityDetails,
    CapabilitySummary,
    CategoryGroup,
    ClusterElementStatus,
)
from .catalog import (
    CapabilityCatalog,
    CapabilityDefinition,
    ClusterRequirement,
    get_catalog,
    load_catalog_from_yaml,
)
from .analyzer import (
    CapabilityAnalyzer,
    analyze_capabilities,
    humanize,
)

__all__ = [
    # Models
    "AnalyzerResult",
    "Capability",
    "CapabilityDetails",
    "CapabilitySummary",
    "CategoryGroup",
    "ClusterElementStatus",
    # Catalog
    "CapabilityCatalog",
    "CapabilityDefinition",
    "ClusterRequirement",
    "get_catalog",
    "load_catalog_from_yaml",
    # Analyzer
    "CapabilityAnalyzer",
    "analyze_capabilities",
    "humanize",
]
