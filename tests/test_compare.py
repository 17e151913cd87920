"""
Tests for side-by-side device comparison.
"""

from matterscore.capabilities import (
    AnalyzerResult,
    Capability,
    CapabilityDetails,
    CategoryGroup,
    analyze_capabilities,
)
from matterscore.compare import aggregate_capabilities, select_devices, support_matrix
from matterscore.config import CategoryConfig


DETAILS = CapabilityDetails(cluster_id=0x0008, cluster_name="Level Control")


def capability(key, category, label=None, details=None, spec_version="1.0"):
    return Capability(
        key=key,
        label=label or key.title(),
        category=category,
        spec_version=spec_version,
        details=details,
    )


def result(supported=(), unsupported=(), labels=None):
    """Build an AnalyzerResult from lists of capabilities."""
    labels = labels or {}
    by_category = {}
    for cap in supported:
        group = by_category.setdefault(cap.category, CategoryGroup(label=labels.get(cap.category, cap.category)))
        group.supported[cap.key] = cap
    for cap in unsupported:
        group = by_category.setdefault(cap.category, CategoryGroup(label=labels.get(cap.category, cap.category)))
        group.unsupported[cap.key] = cap

    return AnalyzerResult(
        supported={c.key: c for c in supported},
        unsupported={c.key: c for c in unsupported},
        by_category=by_category,
    )


class TestAggregate:
    """Tests for aggregate_capabilities."""

    def test_empty(self):
        """Test no devices gives no categories."""
        assert aggregate_capabilities({}) == {}

    def test_union_of_capabilities(self):
        """Test rows are the union across devices."""
        devices = {
            "a": result(supported=[capability("on_off", "controls")]),
            "b": result(supported=[capability("energy", "monitoring")]),
        }
        aggregated = aggregate_capabilities(devices)

        assert list(aggregated) == ["controls", "monitoring"]
        assert list(aggregated["controls"].capabilities) == ["on_off"]
        assert list(aggregated["monitoring"].capabilities) == ["energy"]

    def test_first_occurrence_wins(self):
        """Test metadata comes from the first device listing a capability."""
        devices = {
            "a": result(unsupported=[capability("dimming", "controls", label="Dimming", spec_version="1.0")]),
            "b": result(supported=[capability("dimming", "controls", label="Brightness", spec_version="1.4")]),
        }
        meta = aggregate_capabilities(devices)["controls"].capabilities["dimming"]

        assert meta.label == "Dimming"
        assert meta.spec_version == "1.0"

    def test_has_details_upgraded(self):
        """Test has_details is set when any device supports with details."""
        devices = {
            "a": result(unsupported=[capability("dimming", "controls")]),
            "b": result(supported=[capability("dimming", "controls", details=DETAILS)]),
        }
        meta = aggregate_capabilities(devices)["controls"].capabilities["dimming"]

        assert meta.has_details

    def test_no_details_anywhere(self):
        """Test has_details stays False without details."""
        devices = {
            "a": result(supported=[capability("binding", "automation")]),
            "b": result(unsupported=[capability("binding", "automation")]),
        }
        meta = aggregate_capabilities(devices)["automation"].capabilities["binding"]

        assert not meta.has_details

    def test_category_order(self):
        """Test canonical order with unknown categories last."""
        devices = {
            "a": result(supported=[
                capability("widget", "gadgets"),
                capability("lock", "security"),
                capability("on_off", "controls"),
            ]),
        }

        assert list(aggregate_capabilities(devices)) == ["controls", "security", "gadgets"]

    def test_custom_order(self):
        """Test a custom category order."""
        devices = {
            "a": result(supported=[capability("on_off", "controls"), capability("lock", "security")]),
        }
        categories = CategoryConfig(order=["security", "controls"])

        assert list(aggregate_capabilities(devices, categories)) == ["security", "controls"]

    def test_labels(self):
        """Test labels come from the analyzer results first."""
        devices = {
            "a": result(
                supported=[capability("on_off", "controls")],
                labels={"controls": "Switches"},
            ),
        }
        assert aggregate_capabilities(devices)["controls"].label == "Switches"

    def test_label_fallback(self):
        """Test configured labels for categories with an empty label."""
        devices = {
            "a": result(
                supported=[capability("on_off", "controls"), capability("widget", "gadgets")],
                labels={"controls": "", "gadgets": ""},
            ),
        }
        aggregated = aggregate_capabilities(devices)

        assert aggregated["controls"].label == "Controls"
        assert aggregated["gadgets"].label == "Gadgets"

    def test_deterministic(self):
        """Test the same input gives the same output."""
        devices = {
            "a": result(supported=[capability("on_off", "controls")], unsupported=[capability("dimming", "controls")]),
            "b": result(supported=[capability("energy", "monitoring")]),
        }
        first = {k: v.to_dict() for k, v in aggregate_capabilities(devices).items()}
        second = {k: v.to_dict() for k, v in aggregate_capabilities(devices).items()}

        assert first == second

    def test_real_devices(self):
        """Test aggregating analyzer output for two lights."""
        plain = analyze_capabilities([{
            "endpoint_id": 1, "device_types": [0x0100], "server_clusters": [0x0006],
        }])
        dimmable = analyze_capabilities([{
            "endpoint_id": 1, "device_types": [0x0101], "server_clusters": [0x0006, 0x0008],
        }])
        aggregated = aggregate_capabilities({"plain": plain, "dimmable": dimmable})

        assert aggregated["controls"].label == "Controls"
        assert aggregated["controls"].capabilities["dimming"].has_details


class TestSupportMatrix:
    """Tests for support_matrix."""

    def test_values(self):
        """Test supported, unsupported and unlisted cells."""
        devices = {
            "a": result(supported=[capability("on_off", "controls")], unsupported=[capability("dimming", "controls")]),
            "b": result(supported=[capability("dimming", "controls")]),
        }
        matrix = support_matrix(devices)

        assert matrix["on_off"] == {"a": True, "b": None}
        assert matrix["dimming"] == {"a": False, "b": True}
        assert list(matrix) == ["on_off", "dimming"]


class TestSelectDevices:
    """Tests for select_devices."""

    def test_dedupe_and_trim(self):
        """Test blanks and duplicates are dropped."""
        assert select_devices([" a ", "b", "", "a", "  "]) == ["a", "b"]

    def test_limit(self):
        """Test at most the limit is kept, in order."""
        slugs = ["a", "b", "c", "d", "e", "f", "g"]

        assert select_devices(slugs) == ["a", "b", "c", "d", "e"]
        assert select_devices(slugs, limit=2) == ["a", "b"]
