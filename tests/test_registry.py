"""
Tests for the Matter cluster and device type registry.
"""

from matterscore.registry import (
    UNKNOWN_CLUSTER,
    UNKNOWN_DEVICE_TYPE,
    ClusterMetadata,
    ClusterType,
    DeviceTypeMetadata,
    MatterDeviceType,
    MatterRegistry,
    get_registry,
)


class TestClusterLookups:
    """Tests for cluster metadata lookups."""

    def test_known_cluster(self):
        """Test looking up a known cluster."""
        registry = MatterRegistry()
        metadata = registry.get_cluster_metadata(ClusterType.ON_OFF)

        assert metadata.known
        assert metadata.name == "On/Off"
        assert metadata.spec_version == "1.0"
        assert registry.is_known_cluster(0x0006)

    def test_unknown_cluster_returns_sentinel(self):
        """Test that a miss returns the sentinel instead of raising."""
        registry = MatterRegistry()
        metadata = registry.get_cluster_metadata(0x7777)

        assert metadata is UNKNOWN_CLUSTER
        assert not metadata.known
        assert not registry.is_known_cluster(0x7777)

    def test_cluster_name_fallback(self):
        """Test unknown clusters get a hex placeholder name."""
        registry = MatterRegistry()

        assert registry.get_cluster_name(0x0201) == "Thermostat"
        assert registry.get_cluster_name(0x7777) == "Cluster 0x7777"
        assert registry.get_cluster_spec_version(0x7777) is None

    def test_commands_and_attributes(self):
        """Test command and attribute listings."""
        registry = MatterRegistry()

        commands = registry.get_cluster_commands(ClusterType.ON_OFF)
        assert [c.id for c in commands[:3]] == [0x00, 0x01, 0x02]
        assert registry.get_cluster_command_name(0x0006, 0x02) == "Toggle"
        assert registry.get_cluster_attribute_name(0x0006, 0x0000) == "OnOff"
        assert registry.get_cluster_command_name(0x0006, 0x99) is None
        assert registry.get_cluster_commands(0x7777) == []

        metadata = registry.get_cluster_metadata(0x0006)
        assert metadata.mandatory_commands == [0x00, 0x01, 0x02]
        assert 0x4000 not in metadata.mandatory_attributes


class TestFeatureMaps:
    """Tests for FeatureMap decoding."""

    def test_has_feature(self):
        """Test checking individual feature bits."""
        registry = MatterRegistry()

        assert registry.has_feature(0x0201, "HEAT", 0b1)
        assert not registry.has_feature(0x0201, "COOL", 0b1)
        assert registry.has_feature(0x0201, "PRES", 1 << 8)

    def test_unknown_feature_code(self):
        """Test that unknown codes and clusters are never set."""
        registry = MatterRegistry()

        assert not registry.has_feature(0x0201, "NOPE", 0xFFFF)
        assert not registry.has_feature(0x7777, "HEAT", 0xFFFF)

    def test_decode_feature_map(self):
        """Test decoding a feature map into named features."""
        registry = MatterRegistry()
        decoded = registry.decode_feature_map(0x0201, 0b1001)

        enabled = [f["code"] for f in decoded if f["enabled"]]
        assert enabled == ["HEAT", "SCH"]
        assert decoded[0] == {"bit": 0, "code": "HEAT", "name": "Heating", "enabled": True}


class TestDeviceTypes:
    """Tests for device type lookups."""

    def test_known_device_type(self):
        """Test looking up a known device type."""
        registry = MatterRegistry()
        metadata = registry.get_device_type_metadata(MatterDeviceType.ON_OFF_LIGHT)

        assert metadata.name == "On/Off Light"
        assert metadata.category == "lighting"
        assert metadata.display_category == "Lights"
        assert metadata.scored
        assert ("server", 0x0006) in metadata.mandatory_capabilities

    def test_unknown_device_type(self):
        """Test that a miss returns the sentinel."""
        registry = MatterRegistry()

        assert registry.get_device_type_metadata(9999) is UNKNOWN_DEVICE_TYPE
        assert registry.get_device_type_name(9999) == "Device Type 9999"
        assert registry.get_device_type_category(9999) is None

    def test_system_types_not_scored(self):
        """Test that utility device types are flagged as not scored."""
        registry = MatterRegistry()

        for type_id in (0x0016, 0x0011, 0x0012, 0x0013, 0x000E):
            assert not registry.get_device_type_metadata(type_id).scored

        # Low IDs are not automatically system types
        assert registry.get_device_type_metadata(MatterDeviceType.DOOR_LOCK).scored
        assert registry.get_device_type_metadata(MatterDeviceType.FAN).scored

    def test_listing_by_category(self):
        """Test listing device types by category."""
        registry = MatterRegistry()
        lighting = {dt.id for dt in registry.get_device_types_by_category("lighting")}

        assert {0x0100, 0x0101, 0x010C, 0x010D} <= lighting
        assert "lighting" in registry.get_all_categories()
        assert "Lights" in registry.get_all_display_categories()
        assert all(
            dt.display_category == "Climate"
            for dt in registry.get_device_types_by_display_category("Climate")
        )

    def test_spec_versions_sorted(self):
        """Test that spec versions are sorted numerically."""
        registry = MatterRegistry()
        versions = registry.get_all_spec_versions()

        assert versions == sorted(versions, key=lambda v: tuple(int(p) for p in v.split(".")))
        assert versions[0] == "1.0"
        assert "1.3" in versions


class TestClusterGaps:
    """Tests for cluster gap analysis."""

    def test_missing_mandatory(self):
        """Test detecting a missing mandatory cluster."""
        registry = MatterRegistry()
        gaps = registry.analyze_cluster_gaps(0x0100, [0x0003, 0x0004, 0x0006], [])

        assert gaps.missing_mandatory_server == [0x0062]
        assert not gaps.is_compliant

    def test_optional_and_extra(self):
        """Test optional and extra cluster classification."""
        registry = MatterRegistry()
        gaps = registry.analyze_cluster_gaps(
            0x0100,
            [0x0003, 0x0004, 0x0006, 0x0062, 0x0008, 0x0091],
            [0x0406],
        )

        assert gaps.is_compliant
        assert gaps.implemented_optional_server == [0x0008]
        assert gaps.implemented_optional_client == [0x0406]
        assert gaps.extra_server == [0x0091]


class TestCustomRegistry:
    """Tests for registries built from custom tables."""

    def test_custom_tables(self):
        """Test a reduced registry."""
        registry = MatterRegistry(
            clusters={0x0006: ClusterMetadata(id=0x0006, name="Switch")},
            device_types={0x9000: DeviceTypeMetadata(id=0x9000, name="Widget")},
        )

        assert registry.get_cluster_name(0x0006) == "Switch"
        assert not registry.is_known_cluster(0x0008)
        assert registry.get_device_type_name(0x9000) == "Widget"
        assert registry.get_all_device_type_names() == {0x9000: "Widget"}

    def test_shared_registry(self):
        """Test the shared registry is reused."""
        assert get_registry() is get_registry()
