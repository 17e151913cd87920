"""
Tests for endpoint and device snapshot parsing.
"""

import pytest

from matterscore.models import (
    CLIENT,
    SERVER,
    ClusterInstance,
    DeviceSnapshot,
    Endpoint,
    parse_endpoints,
    parse_int,
)


class TestParseInt:
    """Tests for telemetry value coercion."""

    def test_values(self):
        """Test the accepted value shapes."""
        assert parse_int(6) == 6
        assert parse_int("0x0201") == 0x0201
        assert parse_int("12") == 12
        assert parse_int({"id": 256}) == 256

    def test_rejects(self):
        """Test values that are not cluster ids."""
        assert parse_int(True) is None
        assert parse_int("abc") is None
        assert parse_int(None) is None
        assert parse_int(1.5) is None


class TestEndpointParsing:
    """Tests for Endpoint.from_dict."""

    def test_raw_telemetry_row(self):
        """Test the raw telemetry row shape."""
        endpoint = Endpoint.from_dict({
            "endpoint_id": 1,
            "device_types": [{"id": 257}],
            "server_clusters": [3, 6, 8],
            "client_clusters": [0x0406],
            "server_cluster_details": [
                {"id": 8, "feature_map": 3, "accepted_command_list": [0, 1], "attribute_list": [0]},
            ],
        })

        assert endpoint.endpoint_id == 1
        assert endpoint.device_type_id == 257
        assert endpoint.server_cluster_ids() == [3, 6, 8]
        assert endpoint.client_cluster_ids() == [0x0406]

        level = endpoint.get_cluster(8)
        assert level.feature_map == 3
        assert level.commands == [0, 1]
        assert level.attributes == [0]
        assert endpoint.get_cluster(6).feature_map is None
        assert endpoint.has_cluster(0x0406, CLIENT)
        assert not endpoint.has_cluster(0x0406, SERVER)

    def test_explicit_clusters_row(self):
        """Test the explicit clusters row shape."""
        endpoint = Endpoint.from_dict({
            "endpoint_id": 2,
            "device_type_id": 0x0301,
            "clusters": [
                {"cluster_id": 0x0201, "side": "server", "feature_map": 1},
                {"cluster_id": 0x0202, "side": "client"},
            ],
        })

        assert endpoint.device_type_ids == [0x0301]
        assert endpoint.server_cluster_ids() == [0x0201]
        assert endpoint.client_cluster_ids() == [0x0202]

    def test_malformed_cluster_list(self):
        """Test that an invalid cluster list yields no clusters."""
        endpoint = Endpoint.from_dict({
            "endpoint_id": 1,
            "device_types": [256],
            "server_clusters": "not-a-list",
        })

        assert endpoint.clusters == []
        assert endpoint.device_type_id == 256

    def test_malformed_entries_skipped(self):
        """Test that unparseable entries are skipped, not fatal."""
        endpoint = Endpoint.from_dict({
            "endpoint_id": 1,
            "clusters": [{"cluster_id": 6}, {"side": "server"}, "junk"],
        })

        assert [c.cluster_id for c in endpoint.clusters] == [6]

    def test_missing_cluster_list(self):
        """Test an endpoint with no cluster data at all."""
        endpoint = Endpoint.from_dict({"endpoint_id": 0, "device_types": [22]})

        assert endpoint.is_root
        assert endpoint.clusters == []

    def test_cluster_side_defaults_to_server(self):
        """Test unknown sides fall back to server."""
        cluster = ClusterInstance.from_dict({"id": 6, "side": "sideways"})

        assert cluster.side == SERVER
        assert ClusterInstance.from_dict({"side": "server"}) is None


class TestParseEndpoints:
    """Tests for parse_endpoints."""

    def test_mixed_rows(self):
        """Test dict rows and Endpoint objects together."""
        existing = Endpoint(endpoint_id=5, device_type_ids=[256])
        endpoints = parse_endpoints([existing, {"endpoint_id": 1}, 42])

        assert endpoints[0] is existing
        assert endpoints[1].endpoint_id == 1
        assert len(endpoints) == 2

    def test_not_a_list(self):
        """Test that a non-list is a call error."""
        with pytest.raises(TypeError):
            parse_endpoints({"endpoint_id": 1})

        with pytest.raises(TypeError):
            parse_endpoints(None)


class TestDeviceSnapshot:
    """Tests for DeviceSnapshot."""

    def test_versions(self):
        """Test a multi-version snapshot."""
        device = DeviceSnapshot.from_dict({
            "slug": "acme-bulb",
            "name": "Acme Bulb",
            "versions": [
                {"software_version": "2.0", "endpoints": [{"endpoint_id": 1, "device_types": [256]}]},
                {"software_version": "1.0", "endpoints": []},
            ],
        })

        assert device.display_name == "Acme Bulb"
        assert device.latest_version.software_version == "2.0"
        assert device.latest_endpoints[0].device_type_id == 256

    def test_top_level_endpoints(self):
        """Test that top-level endpoints become a single version."""
        device = DeviceSnapshot.from_dict({
            "slug": "plug",
            "endpoints": [{"endpoint_id": 1, "device_types": [266]}],
        })

        assert len(device.versions) == 1
        assert device.display_name == "plug"
        assert device.latest_endpoints[0].device_type_id == 266

    def test_round_trip(self):
        """Test snapshot serialization."""
        device = DeviceSnapshot.from_dict({
            "slug": "bulb",
            "versions": [{
                "software_version": "1",
                "endpoints": [{
                    "endpoint_id": 1,
                    "device_types": [256],
                    "server_clusters": [3, 6],
                    "client_clusters": [],
                }],
            }],
        })

        assert DeviceSnapshot.from_dict(device.to_dict()) == device
