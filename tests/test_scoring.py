"""
Tests for device compliance scoring.
"""

import json

import pytest

from matterscore.config import ScoringConfig
from matterscore.models import DeviceVersion, parse_endpoints
from matterscore.registry import ClusterMetadata, DeviceTypeMetadata, MatterRegistry
from matterscore.scoring import (
    DeviceScore,
    DeviceScoreEngine,
    DeviceTypeScore,
    calculate_device_score,
    rank_devices,
    score_to_stars,
)


def light(server, client=(), endpoint_id=1, device_type=0x0100):
    return {
        "endpoint_id": endpoint_id,
        "device_types": [device_type],
        "server_clusters": list(server),
        "client_clusters": list(client),
    }


ROOT = {"endpoint_id": 0, "device_types": [0x0016], "server_clusters": [0x001D, 0x0028], "client_clusters": []}
LIGHT_MANDATORY = [0x0003, 0x0004, 0x0006, 0x0062]


class TestStars:
    """Tests for the score to star conversion."""

    def test_rounding(self):
        """Test half-up rounding at star boundaries."""
        assert score_to_stars(0) == 0
        assert score_to_stars(9.9) == 0
        assert score_to_stars(10) == 1
        assert score_to_stars(30) == 2
        assert score_to_stars(50) == 3
        assert score_to_stars(70) == 4
        assert score_to_stars(100) == 5

    def test_clamped(self):
        """Test out-of-range scores are clamped."""
        assert score_to_stars(-10) == 0
        assert score_to_stars(250) == 5


class TestDeviceTypeScore:
    """Tests for scoring a single device type."""

    def test_mandatory_only(self):
        """Test a light with every mandatory cluster and no optional ones."""
        score = calculate_device_score([ROOT, light(LIGHT_MANDATORY)])
        type_score = score.scores_by_type[0x0100]

        assert type_score.mandatory_score == 100.0
        assert type_score.optional_score == 0.0
        assert type_score.score == 70.0
        assert type_score.star_rating == 4
        assert type_score.is_compliant
        assert type_score.device_type_name == "On/Off Light"

    def test_full_marks(self):
        """Test a light with every mandatory and optional cluster."""
        score = calculate_device_score([light(LIGHT_MANDATORY + [0x0008], client=[0x0406])])

        assert score.overall_score == 100.0
        assert score.star_rating == 5.0

    def test_half_mandatory(self):
        """Test a type requiring {X, Y} with only X present."""
        registry = MatterRegistry(
            clusters={
                0x0006: ClusterMetadata(id=0x0006, name="On/Off"),
                0x0008: ClusterMetadata(id=0x0008, name="Level Control"),
            },
            device_types={
                0x9000: DeviceTypeMetadata(id=0x9000, name="Widget", mandatory_server_clusters=(0x0006, 0x0008)),
            },
        )
        score = calculate_device_score([light([0x0006], device_type=0x9000)], registry=registry)
        type_score = score.scores_by_type[0x9000]

        assert type_score.mandatory_score == 50.0
        assert not type_score.is_compliant
        assert score.overall_score == 35.0
        assert not score.is_compliant

    def test_nothing_mandatory(self):
        """Test that a type with no mandatory clusters scores full mandatory marks."""
        registry = MatterRegistry(
            clusters={},
            device_types={0x9001: DeviceTypeMetadata(id=0x9001, name="Bare")},
        )
        score = calculate_device_score([light([], device_type=0x9001)], registry=registry)
        type_score = score.scores_by_type[0x9001]

        assert type_score.mandatory_score == 100.0
        assert type_score.optional_score == 0.0
        assert type_score.score == 70.0
        assert type_score.is_compliant

    def test_client_bonus(self):
        """Test the thermostat's key client cluster bonus."""
        thermostat = {"endpoint_id": 1, "device_types": [0x0301], "server_clusters": [0x0003, 0x0201]}
        without = calculate_device_score([{**thermostat, "client_clusters": []}])
        with_clients = calculate_device_score([{**thermostat, "client_clusters": [0x0202, 0x0402]}])

        assert without.overall_score == 70.0
        assert with_clients.scores_by_type[0x0301].client_bonus == 5.0
        assert with_clients.overall_score == 81.7

    def test_partial_client_bonus(self):
        """Test the bonus scales with the share of key clients present."""
        score = calculate_device_score([{
            "endpoint_id": 1,
            "device_types": [0x0301],
            "server_clusters": [0x0003, 0x0201],
            "client_clusters": [0x0202],
        }])

        assert score.scores_by_type[0x0301].client_bonus == 2.5
        assert score.overall_score == 75.8

    def test_custom_weights(self):
        """Test that weights come from the scoring config."""
        config = ScoringConfig(mandatory_weight=1.0, optional_weight=0.0)
        score = calculate_device_score([light(LIGHT_MANDATORY)], config=config)

        assert score.overall_score == 100.0

    def test_breakdown(self):
        """Test the itemized breakdown."""
        score = calculate_device_score([light(LIGHT_MANDATORY)])
        breakdown = score.scores_by_type[0x0100].breakdown

        mandatory = [item for item in breakdown if item.required]
        assert len(mandatory) == 4
        assert all(item.present and item.contribution == 17.5 for item in mandatory)
        assert mandatory[0].capability_key == "server:0x0003"

        optional = [item for item in breakdown if not item.required]
        assert {item.capability_key for item in optional} == {"server:0x0008", "client:0x0406"}
        assert all(not item.present and item.contribution == 0.0 for item in optional)

        assert sum(item.contribution for item in breakdown) == pytest.approx(70.0)


class TestDeviceScore:
    """Tests for whole-device scoring."""

    def test_empty_input(self):
        """Test that no endpoints give the zero score."""
        assert calculate_device_score([]) == DeviceScore(0.0, 0.0, False, {})
        assert calculate_device_score([]) == DeviceScore.empty()

    def test_only_system_types(self):
        """Test that root node and other utility types are not scored."""
        score = calculate_device_score([ROOT])

        assert score == DeviceScore.empty()

    def test_unknown_device_type_skipped(self):
        """Test that unknown device types are skipped, not fatal."""
        score = calculate_device_score([light([0x0006], device_type=0xFFF0), light(LIGHT_MANDATORY, endpoint_id=2)])

        assert list(score.scores_by_type) == [0x0100]

    def test_endpoints_grouped_by_type(self):
        """Test that clusters are unioned across endpoints of the same type."""
        score = calculate_device_score([
            light([0x0003, 0x0004], endpoint_id=1),
            light([0x0006, 0x0062], endpoint_id=2),
        ])

        assert list(score.scores_by_type) == [0x0100]
        assert score.is_compliant
        assert score.overall_score == 70.0

    def test_best_type_wins(self):
        """Test overall score comes from the best scoring type."""
        sensor = {"endpoint_id": 2, "device_types": [0x0302], "server_clusters": [0x0003, 0x0004, 0x0402]}
        score = calculate_device_score([light(LIGHT_MANDATORY), sensor])

        assert list(score.scores_by_type) == [0x0100, 0x0302]
        assert score.overall_score == 100.0
        assert score.best_type_score().device_type_id == 0x0302

    def test_first_type_wins_ties(self):
        """Test the first seen type wins a tie."""
        sensor = {"endpoint_id": 2, "device_types": [0x0302], "server_clusters": [0x0003, 0x0402]}
        score = calculate_device_score([light(LIGHT_MANDATORY), sensor])

        assert score.best_type_score().device_type_id == 0x0100

    def test_compliance_is_and(self):
        """Test one non-compliant type makes the device non-compliant."""
        contact = {"endpoint_id": 2, "device_types": [0x0015], "server_clusters": [0x0003]}
        score = calculate_device_score([light(LIGHT_MANDATORY), contact])

        assert score.overall_score == 70.0
        assert score.scores_by_type[0x0100].is_compliant
        assert not score.is_compliant

    def test_not_a_list(self):
        """Test that non-list input is a call error."""
        with pytest.raises(TypeError):
            calculate_device_score({"endpoint_id": 1})

    def test_parsed_endpoints(self):
        """Test already-parsed endpoints are accepted."""
        endpoints = parse_endpoints([light(LIGHT_MANDATORY)])

        assert calculate_device_score(endpoints).overall_score == 70.0


class TestScoreProperties:
    """Tests for properties that hold for every input."""

    SAMPLES = [
        [],
        [light([])],
        [light([0x0006])],
        [light(LIGHT_MANDATORY)],
        [light(LIGHT_MANDATORY + [0x0008], client=[0x0406])],
        [{"endpoint_id": 1, "device_types": [0x0301], "server_clusters": [0x0201], "client_clusters": [0x0202, 0x0402]}],
        [light([0x0003], device_type=0x0104)],
    ]

    def test_bounds(self):
        """Test scores and stars stay in range."""
        for sample in self.SAMPLES:
            score = calculate_device_score(sample)
            assert 0.0 <= score.overall_score <= 100.0
            assert 0.0 <= score.star_rating <= 5.0
            for type_score in score.scores_by_type.values():
                assert 0.0 <= type_score.score <= 100.0
                assert 0 <= type_score.star_rating <= 5

    def test_monotonic(self):
        """Test adding clusters never lowers a score."""
        clusters = []
        previous = calculate_device_score([light(clusters)]).overall_score
        for cluster_id in LIGHT_MANDATORY + [0x0008, 0x0091]:
            clusters.append(cluster_id)
            current = calculate_device_score([light(clusters)]).overall_score
            assert current >= previous
            previous = current

        with_client = calculate_device_score([light(clusters, client=[0x0406])]).overall_score
        assert with_client >= previous

    def test_idempotent(self):
        """Test the same input always gives the same score."""
        engine = DeviceScoreEngine()
        for sample in self.SAMPLES:
            assert engine.calculate_device_score(sample) == engine.calculate_device_score(sample)

    def test_hashable(self):
        """Test scores can be hashed and equal scores hash alike."""
        engine = DeviceScoreEngine()
        for sample in self.SAMPLES:
            first = engine.calculate_device_score(sample)
            second = engine.calculate_device_score(sample)

            assert hash(first) == hash(second)
            assert len({first, second}) == 1

    def test_round_trip(self):
        """Test to_dict/from_dict round trips, also through JSON."""
        for sample in self.SAMPLES:
            score = calculate_device_score(sample)
            assert DeviceScore.from_dict(score.to_dict()) == score
            assert DeviceScore.from_dict(json.loads(json.dumps(score.to_dict()))) == score

            for type_score in score.scores_by_type.values():
                assert DeviceTypeScore.from_dict(type_score.to_dict()) == type_score


class TestVersions:
    """Tests for best-version detection."""

    def _versions(self, *cluster_sets):
        return [
            DeviceVersion(software_version=f"{len(cluster_sets) - i}.0", endpoints=parse_endpoints([light(c)]))
            for i, c in enumerate(cluster_sets)
        ]

    def test_better_older_version(self):
        """Test an older version that scores well above the latest."""
        engine = DeviceScoreEngine()
        versions = self._versions(LIGHT_MANDATORY, LIGHT_MANDATORY + [0x0008])

        assert engine.find_best_version(versions) == "1.0"

        score = engine.calculate_latest_version_score(versions)
        assert score.overall_score == 70.0
        assert score.best_version == "1.0"

    def test_within_margin(self):
        """Test that small differences don't flag a best version."""
        engine = DeviceScoreEngine(config=ScoringConfig(best_version_margin=20.0))
        versions = self._versions(LIGHT_MANDATORY, LIGHT_MANDATORY + [0x0008])

        assert engine.find_best_version(versions) is None

    def test_latest_is_best(self):
        """Test no best version when the latest scores highest."""
        engine = DeviceScoreEngine()
        versions = self._versions(LIGHT_MANDATORY + [0x0008], LIGHT_MANDATORY)

        assert engine.find_best_version(versions) is None

    def test_single_version(self):
        """Test a single version never has a better one."""
        engine = DeviceScoreEngine()

        assert engine.find_best_version(self._versions(LIGHT_MANDATORY)) is None
        assert engine.calculate_latest_version_score([]) == DeviceScore.empty()


class TestRanking:
    """Tests for ranking devices by device type."""

    def test_rank(self):
        """Test ordering and shared ranks for ties."""
        engine = DeviceScoreEngine()
        scores = {
            "a": engine.calculate_device_score([light(LIGHT_MANDATORY)]),
            "b": engine.calculate_device_score([light(LIGHT_MANDATORY + [0x0008], client=[0x0406])]),
            "c": engine.calculate_device_score([
                {"endpoint_id": 1, "device_types": [0x0302], "server_clusters": [0x0003, 0x0402]},
            ]),
            "d": engine.calculate_device_score([light(LIGHT_MANDATORY)]),
        }

        ranked = rank_devices(scores, 0x0100)

        assert [(r.slug, r.rank) for r in ranked] == [("b", 1), ("a", 2), ("d", 2)]
        assert ranked[0].type_score.device_type_id == 0x0100

    def test_no_matches(self):
        """Test ranking a type nobody implements."""
        assert rank_devices({"a": DeviceScore.empty()}, 0x0100) == []
