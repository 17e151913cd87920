"""
Device Score Engine - Compliance scoring for Matter devices.

Scores each device type a device implements by how many of the type's
mandatory and optional clusters are present, plus a small bonus for key
client (controller) clusters, then summarizes the device by its best type.

    score = mandatory% * W_m + optional% * W_o + client_bonus   (clamped to 0-100)

The weights live in ScoringConfig (70/30 and a 5 point bonus by default).
Every term only grows as clusters are added, so adding a capability never
lowers a score.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from ..config import ScoringConfig
from ..models import CLIENT, SERVER, DeviceSnapshot, DeviceVersion, parse_endpoints
from ..registry import MatterRegistry, get_registry
from .models import BreakdownItem, DeviceScore, DeviceTypeScore

logger = logging.getLogger(__name__)

MAX_SCORE = 100.0
MAX_STARS = 5


def score_to_stars(score: float) -> int:
    """
    Convert a 0-100 score to a 0-5 star rating.

    Each star is worth 20 points; halves round up.
    """
    stars = int(math.floor(score / 20.0 + 0.5))
    return max(0, min(MAX_STARS, stars))


def _percentage(present: int, total: int, default: float) -> float:
    if total == 0:
        return default
    return present / total * 100.0


@dataclass
class RankedDevice:
    """A device's position in a per-device-type ranking."""
    slug: str
    rank: int
    score: DeviceScore
    type_score: DeviceTypeScore


class DeviceScoreEngine:
    """
    Computes DeviceScores from endpoint data.

    Stateless apart from its registry and weights: the same endpoints always
    produce the same score, so results are safe to cache and to compute
    concurrently.
    """

    def __init__(
        self,
        registry: Optional[MatterRegistry] = None,
        config: Optional[ScoringConfig] = None,
    ):
        self.registry = registry or get_registry()
        self.config = config or ScoringConfig()

    def calculate_device_score(self, endpoints: Sequence) -> DeviceScore:
        """
        Calculate the overall score for a device from its endpoints.

        Endpoints are grouped by device type (first-seen order); each group's
        clusters are the union over its endpoints. Unknown and system device
        types are skipped. With nothing left to score, returns
        ``DeviceScore.empty()``.

        Args:
            endpoints: Endpoint objects or raw endpoint rows

        Raises:
            TypeError: If ``endpoints`` is not a list
        """
        parsed = parse_endpoints(endpoints)

        groups: Dict[int, Tuple[Set[int], Set[int]]] = {}
        for endpoint in parsed:
            for device_type_id in endpoint.device_type_ids:
                server, client = groups.setdefault(device_type_id, (set(), set()))
                server.update(endpoint.server_cluster_ids())
                client.update(endpoint.client_cluster_ids())

        scores_by_type: Dict[int, DeviceTypeScore] = {}
        for device_type_id, (server, client) in groups.items():
            metadata = self.registry.get_device_type_metadata(device_type_id)
            if not metadata.known:
                logger.debug(f"Skipping unknown device type {device_type_id}")
                continue
            if not metadata.scored:
                continue
            scores_by_type[device_type_id] = self.calculate_device_type_score(
                device_type_id, server, client
            )

        if not scores_by_type:
            return DeviceScore.empty()

        # First type wins ties
        best = None
        for type_score in scores_by_type.values():
            if best is None or type_score.score > best.score:
                best = type_score

        return DeviceScore(
            overall_score=best.score,
            star_rating=float(best.star_rating),
            is_compliant=all(s.is_compliant for s in scores_by_type.values()),
            scores_by_type=scores_by_type,
        )

    def calculate_device_type_score(
        self,
        device_type_id: int,
        server_clusters: Iterable[int],
        client_clusters: Iterable[int],
    ) -> DeviceTypeScore:
        """
        Calculate the score for one device type.

        Args:
            device_type_id: The device type ID
            server_clusters: Server clusters the device implements
            client_clusters: Client clusters the device implements
        """
        server = set(server_clusters)
        client = set(client_clusters)
        metadata = self.registry.get_device_type_metadata(device_type_id)
        gaps = self.registry.analyze_cluster_gaps(device_type_id, server, client)
        present = {SERVER: server, CLIENT: client}

        w_mandatory = self.config.mandatory_weight
        w_optional = self.config.optional_weight
        breakdown: List[BreakdownItem] = []

        # Mandatory clusters
        mandatory = metadata.mandatory_capabilities
        mandatory_present = 0
        for side, cluster_id in mandatory:
            is_present = cluster_id in present[side]
            mandatory_present += is_present
            breakdown.append(self._item(
                side, cluster_id, True, is_present,
                w_mandatory * MAX_SCORE / len(mandatory),
            ))
        mandatory_score = _percentage(mandatory_present, len(mandatory), default=MAX_SCORE)

        # Optional clusters
        optional = metadata.optional_capabilities
        optional_present = 0
        for side, cluster_id in optional:
            is_present = cluster_id in present[side]
            optional_present += is_present
            breakdown.append(self._item(
                side, cluster_id, False, is_present,
                w_optional * MAX_SCORE / len(optional),
            ))
        optional_score = _percentage(optional_present, len(optional), default=0.0)

        # Key client cluster bonus
        client_bonus = 0.0
        key_clients = metadata.key_client_clusters
        if key_clients:
            share = self.config.client_bonus_max / len(key_clients)
            for cluster_id in key_clients:
                is_present = cluster_id in client
                client_bonus += share if is_present else 0.0
                breakdown.append(self._item(CLIENT, cluster_id, False, is_present, share, bonus=True))

        weighted = mandatory_score * w_mandatory + optional_score * w_optional
        final_score = max(0.0, min(MAX_SCORE, weighted + client_bonus))
        final_score = round(final_score, 1)

        return DeviceTypeScore(
            device_type_id=device_type_id,
            device_type_name=self.registry.get_device_type_name(device_type_id),
            score=final_score,
            star_rating=score_to_stars(final_score),
            is_compliant=gaps.is_compliant,
            mandatory_score=round(mandatory_score, 1),
            optional_score=round(optional_score, 1),
            client_bonus=round(client_bonus, 1),
            breakdown=tuple(breakdown),
        )

    def _item(
        self,
        side: str,
        cluster_id: int,
        required: bool,
        present: bool,
        weight: float,
        bonus: bool = False,
    ) -> BreakdownItem:
        label = self.registry.get_cluster_name(cluster_id)
        if side == CLIENT:
            label += " (client)"
        if bonus:
            label += " bonus"
        key = f"{side}:0x{cluster_id:04X}"
        if bonus:
            key = f"bonus:{key}"
        return BreakdownItem(
            capability_key=key,
            label=label,
            required=required,
            present=present,
            contribution=round(weight, 2) if present else 0.0,
        )

    # -------------------------------------------------------------------------
    # Versions
    # -------------------------------------------------------------------------

    def find_best_version(self, versions: Sequence[DeviceVersion]) -> Optional[str]:
        """
        Find a software version that scores meaningfully better than the latest.

        Versions are ordered latest first. Returns the best version's software
        version only if it beats the latest by more than
        ``best_version_margin`` points.
        """
        if len(versions) <= 1:
            return None

        best_score = 0.0
        best_version = None
        latest_score = 0.0

        for i, version in enumerate(versions):
            score = self.calculate_device_score(version.endpoints)

            if i == 0:
                latest_score = score.overall_score

            if score.overall_score > best_score:
                best_score = score.overall_score
                best_version = version.software_version

        if best_version and best_score > latest_score + self.config.best_version_margin:
            return best_version
        return None

    def calculate_latest_version_score(self, versions: Sequence[DeviceVersion]) -> DeviceScore:
        """Score the latest version, noting a better version if one exists."""
        if not versions:
            return DeviceScore.empty()
        score = self.calculate_device_score(versions[0].endpoints)
        return score.with_best_version(self.find_best_version(versions))

    def score_device(self, device: DeviceSnapshot) -> DeviceScore:
        return self.calculate_latest_version_score(device.versions)


def rank_devices(scores: Mapping[str, DeviceScore], device_type_id: int) -> List[RankedDevice]:
    """
    Rank devices implementing a device type by overall score, best first.

    Ties share a rank and the next rank skips ahead (1, 1, 3). Equal scores
    keep their input order.
    """
    candidates = [
        (slug, score)
        for slug, score in scores.items()
        if device_type_id in score.scores_by_type
    ]
    candidates.sort(key=lambda item: item[1].overall_score, reverse=True)

    ranked = []
    previous_score = None
    rank = 0
    for position, (slug, score) in enumerate(candidates, 1):
        if score.overall_score != previous_score:
            rank = position
            previous_score = score.overall_score
        ranked.append(RankedDevice(
            slug=slug,
            rank=rank,
            score=score,
            type_score=score.scores_by_type[device_type_id],
        ))
    return ranked


def calculate_device_score(
    endpoints: Sequence,
    registry: Optional[MatterRegistry] = None,
    config: Optional[ScoringConfig] = None,
) -> DeviceScore:
    """Score a device's endpoints with a one-off engine."""
    return DeviceScoreEngine(registry=registry, config=config).calculate_device_score(endpoints)
