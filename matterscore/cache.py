"""
Score Cache - Persisted device scores, keyed by device slug.

Scoring is pure, so the cache only saves recomputation. It can be rebuilt
from device snapshots at any time.

Stored in ~/.matterscore/scores.json
"""

import json
import logging
import time
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .config import Config, get_config
from .models import DeviceSnapshot
from .scoring import DeviceScore, DeviceScoreEngine

logger = logging.getLogger(__name__)

CACHE_VERSION = 1


class ScoreCache:
    """
    DeviceScores keyed by slug, backed by a JSON file.

    ``put`` and ``remove`` write through to disk.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else get_config().cache_path
        self.updated: Optional[float] = None
        self._scores: Dict[str, DeviceScore] = {}
        self._load()

    def _load(self):
        """Load cache from disk."""
        if not self.path.exists():
            return
        try:
            with open(self.path) as f:
                data = json.load(f)
            if not isinstance(data, dict) or not isinstance(data.get("scores", {}), dict):
                raise ValueError("cache file must hold a mapping of scores")
            for slug, score_data in data.get("scores", {}).items():
                self._scores[slug] = DeviceScore.from_dict(score_data)
            self.updated = data.get("updated")
            logger.info(f"Loaded {len(self._scores)} scores from cache")
        except (OSError, ValueError, KeyError, TypeError) as e:
            # Cache is rebuildable; start empty
            logger.error(f"Failed to load score cache {self.path}: {e}")
            self._scores = {}

    def save(self) -> None:
        """Save cache to disk."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.updated = time.time()
        data = {
            "version": CACHE_VERSION,
            "updated": self.updated,
            "scores": {slug: score.to_dict() for slug, score in self._scores.items()},
        }
        with open(self.path, 'w') as f:
            json.dump(data, f, indent=2)
        logger.debug(f"Saved {len(self._scores)} scores to {self.path}")

    def __len__(self) -> int:
        return len(self._scores)

    def __contains__(self, slug: str) -> bool:
        return slug in self._scores

    def get(self, slug: str) -> Optional[DeviceScore]:
        return self._scores.get(slug)

    def get_many(self, slugs: Iterable[str]) -> Dict[str, DeviceScore]:
        """Scores for the given slugs; slugs without a cached score are left out."""
        return {slug: self._scores[slug] for slug in slugs if slug in self._scores}

    def all(self) -> Dict[str, DeviceScore]:
        return dict(self._scores)

    def slugs(self) -> List[str]:
        return list(self._scores)

    def put(self, slug: str, score: DeviceScore) -> None:
        self._scores[slug] = score
        self.save()

    def remove(self, slug: str) -> bool:
        """Remove a device's score. Returns False if it wasn't cached."""
        if slug not in self._scores:
            return False
        del self._scores[slug]
        self.save()
        return True

    def rebuild(
        self,
        devices: Iterable[DeviceSnapshot],
        engine: Optional[DeviceScoreEngine] = None,
    ) -> int:
        """
        Replace the cache with fresh scores for ``devices``.

        Returns the number of devices scored.
        """
        engine = engine or DeviceScoreEngine(config=get_config().scoring)
        scores: Dict[str, DeviceScore] = {}

        for device in devices:
            score = engine.score_device(device)
            scores[device.slug] = score
            logger.debug(f"Scored {device.slug}: {score.overall_score} ({score.star_rating} stars)")

        self._scores = scores
        self.save()
        logger.info(f"Rebuilt score cache with {len(scores)} devices")
        return len(scores)


def open_score_cache(config: Optional[Config] = None) -> ScoreCache:
    """Open the score cache in a configuration's data directory."""
    config = config or get_config()
    return ScoreCache(config.cache_path)
