"""
Configuration management for matterscore.

Handles:
- Score weighting (mandatory/optional split, client bonus)
- Capability category order and labels
- Capability definition overrides
- Cache location
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

# Default paths
DEFAULT_DATA_DIR = Path.home() / ".matterscore"

DEFAULT_CATEGORY_ORDER = [
    "controls",
    "sensors",
    "automation",
    "monitoring",
    "comfort",
    "security",
    "media",
]

DEFAULT_CATEGORY_LABELS = {
    "controls": "Controls",
    "sensors": "Sensors",
    "automation": "Automation",
    "monitoring": "Monitoring",
    "comfort": "Comfort & Climate",
    "security": "Security",
    "media": "Media",
}


@dataclass
class ScoringConfig:
    """
    Weights for device type scoring.

    score = mandatory% * mandatory_weight + optional% * optional_weight + client bonus
    """
    mandatory_weight: float = 0.7
    optional_weight: float = 0.3
    client_bonus_max: float = 5.0  # Points, added on top of the weighted score
    best_version_margin: float = 5.0  # Points a version must beat the latest by

    def to_dict(self) -> dict:
        return {
            "mandatory_weight": self.mandatory_weight,
            "optional_weight": self.optional_weight,
            "client_bonus_max": self.client_bonus_max,
            "best_version_margin": self.best_version_margin,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ScoringConfig":
        # Filter to only known fields to handle config evolution
        known_fields = {"mandatory_weight", "optional_weight", "client_bonus_max", "best_version_margin"}
        filtered = {k: float(v) for k, v in data.items() if k in known_fields}
        return cls(**filtered)


@dataclass
class CategoryConfig:
    """Canonical capability category order and display labels."""
    order: List[str] = field(default_factory=lambda: list(DEFAULT_CATEGORY_ORDER))
    labels: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_CATEGORY_LABELS))

    def label_for(self, category: str) -> str:
        """Configured label, falling back to the capitalized key."""
        return self.labels.get(category) or category.capitalize()

    def position(self, category: str) -> Optional[int]:
        try:
            return self.order.index(category)
        except ValueError:
            return None

    def sort_keys(self, categories: List[str]) -> List[str]:
        """Canonical categories first, then unknown ones in their given order."""
        known = [c for c in self.order if c in categories]
        unknown = [c for c in categories if c not in self.order]
        return known + unknown

    def to_dict(self) -> dict:
        return {
            "order": self.order,
            "labels": self.labels,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CategoryConfig":
        config = cls()
        if "order" in data:
            config.order = list(data["order"])
        if "labels" in data:
            config.labels = {**config.labels, **data["labels"]}
        return config


@dataclass
class Config:
    """
    Main matterscore configuration.

    Stored at ~/.matterscore/config.json
    """
    # Paths
    data_dir: Path = field(default_factory=lambda: DEFAULT_DATA_DIR)
    capabilities_path: Optional[Path] = None  # None = packaged definitions

    # Components
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    categories: CategoryConfig = field(default_factory=CategoryConfig)

    # Comparison
    max_compare_devices: int = 5

    @property
    def config_path(self) -> Path:
        return self.data_dir / "config.json"

    @property
    def cache_path(self) -> Path:
        return self.data_dir / "scores.json"

    def ensure_data_dir(self) -> None:
        """Create data directory if it doesn't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def save(self) -> None:
        """Save configuration to disk."""
        self.ensure_data_dir()

        data = {
            "capabilities_path": str(self.capabilities_path) if self.capabilities_path else None,
            "scoring": self.scoring.to_dict(),
            "categories": self.categories.to_dict(),
            "max_compare_devices": self.max_compare_devices,
        }

        with open(self.config_path, 'w') as f:
            json.dump(data, f, indent=2)

        logger.debug(f"Configuration saved to {self.config_path}")

    @classmethod
    def load(cls, data_dir: Optional[Path] = None) -> "Config":
        """Load configuration from disk."""
        data_dir = data_dir or DEFAULT_DATA_DIR
        config_path = data_dir / "config.json"

        if not config_path.exists():
            return cls(data_dir=data_dir)

        with open(config_path, 'r') as f:
            data = json.load(f)

        capabilities_path = data.get("capabilities_path")
        config = cls(
            data_dir=data_dir,
            capabilities_path=Path(capabilities_path) if capabilities_path else None,
            max_compare_devices=int(data.get("max_compare_devices", 5)),
        )

        if "scoring" in data:
            config.scoring = ScoringConfig.from_dict(data["scoring"])

        if "categories" in data:
            config.categories = CategoryConfig.from_dict(data["categories"])

        return config

    @classmethod
    def exists(cls, data_dir: Optional[Path] = None) -> bool:
        """Check if configuration exists."""
        data_dir = data_dir or DEFAULT_DATA_DIR
        return (data_dir / "config.json").exists()


# Global config instance
_config: Optional[Config] = None


def get_config(data_dir: Optional[Path] = None) -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.load(data_dir)
    return _config


def set_config(config: Config) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global configuration instance."""
    global _config
    _config = None
