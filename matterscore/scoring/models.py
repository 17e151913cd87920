"""
Score value objects.

Scores are immutable and serialize to plain dicts for caching. A dict
produced by ``to_dict`` (also after a JSON round-trip, where integer map
keys become strings) decodes back to an equal object.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class BreakdownItem:
    """One requirement's contribution to a device type score."""
    capability_key: str  # e.g. "server:0x0006"
    label: str
    required: bool
    present: bool
    contribution: float  # Score points earned

    def to_dict(self) -> Dict[str, Any]:
        return {
            "capability_key": self.capability_key,
            "label": self.label,
            "required": self.required,
            "present": self.present,
            "contribution": self.contribution,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BreakdownItem":
        return cls(
            capability_key=str(data["capability_key"]),
            label=str(data.get("label", "")),
            required=bool(data["required"]),
            present=bool(data["present"]),
            contribution=float(data.get("contribution", 0.0)),
        )


@dataclass(frozen=True)
class DeviceTypeScore:
    """Score for a single device type implemented by a device."""
    device_type_id: int
    device_type_name: str
    score: float
    star_rating: int
    is_compliant: bool
    mandatory_score: float
    optional_score: float
    client_bonus: float = 0.0
    breakdown: Tuple[BreakdownItem, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary for caching."""
        return {
            "device_type_id": self.device_type_id,
            "device_type_name": self.device_type_name,
            "score": self.score,
            "star_rating": self.star_rating,
            "is_compliant": self.is_compliant,
            "mandatory_score": self.mandatory_score,
            "optional_score": self.optional_score,
            "client_bonus": self.client_bonus,
            "breakdown": [item.to_dict() for item in self.breakdown],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeviceTypeScore":
        """Deserialize from dictionary."""
        return cls(
            device_type_id=int(data["device_type_id"]),
            device_type_name=str(data["device_type_name"]),
            score=float(data["score"]),
            star_rating=int(data["star_rating"]),
            is_compliant=bool(data["is_compliant"]),
            mandatory_score=float(data["mandatory_score"]),
            optional_score=float(data["optional_score"]),
            client_bonus=float(data.get("client_bonus", 0.0)),
            breakdown=tuple(BreakdownItem.from_dict(item) for item in data.get("breakdown", [])),
        )


@dataclass(frozen=True)
class DeviceScore:
    """
    Overall score for a device, with a breakdown by device type.

    ``scores_by_type`` preserves the order device types were first seen on
    the device's endpoints.
    """
    overall_score: float
    star_rating: float
    is_compliant: bool
    scores_by_type: Dict[int, DeviceTypeScore] = field(default_factory=dict, hash=False)
    best_version: Optional[str] = None

    @classmethod
    def empty(cls) -> "DeviceScore":
        """Score for a device with nothing to score."""
        return cls(overall_score=0.0, star_rating=0.0, is_compliant=False, scores_by_type={})

    def best_type_score(self) -> Optional[DeviceTypeScore]:
        """Highest scoring device type; the first one wins ties."""
        best = None
        for type_score in self.scores_by_type.values():
            if best is None or type_score.score > best.score:
                best = type_score
        return best

    def with_best_version(self, best_version: Optional[str]) -> "DeviceScore":
        return DeviceScore(
            overall_score=self.overall_score,
            star_rating=self.star_rating,
            is_compliant=self.is_compliant,
            scores_by_type=dict(self.scores_by_type),
            best_version=best_version,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary for caching."""
        return {
            "overall_score": self.overall_score,
            "star_rating": self.star_rating,
            "is_compliant": self.is_compliant,
            "scores_by_type": {
                type_id: type_score.to_dict()
                for type_id, type_score in self.scores_by_type.items()
            },
            "best_version": self.best_version,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeviceScore":
        """Deserialize from dictionary."""
        scores_by_type = {
            int(type_id): DeviceTypeScore.from_dict(type_data)
            for type_id, type_data in (data.get("scores_by_type") or {}).items()
        }
        return cls(
            overall_score=float(data["overall_score"]),
            star_rating=float(data["star_rating"]),
            is_compliant=bool(data["is_compliant"]),
            scores_by_type=scores_by_type,
            best_version=data.get("best_version"),
        )
