"""
Living Burden Atlas - Weight Normalization
Turns the four user-adjustable indicator weights into a blend that sums to 1

Rules:
- Weights are divided by their total
- A zero total is treated as 1 (all-zero weights stay all zero)
- No validation: weights are expected in [0, 1] but never checked
"""

from dataclasses import astuple, dataclass
from typing import Dict, Iterable, Mapping

from src.processing.indicator_registry import INDICATORS, default_weights


@dataclass(frozen=True)
class WeightVector:
    """One weight per indicator, in registry order"""
    economic: float
    park: float
    food: float
    commute: float

    @classmethod
    def from_sequence(cls, values: Iterable[float]) -> "WeightVector":
        economic, park, food, commute = (float(v) for v in values)
        return cls(economic=economic, park=park, food=food, commute=commute)

    @classmethod
    def from_mapping(cls, values: Mapping[str, float]) -> "WeightVector":
        return cls(**{i.key: float(values.get(i.key, 0.0)) for i in INDICATORS})

    @classmethod
    def defaults(cls) -> "WeightVector":
        return cls.from_mapping(default_weights())

    def as_dict(self) -> Dict[str, float]:
        return {i.key: getattr(self, i.key) for i in INDICATORS}

    @property
    def total(self) -> float:
        return self.economic + self.park + self.food + self.commute


def normalize_weights(weights: WeightVector) -> WeightVector:
    """
    Normalize weights so they sum to 1.

    Args:
        weights: Raw weights as set by the user

    Returns:
        Normalized weights. If the raw total is 0 the divisor falls back
        to 1, so the result is all zero and every score collapses to 0.
    """
    total = weights.total or 1.0

    return WeightVector.from_sequence(w / total for w in astuple(weights))
