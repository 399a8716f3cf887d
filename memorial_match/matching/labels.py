"""
Confidence labels for duplicate matches.

Four levels shown to a person creating a memorial:
- VERY_HIGH (>= 0.90): very likely the same person
- HIGH (>= 0.75): probably the same person
- MODERATE (>= 0.60): might be the same person
- LOW (< 0.60): unlikely to be the same person
"""

from dataclasses import dataclass
from enum import Enum


class ConfidenceLevel(Enum):
    """Confidence levels for a duplicate match."""
    VERY_HIGH = "very_high"
    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"


@dataclass(frozen=True)
class ConfidenceLabel:
    """Display label for a confidence score."""
    level: ConfidenceLevel
    label: str
    color: str  # 'red', 'yellow', 'green'
    description: str

    def to_dict(self) -> dict:
        return {
            'level': self.level.value,
            'label': self.label,
            'color': self.color,
            'description': self.description,
        }


VERY_HIGH_THRESHOLD = 0.90
HIGH_THRESHOLD = 0.75
MODERATE_THRESHOLD = 0.60


def get_confidence_label(score: float) -> ConfidenceLabel:
    """Map a 0-1 score to its display label."""
    if score >= VERY_HIGH_THRESHOLD:
        return ConfidenceLabel(
            ConfidenceLevel.VERY_HIGH, 'Very High', 'red',
            'This is very likely the same person',
        )
    if score >= HIGH_THRESHOLD:
        return ConfidenceLabel(
            ConfidenceLevel.HIGH, 'High', 'red',
            'This is probably the same person',
        )
    if score >= MODERATE_THRESHOLD:
        return ConfidenceLabel(
            ConfidenceLevel.MODERATE, 'Moderate', 'yellow',
            'This might be the same person',
        )
    return ConfidenceLabel(
        ConfidenceLevel.LOW, 'Low', 'green',
        'This is unlikely to be the same person',
    )
