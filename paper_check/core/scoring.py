"""
Distance scoring and verdict classification.
"""

import math
from enum import Enum
from typing import Mapping

from .simhash import HASH_BITS
from .validation import ParameterValidationError


def hamming_distance(a: int, b: int, bits: int = HASH_BITS) -> int:
    """Number of differing bits between two fingerprints."""
    return bin((a ^ b) & ((1 << bits) - 1)).count("1")


def similarity(distance: int, width: int = HASH_BITS) -> float:
    """
    Convert a Hamming distance into a similarity ratio in [0.0, 1.0].

    Raises:
        ParameterValidationError: If width is not positive or distance is
            outside [0, width]
    """
    if width <= 0:
        raise ParameterValidationError(f"width must be positive, got {width}", field="width", value=width)
    if not 0 <= distance <= width:
        raise ParameterValidationError(
            f"distance must be between 0 and {width}, got {distance}",
            field="distance",
            value=distance
        )
    return 1.0 - distance / float(width)


def cosine_similarity(freq_a: Mapping[str, int], freq_b: Mapping[str, int]) -> float:
    """
    Cosine of the angle between two token frequency vectors.

    Returns 0.0 when either table is empty.
    """
    if not freq_a or not freq_b:
        return 0.0

    dot_product = sum(count * freq_b.get(token, 0) for token, count in freq_a.items())
    norm_a = sum(count * count for count in freq_a.values())
    norm_b = sum(count * count for count in freq_b.values())

    if norm_a == 0 or norm_b == 0:
        return 0.0
    # sqrt(2) * sqrt(2) != 2.0 in floating point
    return min(1.0, max(0.0, dot_product / math.sqrt(norm_a * norm_b)))


class Verdict(Enum):
    """Qualitative similarity buckets, highest first."""

    HIGH = ("high", 0.80, "High similarity, strong plagiarism suspicion")
    MODERATE = ("moderate", 0.50, "Moderate similarity, partial plagiarism possible")
    SLIGHT = ("slight", 0.30, "Slight similarity, limited borrowing possible")
    LOW = ("low", 0.0, "Low similarity, plagiarism unlikely")

    def __init__(self, key: str, lower_bound: float, label: str):
        self.key = key
        self.lower_bound = lower_bound
        self.label = label

    def __str__(self):
        return self.label


def classify(score: float) -> Verdict:
    """Bucket a similarity ratio. Lower bounds are inclusive."""
    for verdict in (Verdict.HIGH, Verdict.MODERATE, Verdict.SLIGHT):
        if score >= verdict.lower_bound:
            return verdict
    return Verdict.LOW
