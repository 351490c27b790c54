"""Tiered duplicate verdicts."""

from dataclasses import dataclass
from enum import Enum


class Verdict(Enum):
    """Classifier outcome, strictest first."""
    EXACT_DUPLICATE = "EXACT DUPLICATE"
    VERY_LIKELY_DUPLICATE = "VERY LIKELY DUPLICATE"
    PROBABLY_DUPLICATE = "PROBABLY DUPLICATE"
    MAYBE_SIMILAR = "MAYBE SIMILAR"
    DIFFERENT = "DIFFERENT"

    @property
    def is_duplicate(self) -> bool:
        return self in _DUPLICATE_VERDICTS

    @property
    def label(self) -> str:
        return self.value


_DUPLICATE_VERDICTS = frozenset({
    Verdict.EXACT_DUPLICATE,
    Verdict.VERY_LIKELY_DUPLICATE,
    Verdict.PROBABLY_DUPLICATE,
})


@dataclass(frozen=True)
class ThresholdTable:
    """Maximum Hamming distances for each verdict tier."""
    exact: int = 3
    very_likely: int = 5
    probably: int = 8
    maybe: int = 12

    def __post_init__(self):
        if not 0 <= self.exact <= self.very_likely <= self.probably <= self.maybe:
            raise ValueError(
                f"Thresholds must satisfy 0 <= exact <= very_likely <= probably <= maybe, got {self}"
            )


DEFAULT_THRESHOLDS = ThresholdTable()


def classify_distances(
    distance_a: int,
    distance_b: int,
    thresholds: ThresholdTable = DEFAULT_THRESHOLDS,
) -> Verdict:
    """
    Map the two family distances to a verdict, first match wins.

    The duplicate tiers need both families within the threshold; the
    "maybe similar" tier only needs one of them.
    """
    if distance_a <= thresholds.exact and distance_b <= thresholds.exact:
        return Verdict.EXACT_DUPLICATE
    if distance_a <= thresholds.very_likely and distance_b <= thresholds.very_likely:
        return Verdict.VERY_LIKELY_DUPLICATE
    if distance_a <= thresholds.probably and distance_b <= thresholds.probably:
        return Verdict.PROBABLY_DUPLICATE
    if distance_a <= thresholds.maybe or distance_b <= thresholds.maybe:
        return Verdict.MAYBE_SIMILAR
    return Verdict.DIFFERENT
