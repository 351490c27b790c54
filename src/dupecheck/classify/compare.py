"""
Pairwise fingerprint comparison and best-match search.

A comparison takes the average and gradient fingerprints of a candidate
and of a stored image, measures each family separately, and folds the two
distances into one verdict. Fingerprints of the wrong length, or missing
ones (e.g. a stored record whose text failed to parse), produce an
explicit incomparable result instead of an exception so one bad record
cannot abort a sweep over the whole store.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

import imagehash

from ..hashing.distance import (
    FINGERPRINT_BITS,
    INCOMPARABLE_DISTANCE,
    fingerprint_length,
    hamming_distance,
    similarity_percent,
)
from ..hashing.extract import ImageHashes
from ..store.records import StoredRecord
from ..logging import get_logger
from .verdict import DEFAULT_THRESHOLDS, ThresholdTable, Verdict, classify_distances

logger = get_logger(__name__)


@dataclass(frozen=True)
class ComparisonResult:
    """Outcome of comparing one fingerprint pair against another."""
    distance_a: int                 # average-family Hamming distance
    distance_b: int                 # gradient-family Hamming distance
    similarity_a: float             # 0-100
    similarity_b: float             # 0-100
    average_similarity: float       # mean of the two similarities
    verdict: Verdict
    is_duplicate: bool
    comparable: bool = True

    @classmethod
    def incomparable(cls) -> "ComparisonResult":
        return cls(
            distance_a=INCOMPARABLE_DISTANCE,
            distance_b=INCOMPARABLE_DISTANCE,
            similarity_a=0.0,
            similarity_b=0.0,
            average_similarity=0.0,
            verdict=Verdict.DIFFERENT,
            is_duplicate=False,
            comparable=False,
        )


@dataclass(frozen=True)
class BestMatch:
    """Most similar stored record for a candidate."""
    record: StoredRecord
    result: ComparisonResult

    @property
    def is_duplicate(self) -> bool:
        return self.result.is_duplicate


def _has_fixed_length(fingerprint: Optional[imagehash.ImageHash]) -> bool:
    return fingerprint_length(fingerprint) == FINGERPRINT_BITS


def compare(
    candidate_a: Optional[imagehash.ImageHash],
    candidate_b: Optional[imagehash.ImageHash],
    stored_a: Optional[imagehash.ImageHash],
    stored_b: Optional[imagehash.ImageHash],
    thresholds: ThresholdTable = DEFAULT_THRESHOLDS,
) -> ComparisonResult:
    """
    Compare a candidate's fingerprints against a stored pair.

    Args:
        candidate_a: Candidate average fingerprint
        candidate_b: Candidate gradient fingerprint
        stored_a: Stored average fingerprint
        stored_b: Stored gradient fingerprint
        thresholds: Verdict tier limits

    Returns:
        ComparisonResult; ``ComparisonResult.incomparable()`` if any
        fingerprint is missing or not FINGERPRINT_BITS long
    """
    fingerprints = (candidate_a, candidate_b, stored_a, stored_b)
    if not all(_has_fixed_length(fp) for fp in fingerprints):
        return ComparisonResult.incomparable()

    distance_a = hamming_distance(candidate_a, stored_a)
    distance_b = hamming_distance(candidate_b, stored_b)

    similarity_a = similarity_percent(distance_a, FINGERPRINT_BITS)
    similarity_b = similarity_percent(distance_b, FINGERPRINT_BITS)

    verdict = classify_distances(distance_a, distance_b, thresholds)

    return ComparisonResult(
        distance_a=distance_a,
        distance_b=distance_b,
        similarity_a=similarity_a,
        similarity_b=similarity_b,
        average_similarity=(similarity_a + similarity_b) / 2,
        verdict=verdict,
        is_duplicate=verdict.is_duplicate,
    )


def compare_hashes(
    candidate: ImageHashes,
    other: ImageHashes,
    thresholds: ThresholdTable = DEFAULT_THRESHOLDS,
) -> ComparisonResult:
    return compare(candidate.average, candidate.gradient, other.average, other.gradient, thresholds)


def compare_record(
    candidate: ImageHashes,
    record: StoredRecord,
    thresholds: ThresholdTable = DEFAULT_THRESHOLDS,
) -> ComparisonResult:
    return compare(candidate.average, candidate.gradient, record.average, record.gradient, thresholds)


def find_best_match(
    candidate_a: Optional[imagehash.ImageHash],
    candidate_b: Optional[imagehash.ImageHash],
    records: Iterable[StoredRecord],
    thresholds: ThresholdTable = DEFAULT_THRESHOLDS,
) -> Optional[BestMatch]:
    """
    Scan every stored record and keep the one with the highest average
    similarity. Ties go to the record seen first.

    Returns:
        BestMatch, or None when ``records`` is empty
    """
    best: Optional[BestMatch] = None

    for record in records:
        result = compare(candidate_a, candidate_b, record.average, record.gradient, thresholds)
        if not result.comparable:
            logger.debug(f"Record {record.id} is not comparable with the candidate")

        if best is None or result.average_similarity > best.result.average_similarity:
            best = BestMatch(record=record, result=result)

    if best is not None:
        logger.debug(
            f"Best match {best.record.id}: {best.result.average_similarity:.1f}% "
            f"({best.result.verdict.label})"
        )
    return best
