"""Duplicate classification over fingerprint pairs."""

from .verdict import Verdict, ThresholdTable, classify_distances
from .compare import BestMatch, ComparisonResult, compare, compare_hashes, compare_record, find_best_match
from .batch import BatchCandidate, BatchFinding, BatchReport, FindingKind, check_batch

__all__ = [
    "Verdict",
    "ThresholdTable",
    "classify_distances",
    "BestMatch",
    "ComparisonResult",
    "compare",
    "compare_hashes",
    "compare_record",
    "find_best_match",
    "BatchCandidate",
    "BatchFinding",
    "BatchReport",
    "FindingKind",
    "check_batch",
]
