"""Duplicate checks for a multi-image selection."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from ..hashing.extract import ImageHashes
from ..store.records import StoredRecord
from ..logging import get_logger
from .compare import ComparisonResult, compare_hashes, compare_record
from .verdict import DEFAULT_THRESHOLDS, ThresholdTable

logger = get_logger(__name__)


class FindingKind(Enum):
    AMONG_SELECTED = "AMONG SELECTED"
    ALREADY_EXISTS = "ALREADY EXISTS"


@dataclass(frozen=True)
class BatchCandidate:
    """One selected image; ``hashes`` is None when it could not be decoded."""
    name: str
    hashes: Optional[ImageHashes]


@dataclass(frozen=True)
class BatchFinding:
    """A duplicate pair found during a batch check."""
    kind: FindingKind
    first: str                  # candidate name
    second: str                 # candidate name or stored record id
    result: ComparisonResult


@dataclass
class BatchReport:
    findings: List[BatchFinding] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    @property
    def has_duplicates(self) -> bool:
        return bool(self.findings)

    def duplicate_names(self) -> List[str]:
        """
        Candidates that repeat an earlier selection or a stored image, in
        first-seen order. The first copy of an in-batch pair is not listed.
        """
        names: List[str] = []
        for finding in self.findings:
            name = finding.second if finding.kind is FindingKind.AMONG_SELECTED else finding.first
            if name not in names:
                names.append(name)
        return names


def check_batch(
    candidates: Sequence[BatchCandidate],
    records: Sequence[StoredRecord],
    thresholds: ThresholdTable = DEFAULT_THRESHOLDS,
) -> BatchReport:
    """
    Check a selection against itself and against the stored records.

    Every unordered pair of decodable candidates is compared once, then
    every decodable candidate is compared with every stored record. Only
    pairs with a duplicate verdict are reported.

    Args:
        candidates: Selected images in selection order
        records: Stored records in store order
        thresholds: Verdict tier limits

    Returns:
        BatchReport with findings and the names of undecodable candidates
    """
    report = BatchReport()

    usable = []
    for candidate in candidates:
        if candidate.hashes is None:
            logger.warning(f"Skipping {candidate.name}: no fingerprints")
            report.failed.append(candidate.name)
        else:
            usable.append(candidate)

    n = len(usable)
    for i in range(n):
        for j in range(i + 1, n):
            result = compare_hashes(usable[i].hashes, usable[j].hashes, thresholds)
            if result.is_duplicate:
                report.findings.append(BatchFinding(
                    kind=FindingKind.AMONG_SELECTED,
                    first=usable[i].name,
                    second=usable[j].name,
                    result=result,
                ))
                logger.debug(f"{usable[i].name} duplicates {usable[j].name} ({result.verdict.label})")

    for candidate in usable:
        for record in records:
            result = compare_record(candidate.hashes, record, thresholds)
            if result.is_duplicate:
                report.findings.append(BatchFinding(
                    kind=FindingKind.ALREADY_EXISTS,
                    first=candidate.name,
                    second=record.id,
                    result=result,
                ))
                logger.debug(f"{candidate.name} duplicates stored {record.id} ({result.verdict.label})")

    logger.info(f"Batch check of {len(candidates)} images found {len(report.findings)} duplicate pairs")
    return report
