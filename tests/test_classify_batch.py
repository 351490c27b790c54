"""Tests for multi-image batch checks."""

from dupecheck.classify.batch import BatchCandidate, FindingKind, check_batch
from dupecheck.classify.verdict import Verdict
from dupecheck.hashing.extract import extract_fingerprints
from dupecheck.store.records import new_record
from tests.helpers.image_factory import image_bytes, make_noise_image, make_split_image


def _candidate(name, img):
    return BatchCandidate(name=name, hashes=extract_fingerprints(image_bytes(img)))


class TestCheckBatch:
    def test_empty_batch(self):
        report = check_batch([], [])

        assert report.findings == []
        assert report.failed == []
        assert not report.has_duplicates

    def test_distinct_images(self):
        candidates = [
            _candidate("split", make_split_image()),
            _candidate("mirrored", make_split_image(mirrored=True)),
        ]

        report = check_batch(candidates, [])

        assert not report.has_duplicates

    def test_duplicate_among_selected(self):
        candidates = [
            _candidate("a.png", make_split_image()),
            _candidate("b.png", make_split_image(mirrored=True)),
            _candidate("c.png", make_split_image()),
        ]

        report = check_batch(candidates, [])

        assert len(report.findings) == 1
        finding = report.findings[0]
        assert finding.kind is FindingKind.AMONG_SELECTED
        assert (finding.first, finding.second) == ("a.png", "c.png")
        assert finding.result.verdict is Verdict.EXACT_DUPLICATE
        assert report.duplicate_names() == ["c.png"]

    def test_already_stored(self):
        stored_hashes = extract_fingerprints(image_bytes(make_noise_image(21)))
        record = new_record("/photos/old.png", stored_hashes)
        candidates = [
            _candidate("new.png", make_noise_image(21)),
            _candidate("other.png", make_split_image()),
        ]

        report = check_batch(candidates, [record])

        assert len(report.findings) == 1
        finding = report.findings[0]
        assert finding.kind is FindingKind.ALREADY_EXISTS
        assert finding.first == "new.png"
        assert finding.second == record.id
        assert report.duplicate_names() == ["new.png"]

    def test_within_batch_reported_before_store(self):
        img = make_split_image()
        record = new_record("/photos/old.png", extract_fingerprints(image_bytes(img)))
        candidates = [_candidate("x.png", img), _candidate("y.png", img)]

        report = check_batch(candidates, [record])

        kinds = [finding.kind for finding in report.findings]
        assert kinds == [
            FindingKind.AMONG_SELECTED,
            FindingKind.ALREADY_EXISTS,
            FindingKind.ALREADY_EXISTS,
        ]

    def test_undecodable_candidates_skipped(self):
        candidates = [
            BatchCandidate(name="broken.png", hashes=extract_fingerprints(b"garbage")),
            _candidate("ok.png", make_split_image()),
            BatchCandidate(name="also-broken.png", hashes=None),
        ]

        report = check_batch(candidates, [])

        assert report.failed == ["broken.png", "also-broken.png"]
        assert report.findings == []
