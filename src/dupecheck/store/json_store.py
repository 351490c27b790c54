"""
JSON file store for fingerprint records.

The file holds ``{"version": 1, "records": [...]}`` with records in the
order they were added; comparison tie-breaking depends on that order.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Union

from ..logging import get_logger
from .records import StoredRecord

logger = get_logger(__name__)

STORE_VERSION = 1


class StoreError(Exception):
    """Raised when the store file is unreadable or cannot be written."""


class FingerprintStore:
    """Append-only list of StoredRecords backed by one JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read_raw(self) -> List[Any]:
        if not self.path.exists():
            return []

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                document = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(f"Cannot read fingerprint store {self.path}: {exc}") from exc

        if not isinstance(document, dict) or not isinstance(document.get("records"), list):
            raise StoreError(f"Fingerprint store {self.path} has an unexpected layout")
        return document["records"]

    def _write_raw(self, records: List[Dict[str, Any]]) -> None:
        document = {"version": STORE_VERSION, "records": records}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(document, f, indent=2, ensure_ascii=False)
                os.replace(tmp_name, self.path)
            except BaseException:
                os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise StoreError(f"Cannot write fingerprint store {self.path}: {exc}") from exc

    def load_all(self) -> List[StoredRecord]:
        """Return every record in insertion order, skipping entries without an id."""
        records = []
        for index, entry in enumerate(self._read_raw()):
            if not isinstance(entry, dict):
                logger.warning(f"Skipping non-object entry #{index} in {self.path}")
                continue
            try:
                record = StoredRecord.from_dict(entry)
            except KeyError:
                logger.warning(f"Skipping entry #{index} in {self.path}: missing id")
                continue

            if record.average is None or record.gradient is None:
                logger.warning(f"Record {record.id} has malformed fingerprints; it will never match")
            records.append(record)
        return records

    def add(self, record: StoredRecord) -> None:
        raw = self._read_raw()
        raw.append(record.to_dict())
        self._write_raw(raw)
        logger.info(f"Stored fingerprints for {record.source_ref} as {record.id}")

    def clear(self) -> None:
        self._write_raw([])
        logger.info(f"Cleared fingerprint store {self.path}")

    def count(self) -> int:
        """Number of records load_all() would return."""
        return len(self.load_all())
