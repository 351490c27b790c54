"""Persisted fingerprint records."""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

import imagehash

from ..hashing.bits import from_bits, to_bits
from ..hashing.extract import ImageHashes


@dataclass(frozen=True)
class StoredRecord:
    """A previously accepted image and its fingerprints."""
    id: str                                     # Stable unique identifier
    average: Optional[imagehash.ImageHash]      # None if the stored text was malformed
    gradient: Optional[imagehash.ImageHash]     # None if the stored text was malformed
    source_ref: str                             # Original file path or URI
    created_at: str                             # ISO-8601 timestamp as stored

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted field names."""
        return {
            "id": self.id,
            "pHash": to_bits(self.average) if self.average is not None else "",
            "dHash": to_bits(self.gradient) if self.gradient is not None else "",
            "filePath": self.source_ref,
            "timestamp": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoredRecord":
        """
        Build a record from its persisted form.

        Raises:
            KeyError: If ``id`` is missing, null or empty
        """
        record_id = data.get("id")
        if record_id is None or record_id == "":
            raise KeyError("id")

        return cls(
            id=str(record_id),
            average=from_bits(data.get("pHash")),
            gradient=from_bits(data.get("dHash")),
            source_ref=str(data.get("filePath", "")),
            created_at=str(data.get("timestamp", "")),
        )


def new_record(
    source_ref: str,
    hashes: ImageHashes,
    now: Optional[datetime] = None,
) -> StoredRecord:
    """Create a record for a freshly accepted image."""
    now = now or datetime.now().astimezone()
    millis = int(now.timestamp() * 1000)
    return StoredRecord(
        id=f"photo_{millis}_{uuid.uuid4().hex[:6]}",
        average=hashes.average,
        gradient=hashes.gradient,
        source_ref=source_ref,
        created_at=now.isoformat(),
    )
