"""Durable storage for accepted fingerprints."""

from .records import StoredRecord, new_record
from .json_store import FingerprintStore, StoreError

__all__ = [
    "StoredRecord",
    "new_record",
    "FingerprintStore",
    "StoreError",
]
