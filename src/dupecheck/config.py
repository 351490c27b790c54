from dataclasses import dataclass, field
from pathlib import Path

from .classify.verdict import ThresholdTable


@dataclass
class Settings:
    store_path: Path = Path("fingerprints.json")
    thresholds: ThresholdTable = field(default_factory=ThresholdTable)
