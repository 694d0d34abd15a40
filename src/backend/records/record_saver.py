"""
Record Saver
Writes extracted records to JSON or CSV for the persistence layer
"""

import json
from pathlib import Path
from typing import List

import pandas as pd

from .poverty_record import PovertyRecord


class RecordSaver:
    """Saves records to the outputs folder"""

    def __init__(self, logger, config):
        """Initialize saver with logger and config"""
        self.logger = logger
        self.config = config

    def _prepare_output_path(self, output_path: Path, suffix: str) -> Path:
        """Resolve the output path and create parent directories"""
        output_path = Path(output_path or self.config.records_path.with_suffix(suffix))
        output_path.parent.mkdir(parents=True, exist_ok=True)
        return output_path

    def save(self, records: List[PovertyRecord], output_path: Path = None) -> Path:
        """Save records as a JSON list"""
        output_path = self._prepare_output_path(output_path, ".json")
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump([r.to_dict() for r in records], f, indent=2, ensure_ascii=False)
        self.logger.info(f"✓ Saved {len(records)} records to: {output_path}")
        return output_path

    def save_csv(self, records: List[PovertyRecord], output_path: Path = None) -> Path:
        """Save records as CSV, one column per record field"""
        output_path = self._prepare_output_path(output_path, ".csv")
        columns = list(PovertyRecord.__dataclass_fields__)
        df = pd.DataFrame([r.to_dict() for r in records], columns=columns)
        df.to_csv(output_path, index=False, encoding="utf-8")
        self.logger.info(f"✓ Saved {len(records)} records to: {output_path}")
        return output_path
