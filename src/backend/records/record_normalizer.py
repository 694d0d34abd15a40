"""
Record Normalizer
Concatenates extractor outputs and drops incomplete or empty records
"""

from typing import Iterable, List

from .poverty_record import PovertyRecord


class RecordNormalizer:
    """Merges per-table record lists into the pipeline's output list"""

    def __init__(self, logger):
        """Initialize normalizer with logger"""
        self.logger = logger

    def _concatenate(self, batches: Iterable[List[PovertyRecord]]) -> List[PovertyRecord]:
        """Flatten batches, preserving their order"""
        combined = []
        for batch in batches:
            combined.extend(batch)
        return combined

    def _is_valid(self, record: PovertyRecord) -> bool:
        return record.is_complete() and record.has_data()

    def combine(self, batches: Iterable[List[PovertyRecord]]) -> List[PovertyRecord]:
        """Concatenate batches in order and keep only valid records"""
        combined = self._concatenate(batches)
        valid = [record for record in combined if self._is_valid(record)]
        self.logger.info(f"Total records extracted: {len(combined)}")
        self.logger.info(f"✓ Valid records after filtering: {len(valid)} "
                         f"({len(combined) - len(valid)} dropped)")
        return valid
