"""
Record Statistics
Summarizes a run's output so degraded extractions stand out in the logs
"""

from collections import Counter
from typing import Dict, List

from .poverty_record import NATIONAL, REGIONAL, PovertyRecord


class RecordStatistics:
    """Calculates and logs breakdowns of extracted records"""

    def __init__(self, logger):
        """Initialize statistics calculator with logger"""
        self.logger = logger

    def _count_by_type(self, records: List[PovertyRecord], data_type: str) -> int:
        return sum(1 for r in records if r.data_type == data_type)

    def _period_range(self, records: List[PovertyRecord]) -> Dict:
        """First and last period by date"""
        if not records:
            return {"first_period": None, "last_period": None}
        ordered = sorted(records, key=lambda r: r.date)
        return {"first_period": ordered[0].period, "last_period": ordered[-1].period}

    def summarize(self, records: List[PovertyRecord]) -> Dict:
        """Build the run summary dictionary"""
        return {
            "total": len(records),
            "national": self._count_by_type(records, NATIONAL),
            "regional": self._count_by_type(records, REGIONAL),
            "regions": len({r.region for r in records}),
            "periods": len({r.period for r in records}),
            **self._period_range(records),
            "by_source": dict(sorted(Counter(r.cuadro_source for r in records).items())),
        }

    def log_summary(self, stats: Dict):
        """Log summary statistics"""
        self.logger.info(f"\n{'='*60}")
        self.logger.info("Extraction Summary")
        self.logger.info(f"{'='*60}")
        self.logger.info(f"  Records: {stats['total']} "
                         f"(national {stats['national']}, regional {stats['regional']})")
        self.logger.info(f"  Regions: {stats['regions']}  Periods: {stats['periods']} "
                         f"({stats['first_period']} → {stats['last_period']})")
        for source, count in stats["by_source"].items():
            self.logger.info(f"  {source}: {count}")
        self.logger.info(f"{'='*60}\n")
