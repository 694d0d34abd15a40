"""
Base Table Extractor
Shared sheet lookup, period location and record construction for the five cuadros
"""

from typing import Dict, List, Optional

from pipeline_errors import SheetMissing
from locators.period_locator import PeriodLocator, PeriodMapping
from records.poverty_record import NATIONAL, NATIONAL_REGION, PovertyRecord
from workbook.numeric_parser import parse_numeric


class TableExtractor:
    """
    Base class for one source table.

    Subclasses implement `_extract_records(sheet, periods)`. `extract()` never
    raises: a missing sheet, a sheet without periods or a malformed layout all
    yield an empty list, so one broken table cannot stop the others.
    """

    DEFAULT_LAYOUT: Dict = {}

    def __init__(self, logger, layout: Optional[Dict] = None):
        """Initialize extractor with logger and an optional layout override"""
        self.logger = logger
        self.layout = {**self.DEFAULT_LAYOUT, **(layout or {})}
        self.sheet_name = self.layout["sheet"]
        self.period_locator = PeriodLocator(logger)

    # ========== Helper: Cell Access ==========

    def _read_number(self, sheet, row: int, col: int) -> Optional[float]:
        """Numeric value at (row, col), None when blank or non-numeric"""
        return parse_numeric(sheet.get_cell(row, col))

    def _build_record(self, period: PeriodMapping, data_type: str = NATIONAL,
                      region: str = NATIONAL_REGION, **values) -> PovertyRecord:
        """Create a record for one period with provenance from this table"""
        return PovertyRecord(
            date=period.date,
            period=period.period,
            semester=period.semester,
            year=period.year,
            data_type=data_type,
            region=region,
            cuadro_source=self.sheet_name,
            **values,
        )

    # ========== Extraction ==========

    def _locate_periods(self, sheet) -> List[PeriodMapping]:
        """Semester columns in the configured header row"""
        return self.period_locator.locate(
            sheet,
            header_row=self.layout.get("header_row", 2),
            first_col=self.layout.get("first_data_col", 1),
        )

    def _extract_records(self, sheet, periods: List[PeriodMapping]) -> List[PovertyRecord]:
        raise NotImplementedError

    def extract(self, workbook) -> List[PovertyRecord]:
        """Extract this table's records from the workbook"""
        try:
            sheet = workbook.get_sheet(self.sheet_name)
        except SheetMissing as e:
            self.logger.warning(f"✗ {e}; skipping table")
            return []

        periods = self._locate_periods(sheet)
        self.logger.info(f"{self.sheet_name}: {len(periods)} periods found")
        if not periods:
            self.logger.warning(f"✗ No periods found in {self.sheet_name}; skipping table")
            return []

        try:
            records = self._extract_records(sheet, periods)
        except Exception as e:
            self.logger.warning(f"✗ {self.sheet_name}: unexpected layout ({e}); skipping table")
            return []

        self.logger.info(f"✓ {self.sheet_name}: {len(records)} records extracted")
        return records
