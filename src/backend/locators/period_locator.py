"""
Period Locator
Finds semester headers such as '2do. semestre 2016' in a sheet's header row
"""

import re
from dataclasses import dataclass
from typing import List, Optional

from records.poverty_record import period_label, semester_end_date

# "1er semestre 2020", "2do. semestre 2016", "2 semestre 2023", "1° semestre 2019"
SEMESTER_PATTERN = re.compile(
    r"(?<!\d)([12])\s*(?:ero|er|ro|do|st|nd|°|º)?\.?\s*semest(?:re|er)\s*(\d{4})",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class PeriodMapping:
    """A recognized semester header and the column it sits in"""

    col_index: int
    year: int
    semester: int
    period: str
    date: str


def parse_period_text(text: str, col_index: int = -1) -> Optional[PeriodMapping]:
    """Parse free text into a PeriodMapping, or None when no semester is found"""
    match = SEMESTER_PATTERN.search(text or "")
    if not match:
        return None
    semester = int(match.group(1))
    year = int(match.group(2))
    return PeriodMapping(
        col_index=col_index,
        year=year,
        semester=semester,
        period=period_label(year, semester),
        date=semester_end_date(year, semester),
    )


class PeriodLocator:
    """Scans one header row left to right for semester/year tokens"""

    def __init__(self, logger):
        """Initialize period locator with logger"""
        self.logger = logger

    def _scan_row(self, sheet, header_row: int, first_col: int) -> List[PeriodMapping]:
        """Parse every cell of the header row"""
        found = []
        for col in range(first_col, sheet.n_cols):
            mapping = parse_period_text(sheet.get_cell(header_row, col).text, col)
            if mapping:
                found.append(mapping)
        return found

    def _dedupe(self, periods: List[PeriodMapping]) -> List[PeriodMapping]:
        """Keep the first column seen for each period label"""
        unique = {}
        for mapping in periods:
            unique.setdefault(mapping.period, mapping)
        return list(unique.values())

    def locate(self, sheet, header_row: int = 2, first_col: int = 1) -> List[PeriodMapping]:
        """Return distinct periods found in `header_row`, ascending by date"""
        periods = self._dedupe(self._scan_row(sheet, header_row, first_col))
        periods.sort(key=lambda p: p.date)
        self.logger.debug(f"{sheet.name}: {len(periods)} periods in row {header_row}")
        return periods
