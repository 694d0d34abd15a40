"""
Gap and Severity Extractor
Cuadros 2.1 (indigence) and 2.2 (poverty): gap, severity and auxiliary statistics
"""

from typing import List

from records.poverty_record import PovertyRecord
from .base_extractor import TableExtractor


class GapSeverityExtractor(TableExtractor):
    """
    Extracts the gap and severity rows, then every labelled row below
    `additional_start_row` as a free-form variable.
    """

    DEFAULT_LAYOUT = {
        "sheet": "Cuadro 2.1",
        "kind": "indigence",
        "header_row": 2,
        "gap_row": 4,
        "severity_row": 5,
        "additional_start_row": 18,
        "min_label_length": 3,
    }

    def __init__(self, logger, layout=None):
        """Initialize with logger and layout; `kind` is 'indigence' or 'poverty'"""
        super().__init__(logger, layout)
        kind = self.layout["kind"]
        if kind not in ("indigence", "poverty"):
            raise ValueError(f"Unsupported gap table kind: {kind}")
        self.main_indicators = [
            {"row": self.layout["gap_row"], "field": f"{kind}_gap", "label": "Brecha"},
            {"row": self.layout["severity_row"], "field": f"{kind}_severity", "label": "Severidad"},
        ]

    def _main_records(self, sheet, periods) -> List[PovertyRecord]:
        """Two records per period: gap and severity"""
        records = []
        for period in periods:
            for indicator in self.main_indicators:
                value = self._read_number(sheet, indicator["row"], period.col_index)
                records.append(self._build_record(
                    period,
                    variable_name=indicator["label"],
                    variable_value=value,
                    **{indicator["field"]: value},
                ))
        return records

    def _additional_records(self, sheet, periods) -> List[PovertyRecord]:
        """Auxiliary rows from `additional_start_row` to the end of the sheet"""
        records = []
        for row in range(self.layout["additional_start_row"], sheet.n_rows):
            label = sheet.get_cell(row, 0).text
            if len(label) < self.layout["min_label_length"]:
                continue
            for period in periods:
                value = self._read_number(sheet, row, period.col_index)
                if value is not None:
                    records.append(self._build_record(period, variable_name=label, variable_value=value))
        return records

    def _extract_records(self, sheet, periods) -> List[PovertyRecord]:
        records = self._main_records(sheet, periods)
        additional = self._additional_records(sheet, periods)
        self.logger.info(f"{self.sheet_name}: {len(additional)} auxiliary variable records")
        return records + additional
