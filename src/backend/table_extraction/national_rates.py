"""
National Rates Extractor
Cuadro 1: poverty and indigence rates for the 31 urban agglomerates
"""

from typing import List

from .base_extractor import TableExtractor


class NationalRatesExtractor(TableExtractor):
    """One record per semester with the four headline rates"""

    DEFAULT_LAYOUT = {
        "sheet": "Cuadro 1",
        "header_row": 2,
        "indicators": [
            {"row": 5, "field": "poverty_rate_households", "label": "Pobreza - Hogares"},
            {"row": 6, "field": "poverty_rate_persons", "label": "Pobreza - Personas"},
            {"row": 9, "field": "indigence_rate_households", "label": "Indigencia - Hogares"},
            {"row": 10, "field": "indigence_rate_persons", "label": "Indigencia - Personas"},
        ],
    }

    def _read_indicators(self, sheet, col: int) -> dict:
        """Values of every indicator row in one period column"""
        return {
            indicator["field"]: self._read_number(sheet, indicator["row"], col)
            for indicator in self.layout["indicators"]
        }

    def _extract_records(self, sheet, periods) -> List:
        return [
            self._build_record(period, **self._read_indicators(sheet, period.col_index))
            for period in periods
        ]
