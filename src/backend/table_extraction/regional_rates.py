"""
Regional Rates Extractor
Cuadros 4.3 (poverty) and 4.4 (indigence): region-by-semester matrices
"""

from dataclasses import dataclass
from typing import List, Sequence

from locators.period_locator import PeriodMapping
from locators.region_locator import RegionLocator
from records.poverty_record import REGIONAL, PovertyRecord
from .base_extractor import TableExtractor

TARGET_REGIONS = ["Gran Buenos Aires", "Cuyo", "Noreste", "Noroeste", "Pampeana", "Patagonia"]


@dataclass(frozen=True)
class PeriodColumns:
    period: PeriodMapping
    households_col: int
    persons_col: int


class RegionalRatesExtractor(TableExtractor):
    """
    Each semester header spans a 'Hogares' and a 'Personas' column.

    The sub-header labels in `label_row` are checked at the default offsets;
    when the publication shifts its layout, a small neighborhood is searched
    for the right label before falling back to the default.
    """

    DEFAULT_LAYOUT = {
        "sheet": "Cuadro 4.3",
        "kind": "poverty",
        "header_row": 2,
        "label_row": 3,
        "label_col": 0,
        "persons_offset": 2,
        "households_label": "hogar",
        "persons_label": "persona",
        "households_search": [-1, 3],
        "persons_search": [1, 4],
    }

    def __init__(self, logger, layout=None, regions: Sequence[str] = None):
        """Initialize with logger, layout and the target region names"""
        super().__init__(logger, layout)
        kind = self.layout["kind"]
        if kind not in ("indigence", "poverty"):
            raise ValueError(f"Unsupported regional table kind: {kind}")
        self.households_field = f"{kind}_rate_households"
        self.persons_field = f"{kind}_rate_persons"
        self.regions = list(regions or TARGET_REGIONS)
        self.region_locator = RegionLocator(logger)

    # ========== Helper: Column Recovery ==========

    def _label_at(self, sheet, col: int) -> str:
        return sheet.get_cell(self.layout["label_row"], col).text.lower()

    def _find_labelled_column(self, sheet, period: PeriodMapping, default_col: int,
                              label: str, search: Sequence[int]) -> int:
        """Default column if it carries `label`, else the first neighbor that does"""
        if label in self._label_at(sheet, default_col):
            return default_col
        low, high = search
        for offset in range(low, high + 1):
            col = period.col_index + offset
            if col >= 0 and label in self._label_at(sheet, col):
                return col
        self.logger.warning(
            f"{self.sheet_name} {period.period}: no '{label}' label within offsets "
            f"{low}..{high}; using column {default_col}, review this layout manually"
        )
        return default_col

    def _map_period_columns(self, sheet, periods: List[PeriodMapping]) -> List[PeriodColumns]:
        """Associate a households and a persons column with every period"""
        mapped = []
        for period in periods:
            households_col = self._find_labelled_column(
                sheet, period, period.col_index,
                self.layout["households_label"], self.layout["households_search"])
            persons_col = self._find_labelled_column(
                sheet, period, period.col_index + self.layout["persons_offset"],
                self.layout["persons_label"], self.layout["persons_search"])
            mapped.append(PeriodColumns(period, households_col, persons_col))
        return mapped

    # ========== Extraction ==========

    def _extract_records(self, sheet, periods) -> List[PovertyRecord]:
        regions = self.region_locator.locate(sheet, self.regions, self.layout["label_col"])
        self.logger.info(f"{self.sheet_name}: {len(regions)} regions found")
        columns = self._map_period_columns(sheet, periods)

        records = []
        for region in regions:
            for cols in columns:
                households = self._read_number(sheet, region.row_index, cols.households_col)
                persons = self._read_number(sheet, region.row_index, cols.persons_col)
                if households is None and persons is None:
                    continue
                records.append(self._build_record(
                    cols.period,
                    data_type=REGIONAL,
                    region=region.name,
                    **{self.households_field: households, self.persons_field: persons},
                ))
        return records
