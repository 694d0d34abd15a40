"""
Tests for period_locator.py
"""
import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent.joinpath("src", "backend")))

from locators.period_locator import PeriodLocator, parse_period_text
from workbook.workbook import Workbook


class TestParsePeriodText:
    """Tests for semester header parsing"""

    @pytest.mark.parametrize("text,period,date", [
        ("2do. semestre 2016", "S2 2016", "2016-12-31"),
        ("1er semestre 2020", "S1 2020", "2020-06-30"),
        ("2 semestre 2023", "S2 2023", "2023-12-31"),
        ("1° semestre 2019", "S1 2019", "2019-06-30"),
        ("2do Semestre 2021 (1)", "S2 2021", "2021-12-31"),
        ("1ro. semestre 2018", "S1 2018", "2018-06-30"),
    ])
    def test_ordinal_suffix_tolerance(self, text, period, date):
        """Test ordinal suffixes and punctuation are tolerated"""
        mapping = parse_period_text(text, col_index=4)

        assert mapping.period == period
        assert mapping.date == date
        assert mapping.col_index == 4

    @pytest.mark.parametrize("text", ["", "Hogares", "Total 31 aglomerados", "3er semestre 2020",
                                      "semestre 2020", "12 semestre 2020"])
    def test_unrecognized_text(self, text):
        """Test text without a valid semester token returns None"""
        assert parse_period_text(text) is None


class TestPeriodLocator:
    """Tests for PeriodLocator"""

    def test_locate_header_row(self, mock_logger, cuadro1_workbook):
        """Test periods are found in the header row with their columns"""
        # ARRANGE
        locator = PeriodLocator(mock_logger)
        sheet = cuadro1_workbook.get_sheet("Cuadro 1")

        # ACT
        periods = locator.locate(sheet, header_row=2)

        # ASSERT
        assert [(p.period, p.col_index) for p in periods] == [("S1 2020", 1), ("S2 2020", 2)]

    def test_locate_sorts_and_dedupes(self, mock_logger, grid_factory):
        """Test output is ascending by date and keeps the first duplicate column"""
        # ARRANGE
        grid = grid_factory([
            [],
            [],
            ["", "2do semestre 2020", "1er semestre 2020", "2do. semestre 2020", "notas"],
        ])
        sheet = Workbook({"Cuadro": grid}).get_sheet("Cuadro")

        # ACT
        periods = PeriodLocator(mock_logger).locate(sheet)

        # ASSERT
        assert [(p.period, p.col_index) for p in periods] == [("S1 2020", 2), ("S2 2020", 1)]

    def test_label_column_is_skipped(self, mock_logger, grid_factory):
        """Test the first column is not scanned by default"""
        grid = grid_factory([[], [], ["1er semestre 2020", "2do semestre 2020"]])
        sheet = Workbook({"Cuadro": grid}).get_sheet("Cuadro")

        periods = PeriodLocator(mock_logger).locate(sheet)

        assert [p.period for p in periods] == ["S2 2020"]

    def test_missing_header_row(self, mock_logger, grid_factory):
        """Test a sheet without the header row yields no periods"""
        sheet = Workbook({"Cuadro": grid_factory([["Cuadro"]])}).get_sheet("Cuadro")

        assert PeriodLocator(mock_logger).locate(sheet) == []
