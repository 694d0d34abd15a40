"""
Workbook
In-memory spreadsheet model addressed by zero-based (row, column) coordinates
"""

import io
from pathlib import Path
from typing import Dict, List, Union

import openpyxl
import pandas as pd
import xlrd

from pipeline_errors import SheetMissing, WorkbookParseError
from .cell_value import CellValue

OOXML_SIGNATURE = b"PK"


class Worksheet:
    """A single sheet backed by a header-less DataFrame grid"""

    def __init__(self, name: str, grid: pd.DataFrame):
        self.name = name
        self.grid = grid.reset_index(drop=True)
        self.grid.columns = range(len(self.grid.columns))

    @property
    def n_rows(self) -> int:
        return len(self.grid.index)

    @property
    def n_cols(self) -> int:
        return len(self.grid.columns)

    def get_cell(self, row: int, col: int) -> CellValue:
        """Return the cell at (row, col); out-of-range coordinates are empty"""
        if row < 0 or col < 0 or row >= self.n_rows or col >= self.n_cols:
            return CellValue.empty()
        return CellValue.from_raw(self.grid.iat[row, col])

    def __repr__(self):
        return f"Worksheet(name={self.name!r}, rows={self.n_rows}, cols={self.n_cols})"


class Workbook:
    """Read-only collection of worksheets keyed by sheet name"""

    def __init__(self, sheets: Dict[str, pd.DataFrame]):
        self._sheets = {name: Worksheet(name, grid) for name, grid in sheets.items()}

    @property
    def sheet_names(self) -> List[str]:
        return list(self._sheets.keys())

    def has_sheet(self, name: str) -> bool:
        return name in self._sheets

    def get_sheet(self, name: str) -> Worksheet:
        """Return the named sheet or raise SheetMissing"""
        if name not in self._sheets:
            raise SheetMissing(name)
        return self._sheets[name]

    def get_cell(self, sheet: str, row: int, col: int) -> CellValue:
        return self.get_sheet(sheet).get_cell(row, col)

    @classmethod
    def from_bytes(cls, content: bytes) -> "Workbook":
        """Parse .xls (BIFF) or .xlsx (OOXML) content, detected by file signature"""
        if not content:
            raise WorkbookParseError("Empty response body")
        try:
            if content[:2] == OOXML_SIGNATURE:
                sheets = _read_ooxml(content)
            else:
                sheets = _read_biff(content)
        except Exception as e:
            raise WorkbookParseError(f"Could not parse workbook: {e}") from e
        return cls(sheets)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "Workbook":
        """Parse a workbook stored on disk"""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Workbook file not found: {path}")
        return cls.from_bytes(path.read_bytes())

    def __repr__(self):
        return f"Workbook(sheets={self.sheet_names})"


def _read_ooxml(content: bytes) -> Dict[str, pd.DataFrame]:
    """Read every sheet starting at A1 so grid indices match sheet coordinates"""
    book = openpyxl.load_workbook(io.BytesIO(content), data_only=True)
    sheets = {}
    for ws in book.worksheets:
        rows = [list(row) for row in ws.iter_rows(min_row=1, min_col=1, values_only=True)]
        sheets[ws.title] = pd.DataFrame(rows, dtype=object)
    book.close()
    return sheets


def _biff_cell(book, cell):
    """Convert an xlrd cell to a native value"""
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
        return None
    if cell.ctype == xlrd.XL_CELL_DATE:
        return xlrd.xldate.xldate_as_datetime(cell.value, book.datemode)
    if cell.ctype == xlrd.XL_CELL_ERROR:
        return None
    return cell.value


def _read_biff(content: bytes) -> Dict[str, pd.DataFrame]:
    book = xlrd.open_workbook(file_contents=content)
    sheets = {}
    for sh in book.sheets():
        rows = [[_biff_cell(book, sh.cell(r, c)) for c in range(sh.ncols)] for r in range(sh.nrows)]
        sheets[sh.name] = pd.DataFrame(rows, dtype=object)
    return sheets
