"""
Numeric Parser
Converts cells to floats, accepting the source's comma decimal separator
"""

import math
from typing import Optional

from .cell_value import CellKind, CellValue


def _normalize_decimal_text(text: str) -> str:
    """Turn '1.234,5' / '1,234.5' / '7,9' style text into a dot-decimal string"""
    s = text.strip().replace("\u00a0", "").replace(" ", "").replace("%", "")
    if "," in s and "." in s:
        # whichever separator comes last is the decimal mark
        if s.rfind(",") > s.rfind("."):
            s = s.replace(".", "").replace(",", ".")
        else:
            s = s.replace(",", "")
    elif "," in s:
        s = s.replace(",", ".")
    elif s.count(".") > 1:
        s = s.replace(".", "")
    return s


def _finite_or_none(number: float) -> Optional[float]:
    return number if math.isfinite(number) else None


def parse_numeric(cell: CellValue) -> Optional[float]:
    """
    Read a numeric value from a cell.

    Blank, dated or non-numeric cells return None instead of raising: sparse
    tables are expected, so a missing value never aborts extraction.
    """
    if cell.kind is CellKind.NUMBER:
        return _finite_or_none(float(cell.value))
    if cell.kind is not CellKind.TEXT:
        return None

    normalized = _normalize_decimal_text(str(cell.value))
    if not normalized:
        return None
    try:
        return _finite_or_none(float(normalized))
    except ValueError:
        return None
