"""
Cell Value
Typed view over a single spreadsheet cell
"""

import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

import numpy as np
import pandas as pd


class CellKind(Enum):
    NUMBER = "number"
    TEXT = "text"
    DATE = "date"
    EMPTY = "empty"


@dataclass(frozen=True)
class CellValue:
    """A cell tagged with its kind; extractors branch on `kind`, not on raw types"""

    kind: CellKind
    value: Any = None

    @classmethod
    def empty(cls) -> "CellValue":
        return cls(CellKind.EMPTY)

    @classmethod
    def from_raw(cls, raw: Any) -> "CellValue":
        """Classify a raw engine value"""
        if raw is None:
            return cls.empty()
        if isinstance(raw, (bool, np.bool_)):
            return cls(CellKind.TEXT, str(raw))
        if isinstance(raw, (int, float, np.integer, np.floating)):
            if isinstance(raw, (float, np.floating)) and math.isnan(raw):
                return cls.empty()
            return cls(CellKind.NUMBER, raw.item() if hasattr(raw, "item") else raw)
        if raw is pd.NaT:
            return cls.empty()
        if isinstance(raw, pd.Timestamp):
            return cls(CellKind.DATE, raw.to_pydatetime())
        if isinstance(raw, (datetime, date)):
            return cls(CellKind.DATE, raw)
        text = str(raw)
        if not text.strip():
            return cls.empty()
        return cls(CellKind.TEXT, text)

    @property
    def is_empty(self) -> bool:
        return self.kind is CellKind.EMPTY

    @property
    def text(self) -> str:
        """Displayed text of the cell ('' for empty cells)"""
        if self.kind is CellKind.EMPTY:
            return ""
        if self.kind is CellKind.NUMBER:
            if isinstance(self.value, float) and self.value.is_integer():
                return str(int(self.value))
            return str(self.value)
        if self.kind is CellKind.DATE:
            return self.value.isoformat()
        return str(self.value).strip()
