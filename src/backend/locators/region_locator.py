"""
Region Locator
Finds the rows of target regions in a sheet's label column
"""

import re
import unicodedata
from dataclasses import dataclass
from typing import List, Optional, Sequence

FOOTNOTE_PATTERN = re.compile(r"\(\s*\d+\s*\)")
MIN_LABEL_LENGTH = 3


@dataclass(frozen=True)
class RegionRow:
    name: str
    row_index: int


def _strip_accents(s: str) -> str:
    return "".join(c for c in unicodedata.normalize("NFKD", s) if not unicodedata.combining(c))


def clean_region_label(text: str) -> str:
    """Drop footnote markers like '(2)' and normalize case, accents and spacing"""
    cleaned = FOOTNOTE_PATTERN.sub(" ", text or "")
    cleaned = _strip_accents(cleaned).lower()
    return re.sub(r"\s+", " ", cleaned).strip()


def matches_region(text: str, target: str) -> bool:
    """Bidirectional containment between a cleaned label and a target name"""
    label = clean_region_label(text)
    if len(label) < MIN_LABEL_LENGTH:
        return False
    wanted = clean_region_label(target)
    return wanted in label or label in wanted


class RegionLocator:
    """Matches label cells against a fixed list of region names"""

    def __init__(self, logger):
        """Initialize region locator with logger"""
        self.logger = logger

    def _match_target(self, text: str, targets: Sequence[str], taken: set) -> Optional[str]:
        """First target not yet matched that this label matches"""
        for target in targets:
            if target not in taken and matches_region(text, target):
                return target
        return None

    def locate(self, sheet, targets: Sequence[str], label_col: int = 0) -> List[RegionRow]:
        """Return at most one row per target region, scanning top to bottom"""
        found = []
        taken = set()
        for row in range(sheet.n_rows):
            text = sheet.get_cell(row, label_col).text
            if not text:
                continue
            target = self._match_target(text, targets, taken)
            if target:
                taken.add(target)
                found.append(RegionRow(name=target, row_index=row))

        missing = [t for t in targets if t not in taken]
        if missing:
            self.logger.debug(f"{sheet.name}: regions not found: {', '.join(missing)}")
        return found
