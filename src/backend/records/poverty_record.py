"""
Poverty Record
Flat record schema produced by every table extractor
"""

from dataclasses import dataclass, field, fields
from typing import Dict, List, Optional, Tuple

NATIONAL = "national"
REGIONAL = "regional"
NATIONAL_REGION = "Total 31 aglomerados"
SOURCE_FILE = "cuadros_informe_pobreza"

NUMERIC_FIELDS = (
    "poverty_rate_persons",
    "poverty_rate_households",
    "indigence_rate_persons",
    "indigence_rate_households",
    "indigence_gap",
    "poverty_gap",
    "indigence_severity",
    "poverty_severity",
)

_SEMESTER_END = {1: "06-30", 2: "12-31"}


def semester_end_date(year: int, semester: int) -> str:
    """Return the ISO date closing a semester (June 30 or December 31)"""
    if semester not in _SEMESTER_END:
        raise ValueError(f"Semester must be 1 or 2, got {semester}")
    return f"{int(year):04d}-{_SEMESTER_END[semester]}"


def period_label(year: int, semester: int) -> str:
    """Canonical period label, e.g. 'S1 2020'"""
    return f"S{semester} {year}"


@dataclass(frozen=True)
class PovertyRecord:
    """One observation extracted from the INDEC poverty workbook"""

    date: str
    period: str
    semester: int
    year: int
    data_type: str
    region: str
    cuadro_source: str
    source_file: str = SOURCE_FILE
    poverty_rate_persons: Optional[float] = None
    poverty_rate_households: Optional[float] = None
    indigence_rate_persons: Optional[float] = None
    indigence_rate_households: Optional[float] = None
    indigence_gap: Optional[float] = None
    poverty_gap: Optional[float] = None
    indigence_severity: Optional[float] = None
    poverty_severity: Optional[float] = None
    variable_name: Optional[str] = None
    variable_value: Optional[float] = field(default=None)

    def populated_fields(self) -> List[str]:
        """Names of the fixed numeric fields that carry a value"""
        return [name for name in NUMERIC_FIELDS if getattr(self, name) is not None]

    def has_data(self) -> bool:
        """True when any numeric field or the variable value is set"""
        return bool(self.populated_fields()) or self.variable_value is not None

    def is_complete(self) -> bool:
        """True when the identifying attributes are all present"""
        return all([self.date, self.period, self.region, self.data_type])

    def natural_key(self) -> Tuple[str, str, str, str]:
        """Upsert key: source table, period, region and populated field identity"""
        identity = self.variable_name or ",".join(self.populated_fields())
        return (self.cuadro_source, self.period, self.region, identity)

    def to_dict(self) -> Dict:
        """Serialize in declaration order"""
        return {f.name: getattr(self, f.name) for f in fields(self)}
