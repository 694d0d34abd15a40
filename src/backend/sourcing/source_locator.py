"""
Source Locator
Builds the ordered list of candidate download URLs for the poverty workbook
"""

from datetime import date
from typing import List, Optional, Tuple


class SourceLocator:
    """
    Generates candidate URLs, newest publication first.

    INDEC publishes the workbook twice a year: in March (second semester of
    the previous year) and in September (first semester of the current year).
    The file name embeds the publication month and two-digit year, e.g.
    cuadros_informe_pobreza_09_25.xls.
    """

    def __init__(self, logger, config):
        """Initialize locator with logger and config"""
        self.logger = logger
        self.config = config
        source = config.source_config
        self.base_url = source["base_url"].rstrip("/")
        self.filename_template = source["filename_template"]
        self.publication_months = sorted({int(m) for m in source["publication_months"]})
        self.lookback_periods = int(source.get("lookback_periods", 8))

    def _latest_publication(self, today: date) -> Tuple[int, int]:
        """Most recent (month, year) publication that should already exist"""
        released = [m for m in self.publication_months if m <= today.month]
        if released:
            return released[-1], today.year
        return self.publication_months[-1], today.year - 1

    def _previous_publication(self, month: int, year: int) -> Tuple[int, int]:
        """Publication immediately before (month, year)"""
        idx = self.publication_months.index(month)
        if idx > 0:
            return self.publication_months[idx - 1], year
        return self.publication_months[-1], year - 1

    def publication_schedule(self, today: Optional[date] = None) -> List[Tuple[int, int]]:
        """(month, year) pairs, strictly descending, latest first"""
        today = today or date.today()
        month, year = self._latest_publication(today)
        schedule = [(month, year)]
        for _ in range(self.lookback_periods):
            month, year = self._previous_publication(month, year)
            schedule.append((month, year))
        return schedule

    def build_url(self, month: int, year: int) -> str:
        """Interpolate month/year into the file name template"""
        filename = self.filename_template.format(month=f"{month:02d}", year=f"{year % 100:02d}")
        return f"{self.base_url}/{filename}"

    def generate_urls(self, today: Optional[date] = None) -> List[str]:
        """Candidate URLs ordered from most to least likely to exist"""
        urls = [self.build_url(month, year) for month, year in self.publication_schedule(today)]
        self.logger.info(f"Generated {len(urls)} candidate URLs")
        for i, url in enumerate(urls, 1):
            self.logger.debug(f"  {i}. {url}")
        return urls
