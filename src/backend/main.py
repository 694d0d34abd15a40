"""
Main Pipeline Orchestrator
Downloads the INDEC poverty workbook and extracts its five cuadros into flat records
"""

import sys
from datetime import date, datetime
from typing import Dict, List, Optional

from config_loader import load_config
from pipeline_errors import SourceUnavailable, WorkbookParseError
from sourcing.source_locator import SourceLocator
from sourcing.workbook_fetcher import WorkbookFetcher
from workbook.workbook import Workbook
from table_extraction.national_rates import NationalRatesExtractor
from table_extraction.gap_severity import GapSeverityExtractor
from table_extraction.regional_rates import RegionalRatesExtractor
from records.poverty_record import PovertyRecord
from records.record_normalizer import RecordNormalizer
from records.record_statistics import RecordStatistics
from records.record_saver import RecordSaver

EXIT_COMPLETED = 0
EXIT_DEGRADED = 1
EXIT_SOURCE_UNAVAILABLE = 2


class PovertyPipeline:
    """Orchestrates download, extraction and normalization of poverty statistics"""

    def __init__(self, config=None, session=None):
        """
        Initialize pipeline with configuration

        Args:
            config: Config object. If None, loads default config.
            session: Optional requests-compatible session used for downloads.
        """
        self.config = config or load_config()
        self._setup_logging()
        self._initialize_components(session)

    def _setup_logging(self):
        """Setup main pipeline logging"""
        self.logger = self.config.setup_logger("poverty_pipeline", __name__)

    def _initialize_components(self, session):
        """Initialize sourcing, extraction and output components"""
        self.source_locator = SourceLocator(self.logger, self.config)
        self.fetcher = WorkbookFetcher(self.logger, self.config, session)
        self.extractors = self._build_extractors()
        self.normalizer = RecordNormalizer(self.logger)
        self.statistics = RecordStatistics(self.logger)
        self.saver = RecordSaver(self.logger, self.config)

    def _build_extractors(self) -> List:
        """Extractors in output order: national, indigence gap, poverty gap, regional"""
        layouts = self.config.table_layouts
        regions = self.config.target_regions or None
        return [
            NationalRatesExtractor(self.logger, layouts.get("national_rates")),
            GapSeverityExtractor(self.logger, layouts.get("indigence_gap")),
            GapSeverityExtractor(self.logger, {"sheet": "Cuadro 2.2", "kind": "poverty",
                                               **layouts.get("poverty_gap", {})}),
            RegionalRatesExtractor(self.logger, layouts.get("regional_poverty"), regions),
            RegionalRatesExtractor(self.logger, {"sheet": "Cuadro 4.4", "kind": "indigence",
                                                 **layouts.get("regional_indigence", {})}, regions),
        ]

    def download_workbook(self, today: Optional[date] = None) -> Workbook:
        """Locate candidate URLs and download the newest available workbook"""
        urls = self.source_locator.generate_urls(today)
        return self.fetcher.fetch(urls)

    def extract_all(self, workbook: Workbook) -> List[PovertyRecord]:
        """Run every extractor over one workbook and normalize the output"""
        batches = []
        for extractor in self.extractors:
            self.logger.info(f"Processing {extractor.sheet_name}...")
            batches.append(extractor.extract(workbook))
        return self.normalizer.combine(batches)

    def run(self, today: Optional[date] = None, workbook: Optional[Workbook] = None) -> List[PovertyRecord]:
        """
        Execute the complete pipeline.

        Raises:
            SourceUnavailable: no candidate URL produced a workbook.
        """
        if workbook is None:
            workbook = self.download_workbook(today)
        return self.extract_all(workbook)

    # ========== Job Wrapper ==========

    def _job_status(self, record_count: int) -> str:
        """'completed', or 'degraded' when the run yields fewer records than expected"""
        if record_count < self.config.expected_min_records:
            return "degraded"
        return "completed"

    def _log_job_outcome(self, results: Dict):
        """Log a line that separates outages from degraded extractions"""
        if results["status"] == "source_unavailable":
            self.logger.error(f"✗ SOURCE UNAVAILABLE: {results['error']}")
        elif results["status"] == "degraded":
            self.logger.warning(
                f"⚠ DEGRADED RUN: {results['summary']['total']} records, expected at least "
                f"{self.config.expected_min_records}; the source layout may have changed")
        else:
            self.logger.info(f"✓ RUN COMPLETED: {results['summary']['total']} records")
        self.logger.info(f"  Duration: {results['duration_seconds']:.1f} seconds")

    def run_job(self, today: Optional[date] = None, workbook: Optional[Workbook] = None,
                output_path=None, write_csv: bool = False) -> Dict:
        """Run the pipeline as a batch job and return a result dictionary"""
        start_time = datetime.now()
        results = {"status": "started", "records": [], "summary": None,
                   "source_url": None, "output": None}
        try:
            records = self.run(today, workbook)
            results["records"] = records
            results["source_url"] = self.fetcher.last_source_url if workbook is None else None
            results["summary"] = self.statistics.summarize(records)
            self.statistics.log_summary(results["summary"])
            saved = self.saver.save_csv(records, output_path) if write_csv else self.saver.save(records, output_path)
            results["output"] = str(saved)
            results["status"] = self._job_status(len(records))
        except SourceUnavailable as e:
            results["status"] = "source_unavailable"
            results["error"] = str(e)

        results["duration_seconds"] = (datetime.now() - start_time).total_seconds()
        self._log_job_outcome(results)
        return results


def load_workbook_file(logger, path) -> Optional[Workbook]:
    """Read a local workbook, logging instead of raising when the file is unusable"""
    try:
        return Workbook.from_path(path)
    except (FileNotFoundError, WorkbookParseError) as e:
        logger.error(f"✗ Could not read workbook {path}: {e}")
        return None


def _exit_code(status: str) -> int:
    return {
        "completed": EXIT_COMPLETED,
        "degraded": EXIT_DEGRADED,
    }.get(status, EXIT_SOURCE_UNAVAILABLE)


def main():
    """CLI entry point"""
    import argparse

    parser = argparse.ArgumentParser(
        description="Extract INDEC poverty and indigence statistics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Download the newest publication and write outputs/poverty_records.json
  python main.py

  # Extract from a workbook already on disk
  python main.py --workbook cuadros_informe_pobreza_09_25.xls

  # Show the candidate URLs for a given date
  python main.py --list-urls --date 2025-10-01
        """
    )

    parser.add_argument('--config', type=str, help='Path to config.yaml file (optional)')
    parser.add_argument('--workbook', type=str, help='Local .xls/.xlsx file to extract instead of downloading')
    parser.add_argument('--output', type=str, help='Output file path (default: outputs/poverty_records.json)')
    parser.add_argument('--csv', action='store_true', help='Write CSV instead of JSON')
    parser.add_argument('--date', type=str, help='Reference date YYYY-MM-DD for URL generation (default: today)')
    parser.add_argument('--list-urls', action='store_true', help='Print candidate URLs and exit')

    args = parser.parse_args()

    config = load_config(args.config) if args.config else load_config()
    pipeline = PovertyPipeline(config)
    today = datetime.strptime(args.date, "%Y-%m-%d").date() if args.date else None

    if args.list_urls:
        for url in pipeline.source_locator.generate_urls(today):
            print(url)
        sys.exit(EXIT_COMPLETED)

    workbook = None
    if args.workbook:
        workbook = load_workbook_file(pipeline.logger, args.workbook)
        if workbook is None:
            sys.exit(EXIT_SOURCE_UNAVAILABLE)
    results = pipeline.run_job(today=today, workbook=workbook,
                               output_path=args.output, write_csv=args.csv)
    sys.exit(_exit_code(results["status"]))


if __name__ == "__main__":
    main()
