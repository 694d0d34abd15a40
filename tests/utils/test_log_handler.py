"""
Tests for log_handler.py
"""
import logging
import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent.joinpath("src")))

from utils.log_handler import LineRotatingFileHandler


@pytest.fixture
def rotating_logger(tmp_path):
    """Logger with a three-line rotating handler"""
    handler = LineRotatingFileHandler(tmp_path / "pipeline.log", max_lines=3, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger = logging.getLogger(f"rotation_test_{tmp_path.name}")
    logger.setLevel(logging.INFO)
    logger.propagate = False
    logger.addHandler(handler)
    yield logger, handler
    logger.removeHandler(handler)
    handler.close()


class TestLineRotatingFileHandler:
    """Tests for LineRotatingFileHandler"""

    def test_rotates_after_max_lines(self, tmp_path, rotating_logger):
        """Test a full file rolls over to pipeline_2.log"""
        # ARRANGE
        logger, handler = rotating_logger

        # ACT
        for i in range(5):
            logger.info(f"line {i}")
        handler.flush()

        # ASSERT
        first = (tmp_path / "pipeline.log").read_text(encoding="utf-8").splitlines()
        second = (tmp_path / "pipeline_2.log").read_text(encoding="utf-8").splitlines()
        assert first == ["line 0", "line 1", "line 2"]
        assert second == ["line 3", "line 4"]

    def test_resumes_after_full_file(self, tmp_path):
        """Test a new handler skips files that are already full"""
        # ARRANGE
        (tmp_path / "pipeline.log").write_text("a\nb\nc\n", encoding="utf-8")

        # ACT
        handler = LineRotatingFileHandler(tmp_path / "pipeline.log", max_lines=3)
        handler.close()

        # ASSERT
        assert handler.file_number == 2
        assert Path(handler.baseFilename).name == "pipeline_2.log"

    def test_appends_to_partial_file(self, tmp_path):
        """Test a partially filled file is reused with its line count"""
        (tmp_path / "pipeline.log").write_text("a\n", encoding="utf-8")

        handler = LineRotatingFileHandler(tmp_path / "pipeline.log", max_lines=3)
        handler.close()

        assert handler.file_number == 1
        assert handler.line_count == 1
