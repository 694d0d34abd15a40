"""
Line Rotating Log Handler
"""

import logging
from pathlib import Path


class LineRotatingFileHandler(logging.FileHandler):
    """
    File handler that starts a new numbered file once the current one holds
    `max_lines` lines: pipeline.log, pipeline_2.log, pipeline_3.log, ...
    """

    def __init__(self, file_name, max_lines=3000, mode='a', encoding=None, delay=False):
        self.base_path = Path(file_name)
        self.max_lines = max_lines
        self.file_number = self._resume_file_number()
        self.line_count = self._count_lines(self._numbered_path(self.file_number))
        super().__init__(self._numbered_path(self.file_number), mode, encoding, delay)

    def _numbered_path(self, number: int) -> Path:
        """pipeline.log for file 1, pipeline_N.log afterwards"""
        if number == 1:
            return self.base_path
        return self.base_path.with_name(f"{self.base_path.stem}_{number}{self.base_path.suffix}")

    def _count_lines(self, path: Path) -> int:
        if not path.exists():
            return 0
        with open(path, 'rb') as f:
            return sum(1 for _ in f)

    def _resume_file_number(self) -> int:
        """Highest existing file number, moving on if that file is already full"""
        number = 1
        while self._numbered_path(number + 1).exists():
            number += 1
        if self._count_lines(self._numbered_path(number)) >= self.max_lines:
            number += 1
        return number

    def _rotate(self):
        """Close the current file and open the next numbered one"""
        self.close()
        self.file_number += 1
        self.line_count = 0
        self.baseFilename = str(self._numbered_path(self.file_number).resolve())
        self.stream = self._open()

    def emit(self, record):
        """Write the record, rotating first when the current file is full"""
        if self.line_count >= self.max_lines:
            self._rotate()
        super().emit(record)
        self.line_count += self.format(record).count("\n") + 1
