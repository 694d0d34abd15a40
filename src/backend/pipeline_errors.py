"""
Pipeline Errors
Exception types raised by the poverty ingestion pipeline
"""


class PovertyPipelineError(Exception):
    """Base class for pipeline errors"""


class SourceUnavailable(PovertyPipelineError):
    """Every candidate URL failed to download or parse"""

    def __init__(self, attempted: int, last_error: Exception = None):
        self.attempted = attempted
        self.last_error = last_error
        message = f"No workbook could be retrieved after trying {attempted} candidate URLs"
        if last_error is not None:
            message += f" (last error: {last_error})"
        super().__init__(message)


class SheetMissing(PovertyPipelineError):
    """A named sheet is absent from the workbook"""

    def __init__(self, sheet_name: str):
        self.sheet_name = sheet_name
        super().__init__(f"Sheet not found in workbook: {sheet_name}")


class WorkbookParseError(PovertyPipelineError):
    """Downloaded bytes could not be parsed as a spreadsheet"""
