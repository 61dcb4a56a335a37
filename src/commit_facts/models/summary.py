"""Summary model for a finished export run."""

from pathlib import Path

from pydantic import BaseModel


class ExportSummary(BaseModel):
    """Counters reported at the end of an export."""

    output_path: Path
    pages_fetched: int = 0
    commits_extracted: int = 0
    rows_written: int = 0
    rows_failed: int = 0
    failed_values: int = 0
