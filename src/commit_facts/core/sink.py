"""CSV row sink: header once, then rows, each write isolated."""

import csv
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, List, Optional, Sequence, TextIO

from commit_facts.core.errors import SinkError

logger = logging.getLogger(__name__)


class CsvRowSink:
    """Writes rows under a fixed header to a text stream."""

    def __init__(
        self,
        stream: TextIO,
        schema: Sequence[str],
        log: Optional[logging.Logger] = None,
    ):
        self.stream = stream
        self.schema = list(schema)
        self.log = log or logger
        self.rows_written = 0
        self.rows_failed = 0
        self._writer = csv.writer(stream)
        self._header_written = False

    @classmethod
    @contextmanager
    def open(
        cls,
        path: Path,
        schema: Sequence[str],
        log: Optional[logging.Logger] = None,
    ) -> Iterator["CsvRowSink"]:
        """Open ``path`` for writing and emit the header before yielding."""
        log = log or logger
        try:
            stream = open(path, "w", encoding="utf-8", newline="")
        except OSError as e:
            log.error("Failed to open %s for writing: %s", path, e)
            raise SinkError(f"Failed to open {path}: {e}") from e

        log.debug("created %s", path)
        try:
            sink = cls(stream, schema, log)
            sink.write_header()
            yield sink
        finally:
            stream.close()

    def write_header(self) -> None:
        if self._header_written:
            return
        try:
            self._writer.writerow(self.schema)
        except (csv.Error, OSError) as e:
            raise SinkError(f"Failed to write header {self.schema}: {e}") from e
        self._header_written = True

    def write(self, row: Sequence[Any]) -> bool:
        """Write one row; return False if it could not be written."""
        values: List[Any] = list(row)
        if len(values) != len(self.schema):
            self.rows_failed += 1
            self.log.error(
                "Failed to print a record with %d values for %d columns: %r",
                len(values),
                len(self.schema),
                values,
            )
            return False

        try:
            self._writer.writerow(values)
        except (csv.Error, OSError, UnicodeError, ValueError) as e:
            self.rows_failed += 1
            self.log.error("Failed to print a record: %r (%s)", values, e)
            return False

        self.rows_written += 1
        self.log.debug("added record %r", values)
        return True
