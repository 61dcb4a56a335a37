"""Drive one export: clone, walk, extract, write, clean up."""

import logging
from enum import Enum
from typing import Optional

from commit_facts.core.config import ExportConfig
from commit_facts.core.extractors import build_extractors
from commit_facts.core.history import HistoryWalker, commits_since
from commit_facts.core.pipeline import ExtractionPipeline
from commit_facts.core.repository import CommitRepository
from commit_facts.core.sink import CsvRowSink
from commit_facts.core.workspace import Cloner, transient_clone
from commit_facts.models.summary import ExportSummary

logger = logging.getLogger(__name__)


class RunState(str, Enum):
    """Lifecycle of an export run."""

    IDLE = "idle"
    CLONE_ACQUIRED = "clone_acquired"
    EXTRACTING = "extracting"
    CLEANUP = "cleanup"
    DONE = "done"
    FAILED = "failed"


class ExportRun:
    """One end-to-end export of a remote repository's history to CSV.

    The clone lives in a transient directory that is removed on every path
    out of ``run``, including a failure halfway through extraction. The
    output file is only created once the clone succeeded.
    """

    def __init__(
        self,
        config: ExportConfig,
        log: Optional[logging.Logger] = None,
        clone: Cloner = CommitRepository.clone,
    ):
        self.config = config
        self.log = log or logger
        self.clone = clone
        self.state = RunState.IDLE

    def run(self) -> ExportSummary:
        """Run the export and return its counters.

        Fatal errors are re-raised after cleanup; the run ends in FAILED.
        """
        if self.state is not RunState.IDLE:
            raise RuntimeError(f"Export run already used (state: {self.state.value})")

        try:
            with transient_clone(self.config.remote, self.log, self.clone) as repository:
                self._transition(RunState.CLONE_ACQUIRED)
                summary = self._export(repository)
                self._transition(RunState.CLEANUP)
        except Exception:
            self._transition(RunState.FAILED)
            raise

        self._transition(RunState.DONE)
        return summary

    def _export(self, repository: CommitRepository) -> ExportSummary:
        extractors = build_extractors(self.config.columns, repository)
        walker = HistoryWalker(repository.log_page, self.config.chunk_size, self.log)
        pipeline = ExtractionPipeline(
            commits_since(walker, self.config.since), extractors, self.log
        )

        with CsvRowSink.open(self.config.output_path, pipeline.schema, self.log) as sink:
            self._transition(RunState.EXTRACTING)
            for row in pipeline:
                sink.write(row)

        return ExportSummary(
            output_path=self.config.output_path,
            pages_fetched=walker.pages_fetched,
            commits_extracted=pipeline.commits_extracted,
            rows_written=sink.rows_written,
            rows_failed=sink.rows_failed,
            failed_values=pipeline.failed_values,
        )

    def _transition(self, state: RunState) -> None:
        self.log.debug("export %s -> %s", self.state.value, state.value)
        self.state = state


def run_export(
    config: ExportConfig, log: Optional[logging.Logger] = None
) -> ExportSummary:
    """Run a single export with the default GitPython clone."""
    return ExportRun(config, log).run()
