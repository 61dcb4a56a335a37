"""Turn commits into output rows, one extractor per column."""

import logging
from typing import Any, Iterable, Iterator, List, Optional, Sequence

from commit_facts.core.extractors import FactExtractor
from commit_facts.models.commit_record import CommitRecord

logger = logging.getLogger(__name__)

# Value written in place of a fact whose extractor raised.
FAILED_VALUE = ""


class ExtractionPipeline:
    """Lazily apply every extractor, in order, to every commit.

    A failing extractor costs only its own cell: the failure is logged and
    the column gets ``FAILED_VALUE``, so every row keeps the schema width.
    """

    def __init__(
        self,
        commits: Iterable[CommitRecord],
        extractors: Sequence[FactExtractor],
        log: Optional[logging.Logger] = None,
    ):
        self.commits = commits
        self.extractors = list(extractors)
        self.log = log or logger
        self.commits_extracted = 0
        self.failed_values = 0

    @property
    def schema(self) -> List[str]:
        return [extractor.name for extractor in self.extractors]

    def __iter__(self) -> Iterator[List[Any]]:
        for commit in self.commits:
            yield self.extract_row(commit)

    def extract_row(self, commit: CommitRecord) -> List[Any]:
        row = [self._extract_value(extractor, commit) for extractor in self.extractors]
        self.commits_extracted += 1
        return row

    def _extract_value(self, extractor: FactExtractor, commit: CommitRecord) -> Any:
        try:
            return extractor.extract(commit)
        except Exception as e:
            self.failed_values += 1
            self.log.error(
                "Failed to extract %s from commit %s: %s", extractor.name, commit.id, e
            )
            return FAILED_VALUE
