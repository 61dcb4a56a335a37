"""Paginated, lazy traversal of repository history."""

import logging
from collections import deque
from datetime import date
from typing import Callable, Deque, Iterator, List, Optional

from commit_facts.core.errors import PaginationError
from commit_facts.models.commit_record import CommitRecord

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 100

PageFetcher = Callable[[int, int], List[CommitRecord]]


class HistoryWalker:
    """Single forward pass over history, one chunk at a time.

    ``fetch(skip, limit)`` is called with a skip offset that advances by the
    chunk size after every request. The walk ends at the first empty chunk.
    """

    def __init__(
        self,
        fetch: PageFetcher,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        log: Optional[logging.Logger] = None,
    ):
        if chunk_size < 1:
            raise ValueError("chunk_size must be positive")
        self.fetch = fetch
        self.chunk_size = chunk_size
        self.log = log or logger
        self.skip = 0
        self.pages_fetched = 0
        self.exhausted = False
        self._buffer: Deque[CommitRecord] = deque()

    def __iter__(self) -> "HistoryWalker":
        return self

    def __next__(self) -> CommitRecord:
        while not self._buffer:
            if self.exhausted:
                raise StopIteration
            self._fetch_next_chunk()
        return self._buffer.popleft()

    def _fetch_next_chunk(self) -> None:
        try:
            chunk = self.fetch(self.skip, self.chunk_size)
        except PaginationError:
            self.log.error("Failed to get commits at offset %d", self.skip)
            self.exhausted = True
            raise
        self.pages_fetched += 1
        self.log.debug(
            "Fetched %d commits at offset %d", len(chunk), self.skip
        )
        if not chunk:
            self.exhausted = True
            return
        self.skip += self.chunk_size
        self._buffer.extend(chunk)


def authored_after(commit: CommitRecord, since: date) -> bool:
    """Check if the commit's authored date, in its own offset, is after ``since``.

    The comparison is by calendar date, not by instant: a commit authored at
    any time on the ``since`` day itself does not qualify.
    """
    return commit.authored_at.date() > since


def commits_since(walker: HistoryWalker, since: date) -> Iterator[CommitRecord]:
    """Yield the walker's commits authored strictly after ``since``."""
    return (commit for commit in walker if authored_after(commit, since))
