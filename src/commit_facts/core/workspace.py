"""Transient working area holding the clone for one run."""

import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Optional

from commit_facts.core.errors import AcquisitionError
from commit_facts.core.repository import CommitRepository

logger = logging.getLogger(__name__)

TEMP_PREFIX = "commit_facts_"

Cloner = Callable[[str, Path, logging.Logger], CommitRepository]


@contextmanager
def transient_directory(
    prefix: str = TEMP_PREFIX, log: Optional[logging.Logger] = None
) -> Iterator[Path]:
    """Create a uniquely named temp directory and remove it on exit."""
    log = log or logger
    try:
        temp = Path(tempfile.mkdtemp(prefix=prefix))
    except OSError as e:
        log.error("Failed to create temp directory: %s", e)
        raise AcquisitionError(f"Failed to create temp directory: {e}") from e

    log.debug("created %s", temp)
    try:
        yield temp
    finally:
        remove_tree(temp, log)


def remove_tree(path: Path, log: Optional[logging.Logger] = None) -> bool:
    """Recursively delete ``path``; a failure is only a warning."""
    log = log or logger
    try:
        shutil.rmtree(path)
    except OSError as e:
        log.warning("failed to delete temp directory %s: %s", path, e)
        return False
    log.debug("deleted %s", path)
    return True


@contextmanager
def transient_clone(
    remote: str,
    log: Optional[logging.Logger] = None,
    clone: Cloner = CommitRepository.clone,
    prefix: str = TEMP_PREFIX,
) -> Iterator[CommitRepository]:
    """Clone ``remote`` into a fresh temp directory for the duration of the block."""
    log = log or logger
    with transient_directory(prefix, log) as temp:
        repository = clone(remote, temp, log)
        try:
            yield repository
        finally:
            repository.close()
