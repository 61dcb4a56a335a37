"""Repository access over GitPython: clone, paged history and diffs."""

import logging
from pathlib import Path
from typing import List, Optional

import git
from git import Repo

from commit_facts.core.errors import AcquisitionError, PaginationError
from commit_facts.models.commit_record import CommitRecord

logger = logging.getLogger(__name__)


class CommitRepository:
    """Read-only view of a cloned repository's history."""

    # Empty tree SHA for diffing root commits
    EMPTY_TREE_SHA = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"

    def __init__(self, repo: Repo, log: Optional[logging.Logger] = None):
        self.repo = repo
        self.log = log or logger

    @property
    def working_dir(self) -> Path:
        return Path(self.repo.working_dir)

    @classmethod
    def clone(
        cls, remote: str, destination: Path, log: Optional[logging.Logger] = None
    ) -> "CommitRepository":
        """Clone ``remote`` into ``destination``."""
        log = log or logger
        try:
            repo = Repo.clone_from(remote, str(destination))
        except (git.exc.GitCommandError, OSError) as e:
            log.error("Failed to clone %s into %s: %s", remote, destination, e)
            raise AcquisitionError(f"Failed to clone {remote}: {e}") from e
        log.debug("Opened repo %s", repo.git_dir)
        return cls(repo, log)

    def log_page(self, skip: int, limit: int) -> List[CommitRecord]:
        """Get up to ``limit`` commits after skipping ``skip``, newest first.

        Returns an empty list once history is exhausted, including for a
        repository with no commits at all.
        """
        if not self.repo.head.is_valid():
            return []

        try:
            commits = list(self.repo.iter_commits("HEAD", skip=skip, max_count=limit))
        except (git.exc.GitCommandError, ValueError) as e:
            raise PaginationError(
                f"Failed to fetch commits {skip}..{skip + limit}: {e}"
            ) from e

        return [CommitRecord.from_git(commit) for commit in commits]

    def diff(self, record: CommitRecord) -> str:
        """Get the textual diff a commit introduced over its primary parent.

        Root commits are diffed against the empty tree, so every file they
        contain shows up as added. The trailing newline git prints is kept;
        bytes that are not UTF-8 decode to U+FFFD.
        """
        base = record.parent_id or self.EMPTY_TREE_SHA
        output = self.repo.git.diff(
            base,
            record.id,
            no_color=True,
            stdout_as_string=False,
            strip_newline_in_stdout=False,
        )
        return output.decode("utf-8", "replace")

    def close(self) -> None:
        self.repo.close()
