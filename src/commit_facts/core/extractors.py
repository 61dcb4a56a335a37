"""Fact extractors: named, pure mappings from a commit to one column value.

New facts only need a ``name`` and an ``extract`` method; the pipeline and
the sink work off the ordered extractor list and nothing else.
"""

from typing import Any, Callable, Dict, List, Protocol, Sequence

from commit_facts.core.repository import CommitRepository
from commit_facts.models.commit_record import CommitRecord


class FactExtractor(Protocol):
    """Maps one commit to one output value."""

    name: str

    def extract(self, commit: CommitRecord) -> Any:
        ...


class CommitIdExtractor:
    """The commit hash."""

    name = "id"

    def extract(self, commit: CommitRecord) -> str:
        return commit.id


class MessageExtractor:
    """The full commit message, newlines and all.

    Quoting is left to the CSV writer.
    """

    name = "message"

    def extract(self, commit: CommitRecord) -> str:
        return commit.message


class AuthoredAtExtractor:
    """Authored time as ISO 8601 in the commit's own offset."""

    name = "authored_at"

    def extract(self, commit: CommitRecord) -> str:
        return commit.authored_at.isoformat()


class DiffExtractor:
    """Diff against the primary parent, or against the empty tree for roots."""

    name = "diff"

    def __init__(self, repository: CommitRepository):
        self.repository = repository

    def extract(self, commit: CommitRecord) -> str:
        return self.repository.diff(commit)


DEFAULT_COLUMNS = ("message", "authored_at", "diff")

EXTRACTOR_FACTORIES: Dict[str, Callable[[CommitRepository], FactExtractor]] = {
    CommitIdExtractor.name: lambda repository: CommitIdExtractor(),
    MessageExtractor.name: lambda repository: MessageExtractor(),
    AuthoredAtExtractor.name: lambda repository: AuthoredAtExtractor(),
    DiffExtractor.name: DiffExtractor,
}


def available_columns() -> List[str]:
    """List every registered extractor name."""
    return list(EXTRACTOR_FACTORIES)


def build_extractors(
    columns: Sequence[str], repository: CommitRepository
) -> List[FactExtractor]:
    """Instantiate extractors for ``columns``, keeping their order."""
    unknown = [name for name in columns if name not in EXTRACTOR_FACTORIES]
    if unknown:
        raise ValueError(f"Unknown columns: {', '.join(unknown)}")
    return [EXTRACTOR_FACTORIES[name](repository) for name in columns]
