"""Shared fixtures: real git repositories with controlled author dates."""

import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict, List, Optional

import pytest
from git import Repo

from commit_facts.models.commit_record import CommitRecord


def git_date(when: datetime) -> str:
    """Format an aware datetime as git's internal '<seconds> <offset>' date."""
    return f"{int(when.timestamp())} {when.strftime('%z')}"


def commit_files(
    repo: Repo, message: str, when: datetime, files: Dict[str, str]
) -> str:
    """Write ``files`` into the work tree and commit them at ``when``."""
    root = Path(repo.working_dir)
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    repo.index.add(list(files))
    commit = repo.index.commit(
        message, author_date=git_date(when), commit_date=git_date(when)
    )
    return commit.hexsha


def init_repo(path: Path) -> Repo:
    repo = Repo.init(path)
    with repo.config_writer() as config:
        config.set_value("user", "name", "Test User")
        config.set_value("user", "email", "test@example.com")
    return repo


def make_record(
    day: int,
    offset_hours: int = 0,
    hour: int = 12,
    message: Optional[str] = None,
    parent_id: Optional[str] = None,
) -> CommitRecord:
    """Build a record authored on 2024-01-<day> in the given offset."""
    tz = timezone(timedelta(hours=offset_hours))
    return CommitRecord(
        id=f"{day:02d}{hour:02d}{offset_hours:+03d}".ljust(40, "0"),
        authored_at=datetime(2024, 1, day, hour, tzinfo=tz),
        message=message or f"Commit on day {day}",
        parent_id=parent_id,
    )


class FakeHistory:
    """In-memory, newest-first history that records page requests."""

    def __init__(self, records: List[CommitRecord]):
        self.records = records
        self.requests: List[tuple] = []

    def __call__(self, skip: int, limit: int) -> List[CommitRecord]:
        self.requests.append((skip, limit))
        return self.records[skip : skip + limit]


UTC = timezone.utc
DAY_1 = datetime(2024, 1, 1, 12, tzinfo=UTC)
DAY_2 = datetime(2024, 1, 2, 12, tzinfo=UTC)
DAY_3 = datetime(2024, 1, 3, 12, tzinfo=UTC)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def three_day_repo(temp_dir):
    """A repository with one commit on each of 2024-01-01, 02 and 03."""
    repo = init_repo(temp_dir / "remote")
    commit_files(repo, "Add readme\n\nFirst commit.", DAY_1, {"README.md": "# Demo\n"})
    commit_files(repo, "Add main", DAY_2, {"main.py": "print('hello')\n"})
    commit_files(
        repo, "Update main", DAY_3, {"main.py": "print('hello, world')\n"}
    )
    yield repo
    repo.close()


def commit_bytes(repo: Repo, message: str, when: datetime, name: str, data: bytes) -> str:
    """Commit one file with raw ``data``, bypassing any text encoding."""
    (Path(repo.working_dir) / name).write_bytes(data)
    repo.index.add([name])
    commit = repo.index.commit(
        message, author_date=git_date(when), commit_date=git_date(when)
    )
    return commit.hexsha
