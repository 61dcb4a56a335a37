"""Tests for export configuration."""

from datetime import date
from pathlib import Path

import pytest

from commit_facts.core.config import DEFAULT_OUTPUT, load_config
from commit_facts.core.errors import ConfigurationError


def test_missing_remote_is_fatal():
    with pytest.raises(ConfigurationError, match="REMOTE"):
        load_config(environ={})


def test_defaults_from_environment():
    config = load_config(environ={"REMOTE": "https://example.com/repo.git"})

    assert config.remote == "https://example.com/repo.git"
    assert config.since == date.min
    assert config.output_path == DEFAULT_OUTPUT
    assert config.chunk_size == 100
    assert config.columns == ["message", "authored_at", "diff"]


def test_environment_values_are_parsed():
    config = load_config(
        environ={
            "REMOTE": "git@example.com:repo.git",
            "SINCE": "2024-01-01",
            "OUTPUT": "commits.csv",
            "CHUNK_SIZE": "25",
        }
    )

    assert config.since == date(2024, 1, 1)
    assert config.output_path == Path("commits.csv")
    assert config.chunk_size == 25


def test_explicit_values_override_environment():
    config = load_config(
        remote="/srv/repo",
        since=date(2023, 6, 1),
        chunk_size=10,
        columns=["id"],
        environ={"REMOTE": "ignored", "SINCE": "2024-01-01", "CHUNK_SIZE": "25"},
    )

    assert config.remote == "/srv/repo"
    assert config.since == date(2023, 6, 1)
    assert config.chunk_size == 10
    assert config.columns == ["id"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"chunk_size": 0},
        {"columns": ["message", "author"]},
        {"columns": ["message", "message"]},
        {"environ": {"REMOTE": "/srv/repo", "SINCE": "yesterday"}},
    ],
)
def test_invalid_values_are_configuration_errors(overrides):
    kwargs = {"remote": "/srv/repo", "environ": {}}
    kwargs.update(overrides)

    with pytest.raises(ConfigurationError):
        load_config(**kwargs)
