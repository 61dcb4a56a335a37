"""Export configuration from CLI options and environment variables."""

import os
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel, ValidationError, field_validator

from commit_facts.core.errors import ConfigurationError
from commit_facts.core.extractors import DEFAULT_COLUMNS, available_columns
from commit_facts.core.history import DEFAULT_CHUNK_SIZE

REMOTE_ENV = "REMOTE"
SINCE_ENV = "SINCE"
OUTPUT_ENV = "OUTPUT"
CHUNK_SIZE_ENV = "CHUNK_SIZE"

DEFAULT_OUTPUT = Path("output.csv")


class ExportConfig(BaseModel):
    """Validated settings for one export run."""

    remote: str
    since: date = date.min
    output_path: Path = DEFAULT_OUTPUT
    chunk_size: int = DEFAULT_CHUNK_SIZE
    columns: List[str] = list(DEFAULT_COLUMNS)

    @field_validator("remote")
    @classmethod
    def _remote_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("remote must not be empty")
        return value

    @field_validator("chunk_size")
    @classmethod
    def _chunk_size_positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("chunk_size must be positive")
        return value

    @field_validator("columns")
    @classmethod
    def _columns_registered(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("at least one column is required")
        known = available_columns()
        unknown = [name for name in value if name not in known]
        if unknown:
            raise ValueError(f"unknown columns: {', '.join(unknown)}")
        if len(set(value)) != len(value):
            raise ValueError("columns must not repeat")
        return value


def load_config(
    remote: Optional[str] = None,
    since: Optional[date] = None,
    output_path: Optional[Path] = None,
    chunk_size: Optional[int] = None,
    columns: Optional[Sequence[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ExportConfig:
    """Build the config; explicit arguments win over environment variables."""
    environ = os.environ if environ is None else environ

    remote = remote or environ.get(REMOTE_ENV)
    if not remote:
        raise ConfigurationError(f"Environment variable {REMOTE_ENV} is not set")

    values: Dict[str, Any] = {"remote": remote}
    for key, value, env_name in (
        ("since", since, SINCE_ENV),
        ("output_path", output_path, OUTPUT_ENV),
        ("chunk_size", chunk_size, CHUNK_SIZE_ENV),
    ):
        if value is None:
            value = environ.get(env_name)
        if value is not None and value != "":
            values[key] = value
    if columns:
        values["columns"] = list(columns)

    try:
        return ExportConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
