"""Error types raised by the export run.

Only fatal conditions are raised; per-value extraction and per-row write
failures are logged by the component that hit them and never escape it.
"""


class CommitFactsError(RuntimeError):
    """Base class for fatal export failures."""


class ConfigurationError(CommitFactsError):
    """Required configuration is missing or invalid."""


class AcquisitionError(CommitFactsError):
    """The working copy could not be created."""


class PaginationError(CommitFactsError):
    """A page of history could not be fetched."""


class SinkError(CommitFactsError):
    """The output could not be opened or its header written."""
