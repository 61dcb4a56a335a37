"""Data models for Commit Facts."""

from .commit_record import CommitRecord
from .summary import ExportSummary

__all__ = ["CommitRecord", "ExportSummary"]
