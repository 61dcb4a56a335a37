"""Commit Facts - export per-commit facts from git history as CSV."""

__version__ = "0.1.0"
