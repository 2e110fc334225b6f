"""Data models for pull requests and versions (Pydantic)."""

from pullwatch.models.pr import ChangedFile, Commit, Label, PullRequest
from pullwatch.models.state import PullRequestState
from pullwatch.models.version import EPOCH, Version

__all__ = ["EPOCH", "ChangedFile", "Commit", "Label", "PullRequest", "PullRequestState", "Version"]
