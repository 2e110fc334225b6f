"""Abstract base for Git platform adapters."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Tuple

from pullwatch.models import ChangedFile, PullRequest, PullRequestState


class PlatformError(Exception):
    """Raised when a Git platform API call fails."""

    pass


class PlatformAdapter(ABC):
    """Read-side interface to a Git hosting platform."""

    @abstractmethod
    def list_pull_requests(self, states: Iterable[PullRequestState]) -> List[PullRequest]:
        """Return all PRs in the given states, each with its first page of changed files."""
        ...

    @abstractmethod
    def get_changed_files(
        self,
        pr_number: str,
        page_size: int,
        cursor: str,
    ) -> Tuple[List[ChangedFile], bool, str]:
        """Return (files, has_next_page, end_cursor) for the page after cursor."""
        ...
