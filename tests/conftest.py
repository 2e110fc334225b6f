"""Shared fakes and pull request fixtures for check tests."""

import logging
from datetime import UTC, datetime, timedelta
from typing import Dict, Iterable, List, Tuple

import pytest

from pullwatch.adapters.base import PlatformAdapter, PlatformError
from pullwatch.models import ChangedFile, Commit, Label, PullRequest, PullRequestState

BASE_TIME = datetime(2024, 6, 1, 12, 0, 0, tzinfo=UTC)


def files(*paths: str) -> List[ChangedFile]:
    return [ChangedFile(path=p) for p in paths]


class FakePlatform(PlatformAdapter):
    """In-memory platform: PRs filtered by state, extra file pages per PR number."""

    def __init__(
        self,
        pulls: Iterable[PullRequest] = (),
        pages: Dict[str, List[List[ChangedFile]]] | None = None,
        list_error: Exception | None = None,
        files_error: Exception | None = None,
    ) -> None:
        self.pulls = list(pulls)
        self.pages = {k: list(v) for k, v in (pages or {}).items()}
        self.list_error = list_error
        self.files_error = files_error
        self.list_calls: List[List[PullRequestState]] = []
        self.files_calls: List[Tuple[str, int, str]] = []

    def list_pull_requests(self, states: Iterable[PullRequestState]) -> List[PullRequest]:
        states = list(states)
        self.list_calls.append(states)
        if self.list_error is not None:
            raise self.list_error
        return [p for p in self.pulls if p.state in states]

    def get_changed_files(self, pr_number: str, page_size: int, cursor: str) -> Tuple[List[ChangedFile], bool, str]:
        self.files_calls.append((pr_number, page_size, cursor))
        if self.files_error is not None:
            raise self.files_error
        remaining = self.pages.get(pr_number) or []
        if not remaining:
            raise PlatformError(f"no more pages for #{pr_number}")
        page = remaining.pop(0)
        has_next = bool(remaining)
        return page, has_next, f"cursor-{pr_number}-{len(remaining)}" if has_next else ""


def create_test_pr(
    number: int,
    base_branch: str = "master",
    skip_ci: bool = False,
    is_cross_repository: bool = False,
    approved_reviews: int = 0,
    labels: List[str] | None = None,
    is_draft: bool = False,
    state: PullRequestState = PullRequestState.OPEN,
    first_page: List[ChangedFile] | None = None,
    has_next_page: bool = False,
) -> PullRequest:
    """PR #n committed n days before BASE_TIME (lower numbers are newer)."""
    date = BASE_TIME - timedelta(days=number)
    message = f"commit message{number}"
    if skip_ci:
        message = "[skip ci]" + message
    closed_at = merged_at = None
    # Closed and merged PRs are updated when they changed state, after any open PR commit
    if state == PullRequestState.CLOSED:
        closed_at = BASE_TIME - timedelta(hours=2)
    elif state == PullRequestState.MERGED:
        merged_at = BASE_TIME - timedelta(hours=1)
    return PullRequest(
        number=number,
        title=f"pr{number} title",
        url=f"pr{number} url",
        base_ref_name=base_branch,
        head_ref_name=f"pr{number}",
        is_cross_repository=is_cross_repository,
        is_draft=is_draft,
        state=state,
        closed_at=closed_at,
        merged_at=merged_at,
        tip=Commit(oid=f"oid{number}", committed_date=date, pushed_date=date, message=message),
        approved_review_count=approved_reviews,
        labels=[Label(name=n) for n in labels or []],
        files=first_page or [],
        files_has_next_page=has_next_page,
        files_end_cursor=f"cursor-{number}" if has_next_page else "",
    )


@pytest.fixture(autouse=True)
def reset_pullwatch_logger():
    """Drop handlers main() or setup_logging() left on the pullwatch logger."""
    yield
    logger = logging.getLogger("pullwatch")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def test_pull_requests() -> List[PullRequest]:
    """Twelve PRs covering skip ci, forks, approvals, labels, drafts, states and files."""
    closed, merged = PullRequestState.CLOSED, PullRequestState.MERGED
    return [
        create_test_pr(1, skip_ci=True),
        create_test_pr(2, first_page=files("README.md", "travis.yml")),
        create_test_pr(3, is_draft=True, first_page=files("terraform/modules/ecs/main.tf", "README.md")),
        create_test_pr(4, first_page=files("terraform/modules/variables.tf", "travis.yml")),
        create_test_pr(5, is_cross_repository=True),
        create_test_pr(6),
        create_test_pr(7, base_branch="develop", labels=["enhancement"]),
        create_test_pr(8, approved_reviews=1, labels=["wontfix"]),
        create_test_pr(9),
        create_test_pr(10, state=closed),
        create_test_pr(11, state=merged),
        create_test_pr(12),
    ]
