"""Pull request model as returned by a platform adapter."""

from datetime import UTC, datetime
from typing import Annotated, List

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from pullwatch.models.state import PullRequestState


def _ensure_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


Timestamp = Annotated[datetime, AfterValidator(_ensure_utc)]


class ChangedFile(BaseModel):
    """A file touched by a pull request. Identity is the path."""

    model_config = ConfigDict(frozen=True)

    path: str


class Label(BaseModel):
    """Label attached to a pull request."""

    model_config = ConfigDict(frozen=True)

    name: str


class Commit(BaseModel):
    """Head (tip) commit of a pull request."""

    oid: str = ""
    committed_date: Timestamp
    pushed_date: Timestamp | None = None
    message: str = ""


class PullRequest(BaseModel):
    """Pull request with its tip commit, review summary and first page of files."""

    number: int
    title: str = ""
    url: str = ""
    base_ref_name: str = ""
    head_ref_name: str = ""
    is_cross_repository: bool = False
    is_draft: bool = False
    state: PullRequestState = PullRequestState.OPEN
    closed_at: Timestamp | None = None
    merged_at: Timestamp | None = None
    tip: Commit
    approved_review_count: int = 0
    labels: List[Label] = Field(default_factory=list)
    files: List[ChangedFile] = Field(default_factory=list)
    files_has_next_page: bool = False
    files_end_cursor: str = ""

    @property
    def updated_date(self) -> datetime:
        """Last time the PR changed: by commit, push, close or merge."""
        if self.state == PullRequestState.CLOSED and self.closed_at is not None:
            return self.closed_at
        if self.state == PullRequestState.MERGED and self.merged_at is not None:
            return self.merged_at
        date = self.tip.committed_date
        if self.tip.pushed_date is not None and self.tip.pushed_date > date:
            date = self.tip.pushed_date
        return date

    def has_label(self, name: str) -> bool:
        return any(label.name == name for label in self.labels)
