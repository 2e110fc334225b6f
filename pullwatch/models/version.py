"""Version record: the watermark consumed and emitted by check."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from pullwatch.models.pr import PullRequest, Timestamp

# Zero time used when no prior version exists
EPOCH = datetime(1, 1, 1, tzinfo=UTC)


class Version(BaseModel):
    """Pull request number, tip commit and its last update time.

    An empty ``pr`` means no version has been seen yet.
    """

    model_config = ConfigDict(populate_by_name=True)

    pr: str = Field(default="", description="Pull request number as a string")
    commit: str = Field(default="", description="Tip commit oid")
    committed_date: Timestamp = Field(default=EPOCH, alias="committed", description="Last update time")

    @classmethod
    def from_pull_request(cls, pr: PullRequest) -> "Version":
        return cls(pr=str(pr.number), commit=pr.tip.oid, committed_date=pr.updated_date)

    @property
    def is_empty(self) -> bool:
        return self.pr == ""

    def to_json(self) -> dict[str, str]:
        """Serialize with the resource's field names (pr, commit, committed)."""
        return self.model_dump(mode="json", by_alias=True)
