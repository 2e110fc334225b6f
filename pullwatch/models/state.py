"""Pull request state (GitHub PullRequestState)."""

from enum import Enum


class PullRequestState(str, Enum):
    """Closed set of pull request states."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"
    MERGED = "MERGED"

    @classmethod
    def _missing_(cls, value: object) -> "PullRequestState | None":
        if isinstance(value, str):
            upper = value.strip().upper()
            for member in cls:
                if member.value == upper:
                    return member
        return None
