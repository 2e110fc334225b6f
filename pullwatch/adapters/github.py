"""GitHub GraphQL API adapter."""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Tuple

import requests

from pullwatch.adapters.base import PlatformAdapter, PlatformError
from pullwatch.models import EPOCH, ChangedFile, Commit, Label, PullRequest, PullRequestState

DEFAULT_API_URL = "https://api.github.com/graphql"
PAGE_SIZE = 100

LOG = logging.getLogger("pullwatch.adapters.github")

LIST_PULL_REQUESTS_QUERY = """
    query($owner: String!, $name: String!, $states: [PullRequestState!], $prCursor: String) {
      repository(owner: $owner, name: $name) {
        pullRequests(first: 100, states: $states, after: $prCursor, orderBy: {field: UPDATED_AT, direction: DESC}) {
          pageInfo {
            hasNextPage
            endCursor
          }
          nodes {
            number
            title
            url
            baseRefName
            headRefName
            isCrossRepository
            isDraft
            state
            closedAt
            mergedAt
            reviews(states: APPROVED) {
              totalCount
            }
            labels(first: 100) {
              nodes {
                name
              }
            }
            files(first: 100) {
              pageInfo {
                hasNextPage
                endCursor
              }
              nodes {
                path
              }
            }
            commits(last: 1) {
              nodes {
                commit {
                  oid
                  committedDate
                  pushedDate
                  message
                }
              }
            }
          }
        }
      }
    }
    """

CHANGED_FILES_QUERY = """
    query($owner: String!, $name: String!, $number: Int!, $pageSize: Int!, $cursor: String) {
      repository(owner: $owner, name: $name) {
        pullRequest(number: $number) {
          files(first: $pageSize, after: $cursor) {
            pageInfo {
              hasNextPage
              endCursor
            }
            nodes {
              path
            }
          }
        }
      }
    }
    """


def _parse_iso(s: str | None) -> datetime | None:
    if not s:
        return None
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def _files_from_api(data: Dict[str, Any]) -> Tuple[List[ChangedFile], bool, str]:
    page_info = data.get("pageInfo") or {}
    files = [ChangedFile(path=n["path"]) for n in (data.get("nodes") or []) if n and "path" in n]
    return files, bool(page_info.get("hasNextPage")), page_info.get("endCursor") or ""


def _pr_from_api(data: Dict[str, Any]) -> PullRequest:
    commits = (data.get("commits") or {}).get("nodes") or []
    tip: Dict[str, Any] = {}
    if commits and commits[-1]:
        tip = commits[-1].get("commit") or {}
    labels = [Label(name=n["name"]) for n in ((data.get("labels") or {}).get("nodes") or []) if n and "name" in n]
    files, has_next, cursor = _files_from_api(data.get("files") or {})
    return PullRequest(
        number=data["number"],
        title=data.get("title") or "",
        url=data.get("url") or "",
        base_ref_name=data.get("baseRefName") or "",
        head_ref_name=data.get("headRefName") or "",
        is_cross_repository=bool(data.get("isCrossRepository")),
        is_draft=bool(data.get("isDraft")),
        state=PullRequestState(data.get("state") or "OPEN"),
        closed_at=_parse_iso(data.get("closedAt")),
        merged_at=_parse_iso(data.get("mergedAt")),
        tip=Commit(
            oid=tip.get("oid") or "",
            committed_date=_parse_iso(tip.get("committedDate")) or EPOCH,
            pushed_date=_parse_iso(tip.get("pushedDate")),
            message=tip.get("message") or "",
        ),
        approved_review_count=(data.get("reviews") or {}).get("totalCount") or 0,
        labels=labels,
        files=files,
        files_has_next_page=has_next,
        files_end_cursor=cursor,
    )


def split_repository(repository: str) -> Tuple[str, str]:
    """Split owner/name. Raises ValueError on any other shape."""
    parts = repository.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"repository must be owner/name, got {repository!r}")
    return parts[0], parts[1]


class GitHubAdapter(PlatformAdapter):
    """GitHub GraphQL API implementation (read-only)."""

    def __init__(
        self,
        repository: str,
        token: str,
        api_url: str = DEFAULT_API_URL,
        verify_ssl: bool = True,
    ) -> None:
        self._owner, self._name = split_repository(repository)
        self._api_url = api_url.rstrip("/")
        self._session = requests.Session()
        self._session.headers["Authorization"] = f"bearer {token}"
        self._session.headers["Accept"] = "application/json"
        self._session.verify = verify_ssl

    def _query(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        try:
            resp = self._session.request(
                "POST",
                self._api_url,
                json={"query": query, "variables": variables},
                timeout=30,
            )
        except requests.RequestException as e:
            raise PlatformError(f"request failed: {e}") from e
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                msg = resp.json().get("message", msg)
            except ValueError:
                pass
            raise PlatformError(f"{resp.status_code}: {msg}")
        try:
            payload = resp.json() or {}
        except ValueError as e:
            raise PlatformError(f"invalid JSON response: {e}") from e
        errors = payload.get("errors")
        if errors:
            messages = "; ".join(str(e.get("message", e)) for e in errors)
            raise PlatformError(f"graphql: {messages}")
        return payload.get("data") or {}

    def _repository(self, data: Dict[str, Any]) -> Dict[str, Any]:
        repo = data.get("repository")
        if repo is None:
            raise PlatformError(f"repository not found: {self._owner}/{self._name}")
        return repo

    def list_pull_requests(self, states: Iterable[PullRequestState]) -> List[PullRequest]:
        variables: Dict[str, Any] = {
            "owner": self._owner,
            "name": self._name,
            "states": [PullRequestState(s).value for s in states],
            "prCursor": None,
        }
        pulls: List[PullRequest] = []
        while True:
            data = self._repository(self._query(LIST_PULL_REQUESTS_QUERY, variables))
            conn = data.get("pullRequests") or {}
            pulls.extend(_pr_from_api(n) for n in (conn.get("nodes") or []) if n)
            page_info = conn.get("pageInfo") or {}
            if not page_info.get("hasNextPage"):
                break
            variables["prCursor"] = page_info.get("endCursor")
        LOG.debug("Listed %s pull requests in %s/%s", len(pulls), self._owner, self._name)
        return pulls

    def get_changed_files(
        self,
        pr_number: str,
        page_size: int,
        cursor: str,
    ) -> Tuple[List[ChangedFile], bool, str]:
        variables = {
            "owner": self._owner,
            "name": self._name,
            "number": int(pr_number),
            "pageSize": min(page_size, PAGE_SIZE),
            "cursor": cursor or None,
        }
        data = self._repository(self._query(CHANGED_FILES_QUERY, variables))
        pr = data.get("pullRequest")
        if pr is None:
            raise PlatformError(f"pull request not found: #{pr_number}")
        return _files_from_api(pr.get("files") or {})
