"""Check: which pull requests are new versions since the last one seen.

Filters run cheapest first; the changed-files filter is last because it may
fetch more pages from the platform.
"""

import logging
from typing import Iterable, List

from pullwatch.adapters.base import PlatformAdapter, PlatformError
from pullwatch.config import Source
from pullwatch.errors import CheckError
from pullwatch.filters.skip_ci import contains_skip_ci
from pullwatch.filters.wanted_files import has_wanted_files
from pullwatch.models import PullRequest, Version

LOG = logging.getLogger("pullwatch.check")


def sort_versions(versions: Iterable[Version]) -> List[Version]:
    """Oldest first by commit timestamp; ties keep their order."""
    return sorted(versions, key=lambda v: v.committed_date)


def _skip_reason(pr: PullRequest, source: Source, version: Version) -> str | None:
    """Reason to skip the PR, or None. Does not touch the network."""
    if not source.disable_ci_skip:
        if contains_skip_ci(pr.title):
            return "skip ci in title"
        if contains_skip_ci(pr.tip.message):
            return "skip ci in commit message"

    if source.base_branch and pr.base_ref_name != source.base_branch:
        return f"base branch {pr.base_ref_name!r}"

    if not pr.updated_date > version.committed_date:
        return "not updated since last version"

    if source.labels and not any(pr.has_label(label) for label in source.labels):
        return "no wanted label"

    if source.disable_forks and pr.is_cross_repository:
        return "fork"

    if source.ignore_drafts and pr.is_draft:
        return "draft"

    if pr.approved_review_count < source.required_review_approvals:
        return f"{pr.approved_review_count} approved reviews"

    return None


def check(source: Source, version: Version, platform: PlatformAdapter) -> List[Version]:
    """Return the versions the pipeline should see, oldest first.

    - nothing new and a previous version: the previous version
    - something new and no previous version: only the latest
    - otherwise: every new version
    """
    states = source.effective_states
    try:
        pulls = platform.list_pull_requests(states)
    except PlatformError as e:
        raise CheckError(f"failed to get last commits: {e}") from e

    found: List[Version] = []
    for pr in pulls:
        reason = _skip_reason(pr, source, version)
        if reason is not None:
            LOG.debug("Skipping PR #%s: %s", pr.number, reason)
            continue

        if source.filters_paths:
            wanted = has_wanted_files(
                str(pr.number),
                source.paths,
                source.ignore_paths,
                pr.files,
                pr.files_has_next_page,
                pr.files_end_cursor,
                platform,
            )
            if not wanted:
                LOG.debug("Skipping PR #%s: no wanted files", pr.number)
                continue

        found.append(Version.from_pull_request(pr))

    found = sort_versions(found)
    LOG.info(
        "Checked %s pull requests (states=%s): %s new",
        len(pulls),
        ",".join(s.value for s in states),
        len(found),
    )

    if not found and not version.is_empty:
        return [version]
    if found and version.is_empty:
        return [found[-1]]
    return found
