"""Decide whether a pull request touches wanted files, fetching file pages on demand."""

import logging
from typing import List, Sequence

from pullwatch.adapters.base import PlatformAdapter, PlatformError
from pullwatch.errors import CheckError
from pullwatch.filters.paths import PatternError, filter_ignore_path, filter_path
from pullwatch.models import ChangedFile

# Maximum page size accepted by the platform for changed files
CHANGED_FILES_PAGE_SIZE = 100

LOG = logging.getLogger("pullwatch.filters.wanted_files")


def wanted(files: Sequence[ChangedFile], paths: Sequence[str], ignore_paths: Sequence[str]) -> List[ChangedFile]:
    """Files selected by paths (all files if none) and surviving every ignore pattern."""
    selected: List[ChangedFile] = []
    if paths:
        for pattern in paths:
            try:
                selected.extend(filter_path(files, pattern))
            except PatternError as e:
                raise CheckError(f"path match failed: {e}") from e
    else:
        selected = list(files)

    for pattern in ignore_paths:
        try:
            selected = filter_ignore_path(selected, pattern)
        except PatternError as e:
            raise CheckError(f"ignore path match failed: {e}") from e
    return selected


def has_wanted_files(
    pr_number: str,
    paths: Sequence[str],
    ignore_paths: Sequence[str],
    files: Sequence[ChangedFile],
    has_next_page: bool,
    end_cursor: str,
    platform: PlatformAdapter,
) -> bool:
    """Return True if any changed file of the PR is wanted.

    Starts with the already known page of files. While nothing wanted is found
    and the platform reports more pages, fetches the next page and checks it.
    Stops at the first page with a wanted file.
    """
    page = 1
    while True:
        if wanted(files, paths, ignore_paths):
            LOG.debug("PR #%s: wanted file found on page %s", pr_number, page)
            return True
        if not has_next_page:
            return False

        try:
            files, has_next_page, end_cursor = platform.get_changed_files(
                pr_number,
                CHANGED_FILES_PAGE_SIZE,
                end_cursor,
            )
        except PlatformError as e:
            raise CheckError(f"get more files failed: {e}") from e
        page += 1
        LOG.debug("PR #%s: fetched changed files page %s (%s files)", pr_number, page, len(files))
