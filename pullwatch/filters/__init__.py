"""Pull request filters: paths, skip markers, wanted files."""

from pullwatch.filters.paths import PatternError, filter_ignore_path, filter_path, is_inside_path, matches
from pullwatch.filters.skip_ci import contains_skip_ci
from pullwatch.filters.wanted_files import CHANGED_FILES_PAGE_SIZE, has_wanted_files

__all__ = [
    "CHANGED_FILES_PAGE_SIZE",
    "PatternError",
    "contains_skip_ci",
    "filter_ignore_path",
    "filter_path",
    "has_wanted_files",
    "is_inside_path",
    "matches",
]
