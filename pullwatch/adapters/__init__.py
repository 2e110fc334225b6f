"""Git platform adapters (base and implementations)."""

from pullwatch.adapters.base import PlatformAdapter, PlatformError
from pullwatch.adapters.github import GitHubAdapter

__all__ = ["PlatformAdapter", "PlatformError", "GitHubAdapter"]
