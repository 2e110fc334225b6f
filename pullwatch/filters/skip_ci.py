"""Detection of [ci skip] / [skip ci] markers."""

import re

SKIP_CI_RE = re.compile(r"\[(ci skip|skip ci)\]", re.IGNORECASE)


def contains_skip_ci(text: str) -> bool:
    """Return True if text contains [ci skip] or [skip ci] (any case)."""
    return SKIP_CI_RE.search(text or "") is not None
