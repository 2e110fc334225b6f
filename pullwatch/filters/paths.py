"""Changed-file path matching: shell-style globs plus directory prefixes.

Glob syntax (separator is ``/``):
- ``*`` matches any run of characters except ``/``
- ``?`` matches one character except ``/``
- ``[abc]``, ``[a-z]``, ``[^a-z]`` match one character from (or not from) a class,
  ``/`` included
- ``\\`` escapes the next character

A pattern also matches every path inside it when read as a directory:
``foo`` matches ``foo`` and ``foo/bar`` but not ``foobar``.
"""

import re
from functools import lru_cache
from typing import Iterable, List

from pullwatch.models import ChangedFile

SEPARATOR = "/"


class PatternError(ValueError):
    """Raised when a path pattern is not a valid glob."""

    def __init__(self, pattern: str, reason: str, path: str | None = None) -> None:
        self.pattern = pattern
        self.path = path
        self.reason = reason
        where = f" (matching {path!r})" if path is not None else ""
        super().__init__(f"invalid pattern {pattern!r}{where}: {reason}")


def _class_char(pattern: str, i: int) -> tuple[str, int]:
    """Read one class character (possibly escaped); a bare - or ] is malformed."""
    n = len(pattern)
    if i >= n:
        raise PatternError(pattern, "unterminated character class")
    ch = pattern[i]
    if ch in "-]":
        raise PatternError(pattern, f"unexpected {ch!r} in character class")
    if ch == "\\":
        i += 1
        if i >= n:
            raise PatternError(pattern, "trailing escape in character class")
        ch = pattern[i]
    return ch, i + 1


def _translate_class(pattern: str, i: int) -> tuple[str, int]:
    """Translate a character class starting after ``[``; return regex and next index."""
    parts: List[str] = []
    negate = False
    if i < len(pattern) and pattern[i] == "^":
        negate = True
        i += 1
    while True:
        if parts and i < len(pattern) and pattern[i] == "]":
            i += 1
            break
        lo, i = _class_char(pattern, i)
        hi = lo
        if i < len(pattern) and pattern[i] == "-":
            hi, i = _class_char(pattern, i + 1)
            if hi < lo:
                raise PatternError(pattern, f"bad range {lo}-{hi}")
        parts.append(re.escape(lo) if hi == lo else f"{re.escape(lo)}-{re.escape(hi)}")
    return f"[{'^' if negate else ''}{''.join(parts)}]", i


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a glob into an anchored regex. Raises PatternError if malformed."""
    out: List[str] = []
    not_sep = f"[^{re.escape(SEPARATOR)}]"
    i, n = 0, len(pattern)
    while i < n:
        ch = pattern[i]
        i += 1
        if ch == "*":
            while i < n and pattern[i] == "*":
                i += 1
            out.append(f"{not_sep}*")
        elif ch == "?":
            out.append(not_sep)
        elif ch == "[":
            regex, i = _translate_class(pattern, i)
            out.append(regex)
        elif ch == "\\":
            if i >= n:
                raise PatternError(pattern, "trailing escape")
            out.append(re.escape(pattern[i]))
            i += 1
        else:
            out.append(re.escape(ch))
    return re.compile("".join(out), re.DOTALL)


def glob_match(pattern: str, path: str) -> bool:
    """True if the glob matches the whole path."""
    try:
        regex = compile_pattern(pattern)
    except PatternError as e:
        raise PatternError(pattern, e.reason, path) from None
    return regex.fullmatch(path) is not None


def is_inside_path(parent: str, child: str) -> bool:
    """Check whether child is parent itself or lies inside it.

    foo/bar is inside foo, foobar is not. foo is inside foo, but not inside foo/.
    """
    if parent == child:
        return True
    prefix = parent if parent.endswith(SEPARATOR) else parent + SEPARATOR
    return child.startswith(prefix)


def matches(pattern: str, path: str) -> bool:
    """True if path matches the glob or lies inside the pattern as a directory."""
    return glob_match(pattern, path) or is_inside_path(pattern, path)


def filter_path(files: Iterable[ChangedFile], pattern: str) -> List[ChangedFile]:
    """Keep files matching pattern."""
    return [f for f in files if matches(pattern, f.path)]


def filter_ignore_path(files: Iterable[ChangedFile], pattern: str) -> List[ChangedFile]:
    """Keep files not matching pattern."""
    return [f for f in files if not matches(pattern, f.path)]
