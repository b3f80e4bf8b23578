# matcher.py
# Job name matching.
#
# Two modes, chosen by the shape of the pattern:
#   "/build-\d+/"  -> case-insensitive regex, substring search (user controls anchors)
#   "test"         -> literal prefix that must be followed by end-of-name or a
#                     separator: space, "-", "_" or "("
#
# So "test" matches "test", "test-ubuntu", "test (node-16)" but not "testing".

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Pattern, Sequence

from .model import JobRecord

REGEX = "regex"
PREFIX = "prefix"

# separators allowed right after a literal prefix
_SEPARATORS = r"[\s\-_(]"


@dataclass(frozen=True)
class MatchPattern:
    kind: str  # REGEX | PREFIX
    source: str
    compiled: Pattern[str]

    def matches(self, name: str) -> bool:
        return self.compiled.search(name) is not None


def is_regex_pattern(pattern: str) -> bool:
    return len(pattern) >= 2 and pattern.startswith("/") and pattern.endswith("/")


def compile_pattern(pattern: str) -> MatchPattern:
    """
    Turn a raw job-name pattern into a MatchPattern.

    Raises:
        re.error: if a /.../ pattern holds an invalid regular expression
    """
    if is_regex_pattern(pattern):
        return MatchPattern(REGEX, pattern, re.compile(pattern[1:-1], re.IGNORECASE))

    literal = re.escape(pattern)
    return MatchPattern(
        PREFIX,
        pattern,
        re.compile(rf"^{literal}(?:{_SEPARATORS}|$)", re.IGNORECASE),
    )


def match_names(pattern: str, candidates: Iterable[str]) -> List[str]:
    """Return the candidates matching `pattern`, in their original order."""
    mp = compile_pattern(pattern)
    return [name for name in candidates if mp.matches(name)]


def match_jobs(pattern: str, jobs: Sequence[JobRecord]) -> List[JobRecord]:
    """Same as match_names, but over job records."""
    mp = compile_pattern(pattern)
    return [job for job in jobs if mp.matches(job.name)]
