"""Normalize the different ``match`` shapes into a single predicate."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence

from wcmatch import glob

from transform_chain.errors import BadMatcherError

logger = logging.getLogger(__name__)

Matcher = Callable[[str], bool]

# minimatch-style globbing: "**" spans directories, "{a,b}" expands,
# "*" stops at "/", and dotfiles only match an explicit leading dot.
GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE


def normalize_matcher(match: object) -> Matcher | None:
    """Resolve *match* once into a ``(filename) -> bool`` predicate.

    Accepts a callable, a compiled regular expression, a glob string, or a
    list/tuple of glob strings. ``None`` and ``""`` mean "no matcher".
    """
    if match is None or (isinstance(match, str) and not match):
        return None
    if isinstance(match, re.Pattern):
        return _regex_matcher(match)
    if callable(match):
        return match
    if isinstance(match, str):
        return _glob_matcher([match])
    if isinstance(match, (list, tuple)) and all(isinstance(p, str) for p in match):
        return _glob_matcher(match)
    raise BadMatcherError(match)


def _regex_matcher(pattern: re.Pattern) -> Matcher:
    def matcher(filename: str) -> bool:
        return pattern.search(filename) is not None

    return matcher


def _glob_matcher(patterns: Sequence[str]) -> Matcher:
    # Patterns apply in order: a plain pattern includes the files it matches,
    # a "!pattern" removes them again. Nothing is included to begin with.
    compiled = []
    for pattern in patterns:
        negated = pattern.startswith("!")
        if negated:
            pattern = pattern[1:]
        compiled.append((negated, glob.compile(pattern, flags=GLOB_FLAGS)))
    logger.debug("compiled glob matcher from %d pattern(s)", len(compiled))

    def matcher(filename: str) -> bool:
        path = filename.replace("\\", "/")
        included = False
        for negated, pattern in compiled:
            if included == negated and pattern.match(path):
                included = not negated
        return included

    return matcher
