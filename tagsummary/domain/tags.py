"""Hierarchical tag matching and inline tag discovery."""

import re
from typing import Iterable, List, Sequence

from tagsummary.schemas import TagOccurrence

# "#" then a run without another "#"; the first character must be a letter
_VALID_TAG = re.compile(r"^#([^#]+)$")

# Inline tag: "#" at line start or after whitespace, with at least one non-digit
_INLINE_TAG = re.compile(r"(?<!\S)#([\w\-/]*[^\W\d][\w\-/]*)")

_FENCE = re.compile(r"^\s*(```|~~~)")


def matches(query: str, candidate: str) -> bool:
    """
    True when `candidate` is `query` itself or one of its descendants.

    Matching follows hierarchy boundaries: "#a/b" satisfies "#a" while "#ab"
    does not.
    """
    return candidate == query or candidate.startswith(query + "/")


def matches_any(queries: Iterable[str], candidate: str) -> bool:
    return any(matches(q, candidate) for q in queries)


def is_valid_tag(token: str) -> bool:
    match = _VALID_TAG.match(token)
    return bool(match) and match.group(1)[0].isalpha()


def _front_matter_end(lines: Sequence[str]) -> int:
    """Index of the first body line (0 when the note has no front matter)."""
    if not lines or lines[0].strip() != "---":
        return 0
    for idx in range(1, len(lines)):
        if lines[idx].strip() in ("---", "..."):
            return idx + 1
    return 0


def find_tag_occurrences(lines: Sequence[str]) -> List[TagOccurrence]:
    """
    Locate inline tags in a note body.

    Front matter and fenced code blocks are skipped, so an add-summary block
    never counts as tagging the note that hosts it.
    """
    occurrences: List[TagOccurrence] = []
    in_fence = False
    fence_marker = ""

    for idx in range(_front_matter_end(lines), len(lines)):
        line = lines[idx]
        fence = _FENCE.match(line)
        if fence:
            if not in_fence:
                in_fence, fence_marker = True, fence.group(1)
            elif fence.group(1) == fence_marker:
                in_fence = False
            continue
        if in_fence:
            continue

        for match in _INLINE_TAG.finditer(line):
            tag = "#" + match.group(1).rstrip("/")
            occurrences.append(TagOccurrence(tag=tag, start_line=idx, end_line=idx))

    return occurrences
