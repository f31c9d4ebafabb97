"""Directive language: parsing add-summary blocks into tag queries."""

import logging
import re
from typing import Dict, List, Optional, Tuple

from tagsummary.domain.tags import is_valid_tag
from tagsummary.schemas import DirectiveBlock, Query

logger = logging.getLogger(__name__)

DIRECTIVE_LANGUAGE = "add-summary"

_DIRECTIVE_LINE = re.compile(r"^\s*(tags|include|exclude):(.+)$")
# Besides letters, a directive value may only hold these characters
_DIRECTIVE_CHARS = frozenset("0123456789_-/# ")
_OPEN_FENCE = re.compile(r"^\s*```" + re.escape(DIRECTIVE_LANGUAGE) + r"\s*$")
_CLOSE_FENCE = re.compile(r"^\s*```\s*$")

_KEYWORD_FIELDS = {
    "tags": "include_or",
    "include": "include_and",
    "exclude": "exclude",
}


def is_directive_value(content: str) -> bool:
    return bool(content) and all(ch.isalpha() or ch in _DIRECTIVE_CHARS for ch in content)


def parse_tag_list(content: str) -> Tuple[str, ...]:
    """Split a tag list on whitespace, keep valid tags in first-appearance order."""
    tokens = [t.strip() for t in content.split()]
    return tuple(dict.fromkeys(t for t in tokens if is_valid_tag(t)))


def parse_directive(source: str) -> Query:
    """
    Parse the body of an add-summary block.

    Recognised lines are `tags:` (any of), `include:` (all of) and `exclude:`
    (none of). Malformed lines and tokens are dropped silently; when a keyword
    repeats, the last line wins.
    """
    fields: Dict[str, Tuple[str, ...]] = {}
    for line in source.split("\n"):
        if not line:
            continue
        match = _DIRECTIVE_LINE.match(line)
        if not match or not is_directive_value(match.group(2)):
            continue
        fields[_KEYWORD_FIELDS[match.group(1)]] = parse_tag_list(match.group(2))

    query = Query(**fields)
    logger.debug(
        "Directive parser: or=%s and=%s not=%s",
        query.include_or,
        query.include_and,
        query.exclude,
    )
    return query


def render_directive(include: str, exclude: Optional[str] = None) -> str:
    """Build the fenced block inserted by the "Add Summary" command."""
    block = f"```{DIRECTIVE_LANGUAGE}\n"
    block += f"tags: {include}\n"
    if exclude and exclude != "None":
        block += f"exclude: {exclude}\n"
    block += "```\n"
    return block


def find_directive_blocks(text: str) -> List[DirectiveBlock]:
    """Locate add-summary fences in a note. An unterminated fence is ignored."""
    lines = text.split("\n")
    blocks: List[DirectiveBlock] = []
    start: Optional[int] = None

    for idx, line in enumerate(lines):
        if start is None:
            if _OPEN_FENCE.match(line):
                start = idx
        elif _CLOSE_FENCE.match(line):
            blocks.append(
                DirectiveBlock(
                    body="\n".join(lines[start + 1:idx]),
                    start_line=start,
                    end_line=idx,
                )
            )
            start = None

    return blocks
