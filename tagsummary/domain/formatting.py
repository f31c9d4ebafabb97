"""Fragment formatting: block-anchor links, aliases, and callout wrapping."""

import re
from typing import Optional

from tagsummary.schemas import Document, Fragment, FormatOptions

# "^anchor" right before the line break
_BLOCK_ANCHOR = re.compile(r"\^([^^]+?)\n")
# first **bold** run
_BOLD_TEXT = re.compile(r"\*\*([^*]+?)\*\*")


def find_block_anchor(text: str) -> Optional[str]:
    match = _BLOCK_ANCHOR.search(text)
    return match.group(1).strip() if match else None


def find_bold_alias(text: str) -> Optional[str]:
    match = _BOLD_TEXT.search(text)
    return match.group(1).strip() if match else None


def source_link(text: str, doc: Document) -> str:
    """Build the `Source: **[[target|alias]]**` back-link for a fragment."""
    target = doc.path
    alias = doc.display_name

    anchor = find_block_anchor(text)
    if anchor:
        target = f"{target}#^{anchor}"
        alias = f"{alias}=>{anchor}"

    bold = find_bold_alias(text)
    if bold:
        alias = bold

    return f"Source: **[[{target}|{alias}]]**\n"


def wrap_callout(text: str, title: str) -> str:
    callout = f"> [!{title}]\n"
    for row in text.split("\n"):
        callout += "> " + row + "\n"
    return callout


def format_fragment(raw_line: str, tag: str, doc: Document, options: FormatOptions) -> Fragment:
    """Rewrite one extracted line into its final markdown, keeping the tag for ordering."""
    text = raw_line + "\n"

    if options.include_link:
        text = text + "\n" + source_link(text, doc)

    if options.include_callout:
        text = wrap_callout(text, doc.display_name)

    return Fragment(text=text + "\n\n", source_tag=tag)
