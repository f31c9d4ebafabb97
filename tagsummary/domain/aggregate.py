from typing import Iterable

from tagsummary.schemas import Fragment


def tag_sort_key(tag: str) -> str:
    """
    Ordering key for fragments: code-point comparison of the tag, independent
    of the host locale.
    """
    return tag


def aggregate(fragments: Iterable[Fragment]) -> str:
    """
    Concatenate fragments ordered by source tag.

    `sorted` is stable, so fragments sharing a tag keep the order they were
    produced in (document path order, then occurrence order).
    """
    ordered = sorted(fragments, key=lambda f: tag_sort_key(f.source_tag))
    return "".join(f.text for f in ordered)
