import logging
from typing import Iterable, List, Tuple

from tagsummary.domain.tags import matches_any
from tagsummary.schemas import Document

logger = logging.getLogger(__name__)


def extract_fragments_raw(doc: Document, valid_tags: Iterable[str]) -> List[Tuple[str, str]]:
    """
    Pull the source line of every occurrence matching one of `valid_tags`.

    Each matching occurrence yields exactly one `(line, tag)` pair in
    occurrence order. Only the start line is taken; multi-line spans are not
    expanded.
    """
    valid_tags = tuple(valid_tags)
    pairs: List[Tuple[str, str]] = []

    for occ in doc.occurrences:
        if not matches_any(valid_tags, occ.tag):
            continue
        if occ.start_line >= len(doc.lines):
            logger.warning(
                "Line extractor: %s has no line %d for %s; skipping",
                doc.path,
                occ.start_line,
                occ.tag,
            )
            continue
        pairs.append((doc.lines[occ.start_line], occ.tag))

    return pairs
