"""Document-level filtering for a tag query."""

import logging
from typing import List, Sequence

from tagsummary.domain.tags import matches, matches_any
from tagsummary.schemas import Document, Query, TagOccurrence

logger = logging.getLogger(__name__)


def _has_tag(query_tag: str, occurrences: Sequence[TagOccurrence]) -> bool:
    return any(matches(query_tag, occ.tag) for occ in occurrences)


def document_satisfies(occurrences: Sequence[TagOccurrence], query: Query) -> bool:
    """
    Evaluate the boolean part of a query against one document's tags.

    OR applies only when `include_or` is non-empty; every `include_and` tag
    must be present and no `exclude` tag may be.
    """
    if query.include_or and not any(_has_tag(t, occurrences) for t in query.include_or):
        return False
    if not all(_has_tag(t, occurrences) for t in query.include_and):
        return False
    if any(_has_tag(t, occurrences) for t in query.exclude):
        return False
    return True


def select_documents(corpus: Sequence[Document], query: Query) -> List[Document]:
    """Return the documents a query aggregates from, keeping corpus order."""
    valid_tags = query.valid_tags
    selected: List[Document] = []

    for doc in corpus:
        if doc.excluded_by_self or not doc.occurrences:
            continue
        if not any(matches_any(valid_tags, occ.tag) for occ in doc.occurrences):
            continue
        if not document_satisfies(doc.occurrences, query):
            logger.debug("Document filter: %s rejected by and/not clauses", doc.path)
            continue
        selected.append(doc)

    return selected
